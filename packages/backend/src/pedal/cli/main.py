"""PEDAL CLI — run the server and poke at a running instance.

Usage:
    pedal serve                                  # Run the API with uvicorn
    pedal health                                 # Server + dependency status
    pedal stats                                  # Live counters
    pedal feed --token $TOKEN                    # Your feed, newest first
    pedal post "hello world" --token $TOKEN      # Publish a post
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import os
import sys
from typing import Optional

import click
import httpx

from pedal import __version__

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:8080"


def _api_url() -> str:
    return os.environ.get("PEDAL_API_URL", DEFAULT_API_URL).rstrip("/")


def _client(token: Optional[str] = None) -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the PEDAL backend."""
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    return httpx.AsyncClient(base_url=_api_url(), headers=headers, timeout=30.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _require_token(token: Optional[str]) -> str:
    """Resolve the access token from --token or PEDAL_TOKEN."""
    tok = token or os.environ.get("PEDAL_TOKEN")
    if not tok:
        click.secho(
            "Error: --token required (or set PEDAL_TOKEN env var)",
            fg="red",
            err=True,
        )
        sys.exit(1)
    return tok


def _fail(r: httpx.Response):
    """Print the API's error detail and exit non-zero."""
    try:
        detail = r.json().get("detail", r.text)
    except ValueError:
        detail = r.text
    click.secho(f"Error {r.status_code}: {detail}", fg="red", err=True)
    sys.exit(1)


def _status_color(status: str) -> str:
    colors = {
        "ok": "green",
        "up": "green",
        "degraded": "yellow",
        "not_configured": "white",
        "down": "red",
    }
    return colors.get(status, "white")


def _print_post(p: dict):
    likes = len(p.get("reactions", {}))
    click.echo(f"  {p['id']:22s}  {p['authorId']:10s}  {likes:3d} ♥  {p['text'][:60]}")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="pedal")
def main():
    """PEDAL — social backend with a live channel."""


# ---------------------------------------------------------------------------
# pedal serve
# ---------------------------------------------------------------------------


@main.command()
@click.option("--host", default=None, help="Bind address (default: PEDAL_HOST)")
@click.option("--port", "-p", type=int, default=None, help="Port (default: PEDAL_PORT)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server."""
    import uvicorn

    from pedal.config import settings

    uvicorn.run(
        "pedal.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


# ---------------------------------------------------------------------------
# pedal health
# ---------------------------------------------------------------------------


@main.command()
def health():
    """Show server and dependency health."""
    _run(_health_impl())


async def _health_impl():
    async with _client() as c:
        try:
            r = await c.get("/api/health")
        except httpx.HTTPError as e:
            click.secho(f"Server unreachable at {_api_url()}: {e}", fg="red", err=True)
            sys.exit(1)
        if r.status_code != 200:
            _fail(r)
        data = r.json()

    click.secho(f"PEDAL {data['version']}", bold=True)
    for key in ("status", "db", "redis"):
        value = data[key]
        click.echo(f"  {key:8s}  {click.style(value, fg=_status_color(value))}")


# ---------------------------------------------------------------------------
# pedal stats
# ---------------------------------------------------------------------------


@main.command()
def stats():
    """Show live counters."""
    _run(_stats_impl())


async def _stats_impl():
    async with _client() as c:
        r = await c.get("/api/stats/live")
        if r.status_code != 200:
            _fail(r)
        data = r.json()

    users = data["users"]
    posts = data["posts"]
    click.secho("Live stats:", bold=True)
    click.echo(
        f"  Users:     {users['total']} total, {users['active']} active, "
        f"{users['online']} online"
    )
    click.echo(f"  Posts:     {posts['total']} total, {posts['today']} today")
    click.echo(f"  Comments:  {data['comments']['total']}")
    click.echo(f"  Messages:  {data['messages']['total']}")


# ---------------------------------------------------------------------------
# pedal feed
# ---------------------------------------------------------------------------


@main.command()
@click.option("--token", help="Access token (or set PEDAL_TOKEN)")
@click.option("--limit", "-l", default=20, help="Max posts to show")
def feed(token: Optional[str], limit: int):
    """Show your feed: your posts and posts from people you follow."""
    _run(_feed_impl(_require_token(token), limit))


async def _feed_impl(token: str, limit: int):
    async with _client(token) as c:
        r = await c.get("/api/social/feed")
        if r.status_code != 200:
            _fail(r)
        posts = r.json()

    if not posts:
        click.echo("Your feed is empty. Follow someone or write a post.")
        return

    click.secho(f"Feed ({len(posts)}):", bold=True)
    for p in posts[:limit]:
        _print_post(p)


# ---------------------------------------------------------------------------
# pedal post
# ---------------------------------------------------------------------------


@main.command()
@click.argument("text")
@click.option("--token", help="Access token (or set PEDAL_TOKEN)")
def post(text: str, token: Optional[str]):
    """Publish a post. TEXT is the post body."""
    _run(_post_impl(text, _require_token(token)))


async def _post_impl(text: str, token: str):
    async with _client(token) as c:
        r = await c.post("/api/social/posts", json={"text": text})
        if r.status_code != 201:
            _fail(r)
        created = r.json()

    click.secho(f"Posted {created['id']}", fg="green")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
