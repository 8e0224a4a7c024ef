"""CLI tests — Click commands against an in-process app.

Learn: _client() is monkeypatched to return an httpx client wired to
the ASGI app through ASGITransport, so the commands exercise the real
API without a running server.
"""

import httpx
import pytest
from click.testing import CliRunner

from pedal.auth.jwt import issue_token
from pedal.cli import main as cli


@pytest.fixture()
def runner(app, monkeypatch):
    def _client(token=None):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://test",
            headers=headers,
        )

    monkeypatch.setattr(cli, "_client", _client)
    monkeypatch.delenv("PEDAL_TOKEN", raising=False)
    return CliRunner()


def test_version(runner):
    result = runner.invoke(cli.main, ["--version"])
    assert result.exit_code == 0
    assert "2.0.0" in result.output


def test_health(runner):
    result = runner.invoke(cli.main, ["health"])
    assert result.exit_code == 0
    assert "PEDAL 2.0.0" in result.output
    assert "not_configured" in result.output


def test_stats(runner):
    result = runner.invoke(cli.main, ["stats"])
    assert result.exit_code == 0
    assert "3 total" in result.output
    assert "Messages:  0" in result.output


def test_feed(runner):
    result = runner.invoke(cli.main, ["feed", "--token", issue_token("ram")])
    assert result.exit_code == 0
    assert "Feed (2)" in result.output
    assert "p-2" in result.output
    assert "p-1" in result.output


def test_feed_requires_token(runner):
    result = runner.invoke(cli.main, ["feed"])
    assert result.exit_code == 1
    assert "--token required" in result.output


def test_feed_rejected_token(runner):
    result = runner.invoke(cli.main, ["feed", "--token", "garbage"])
    assert result.exit_code == 1
    assert "Error 401" in result.output


def test_post(runner, stores):
    result = runner.invoke(
        cli.main, ["post", "Sunrise loop done", "--token", issue_token("hanuma")]
    )
    assert result.exit_code == 0
    assert "Posted post_" in result.output
    assert stores.posts.list_all()[0].text == "Sunrise loop done"


def test_post_token_from_env(runner, stores, monkeypatch):
    monkeypatch.setenv("PEDAL_TOKEN", issue_token("dummy"))
    result = runner.invoke(cli.main, ["post", "env token"])
    assert result.exit_code == 0
    assert stores.posts.list_all()[0].author_id == "dummy"
