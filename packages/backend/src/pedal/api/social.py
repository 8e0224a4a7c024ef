"""Social API — posts, reactions, comments, and the feed.

Learn: Routes translate HTTP to SocialService calls and map its typed
errors to status codes:
- NotFoundError → 404
- UnauthorizedError (not the author) → 403
- InvalidInputError (blank text) → 400

Every successful mutation is also published on the live channel
(when the "realtime" feature flag is on) after the response is sent.
"""

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from pedal.auth.dependencies import CurrentIdentity, get_current_user
from pedal.deps import get_publisher, get_stores
from pedal.events.types import (
    COMMENT_ADDED,
    POST_CREATED,
    POST_DELETED,
    POST_REACTED,
    POST_UPDATED,
)
from pedal.realtime.pubsub import EventPublisher
from pedal.schemas.social import (
    CommentCreate,
    CommentRead,
    PostCreate,
    PostRead,
    PostUpdate,
    ReactionCreate,
    ReactionsRead,
)
from pedal.services.social_service import SocialService
from pedal.store import Stores
from pedal.store.errors import InvalidInputError, NotFoundError, UnauthorizedError

router = APIRouter(prefix="/social")


def _svc(stores: Stores = Depends(get_stores)) -> SocialService:
    return SocialService(stores)


def _dump(model) -> dict:
    return model.model_dump(mode="json", by_alias=True)


# ─── Feed ───────────────────────────────────────────────


@router.get("/feed", response_model=list[PostRead])
def get_feed(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SocialService = Depends(_svc),
):
    """Your posts plus posts by everyone you follow, newest first."""
    return svc.feed(identity.user_id)


# ─── Posts ──────────────────────────────────────────────


@router.get("/posts", response_model=list[PostRead])
def list_posts(svc: SocialService = Depends(_svc)):
    return svc.list_posts()


@router.post("/posts", response_model=PostRead, status_code=201)
def create_post(
    body: PostCreate,
    background: BackgroundTasks,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SocialService = Depends(_svc),
    publisher: EventPublisher = Depends(get_publisher),
):
    try:
        post = svc.create_post(identity.user_id, body.text)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    read = PostRead.model_validate(post)
    publisher.publish_event(background, POST_CREATED, {"post": _dump(read)})
    return read


@router.get("/posts/{post_id}", response_model=PostRead)
def get_post(post_id: str, svc: SocialService = Depends(_svc)):
    try:
        return svc.get_post(post_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")


@router.put("/posts/{post_id}", response_model=PostRead)
def update_post(
    post_id: str,
    body: PostUpdate,
    background: BackgroundTasks,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SocialService = Depends(_svc),
    publisher: EventPublisher = Depends(get_publisher),
):
    """Edit your own post."""
    try:
        post = svc.update_post(post_id, identity.user_id, body.text)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")
    except UnauthorizedError:
        raise HTTPException(status_code=403, detail="Only the author can edit this post")
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    read = PostRead.model_validate(post)
    publisher.publish_event(background, POST_UPDATED, {"post": _dump(read)})
    return read


@router.delete("/posts/{post_id}")
def delete_post(
    post_id: str,
    background: BackgroundTasks,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SocialService = Depends(_svc),
    publisher: EventPublisher = Depends(get_publisher),
):
    """Delete your own post."""
    try:
        svc.delete_post(post_id, identity.user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")
    except UnauthorizedError:
        raise HTTPException(status_code=403, detail="Only the author can delete this post")
    publisher.publish_event(background, POST_DELETED, {"postId": post_id})
    return {"message": "post deleted"}


# ─── Reactions ──────────────────────────────────────────


@router.post("/posts/{post_id}/react", response_model=PostRead)
def react_to_post(
    post_id: str,
    background: BackgroundTasks,
    body: Optional[ReactionCreate] = None,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SocialService = Depends(_svc),
    publisher: EventPublisher = Depends(get_publisher),
):
    """React to a post. No body (or no type) means "like"."""
    kind = body.type if body else None
    try:
        post = svc.react(post_id, identity.user_id, kind)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")
    publisher.publish_event(
        background,
        POST_REACTED,
        {
            "postId": post_id,
            "userId": identity.user_id,
            "reaction": post.reactions[identity.user_id],
        },
    )
    return post


@router.get("/posts/{post_id}/reactions", response_model=ReactionsRead)
def get_post_reactions(post_id: str, svc: SocialService = Depends(_svc)):
    try:
        return ReactionsRead(reactions=svc.reactions(post_id))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")


# ─── Comments ───────────────────────────────────────────


@router.post("/posts/{post_id}/comments", response_model=CommentRead, status_code=201)
def add_comment(
    post_id: str,
    body: CommentCreate,
    background: BackgroundTasks,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SocialService = Depends(_svc),
    publisher: EventPublisher = Depends(get_publisher),
):
    try:
        comment = svc.add_comment(post_id, identity.user_id, body.text)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")
    read = CommentRead.model_validate(comment)
    publisher.publish_event(background, COMMENT_ADDED, {"comment": _dump(read)})
    return read


@router.get("/posts/{post_id}/comments", response_model=list[CommentRead])
def get_comments(post_id: str, svc: SocialService = Depends(_svc)):
    """Comments on a post, oldest first. Unknown posts just have none."""
    return svc.comments_for(post_id)
