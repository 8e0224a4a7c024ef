"""Users API — profiles, search, and the follow graph.

Learn: Route order matters. /users/me and /users/search are declared
before /users/{user_id}, otherwise "me" and "search" would be parsed
as user ids.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from pedal.auth.dependencies import CurrentIdentity, get_current_user
from pedal.deps import get_publisher, get_stores
from pedal.events.types import USER_FOLLOWED
from pedal.realtime.pubsub import EventPublisher
from pedal.schemas.user import ProfileUpdate, UserIdList, UserRead, UserSearchResult
from pedal.services.social_service import SocialService
from pedal.services.user_service import UserService
from pedal.store import Stores
from pedal.store.errors import NotFoundError

router = APIRouter(prefix="/users")

DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 100


def _svc(stores: Stores = Depends(get_stores)) -> UserService:
    return UserService(stores)


def _social(stores: Stores = Depends(get_stores)) -> SocialService:
    return SocialService(stores)


# ─── Current user ───────────────────────────────────────


@router.get("/me", response_model=UserRead)
def get_me(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_svc),
):
    try:
        return svc.get(identity.user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")


@router.put("/me", response_model=UserRead)
def update_me(
    body: ProfileUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_svc),
):
    """Partial profile update — empty fields are left unchanged."""
    try:
        return svc.update_profile(identity.user_id, name=body.name, avatar=body.avatar)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")


# ─── Directory ──────────────────────────────────────────


@router.get("", response_model=list[UserRead])
def list_users(svc: UserService = Depends(_svc)):
    """All active users."""
    return svc.list_active()


@router.get("/search", response_model=UserSearchResult)
def search_users(
    q: str = Query("", description="Substring of name or email"),
    limit: int = Query(DEFAULT_SEARCH_LIMIT),
    svc: UserService = Depends(_svc),
):
    """Out-of-range limits fall back to the default instead of failing."""
    if not 0 < limit <= MAX_SEARCH_LIMIT:
        limit = DEFAULT_SEARCH_LIMIT
    users = [UserRead.model_validate(u) for u in svc.search(q, limit=limit)]
    return UserSearchResult(users=users, count=len(users))


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: str, svc: UserService = Depends(_svc)):
    try:
        return svc.get_active(user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")


# ─── Follow graph ───────────────────────────────────────


@router.get("/{user_id}/following", response_model=UserIdList)
def list_following(user_id: str, svc: SocialService = Depends(_social)):
    try:
        users = svc.following(user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    return UserIdList(users=users, count=len(users))


@router.get("/{user_id}/followers", response_model=UserIdList)
def list_followers(user_id: str, svc: SocialService = Depends(_social)):
    try:
        users = svc.followers(user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    return UserIdList(users=users, count=len(users))


@router.post("/{user_id}/follow")
def follow_user(
    user_id: str,
    background: BackgroundTasks,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SocialService = Depends(_social),
    publisher: EventPublisher = Depends(get_publisher),
):
    try:
        svc.follow(identity.user_id, user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    publisher.publish_event(
        background, USER_FOLLOWED, {"followerId": identity.user_id, "userId": user_id}
    )
    return {"ok": True}


@router.delete("/{user_id}/follow")
def unfollow_user(
    user_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SocialService = Depends(_social),
):
    """Idempotent — unfollowing someone you don't follow still succeeds."""
    svc.unfollow(identity.user_id, user_id)
    return {"ok": True}
