"""Messages API — a shared, append-only chat log.

Mounted behind get_current_user at the router level (see api/__init__).
"""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from pedal.auth.dependencies import CurrentIdentity, get_current_user
from pedal.deps import get_publisher, get_stores
from pedal.events.types import MESSAGE_SENT
from pedal.realtime.pubsub import EventPublisher
from pedal.schemas.social import MessageCreate, MessageRead
from pedal.services.social_service import SocialService
from pedal.store import Stores
from pedal.store.errors import InvalidInputError

router = APIRouter(prefix="/messages")


def _svc(stores: Stores = Depends(get_stores)) -> SocialService:
    return SocialService(stores)


@router.get("", response_model=list[MessageRead])
def list_messages(svc: SocialService = Depends(_svc)):
    return svc.list_messages()


@router.post("", response_model=MessageRead, status_code=201)
def create_message(
    body: MessageCreate,
    background: BackgroundTasks,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SocialService = Depends(_svc),
    publisher: EventPublisher = Depends(get_publisher),
):
    try:
        message = svc.send_message(identity.user_id, body.text)
    except InvalidInputError:
        raise HTTPException(status_code=400, detail="invalid payload")
    read = MessageRead.model_validate(message)
    publisher.publish_event(
        background, MESSAGE_SENT, {"message": read.model_dump(mode="json", by_alias=True)}
    )
    return read
