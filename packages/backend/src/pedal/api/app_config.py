"""AppConfig API — read and partially update the runtime config."""

import structlog
from fastapi import APIRouter, Depends

from pedal.auth.dependencies import CurrentIdentity, get_current_user
from pedal.deps import get_stores
from pedal.schemas.app_config import AppConfigRead, AppConfigUpdate
from pedal.store import Stores

logger = structlog.get_logger()
router = APIRouter(prefix="/config")


@router.get("", response_model=AppConfigRead)
def get_config(stores: Stores = Depends(get_stores)):
    return stores.config.get()


@router.put("", response_model=AppConfigRead)
def update_config(
    body: AppConfigUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    stores: Stores = Depends(get_stores),
):
    """Merge the given fields into the config; everything else is kept.

    Feature flags merge key by key — sending {"features": {"x": true}}
    adds or flips "x" without touching the other flags.
    """
    config = stores.config.update(**body.model_dump(exclude_none=True))
    logger.info(
        "config.updated",
        user_id=identity.user_id,
        fields=sorted(body.model_fields_set),
    )
    return config
