"""Pydantic schemas for the runtime AppConfig."""

from typing import Optional

from pydantic import Field

from pedal.schemas.base import ApiModel


class AppConfigRead(ApiModel):
    app_name: str
    version: str
    max_users: int
    rate_limit: int
    maintenance_mode: bool
    features: dict[str, bool]


class AppConfigUpdate(ApiModel):
    """Partial update — omitted fields keep their current value."""

    app_name: Optional[str] = Field(None, max_length=100)
    version: Optional[str] = Field(None, max_length=32)
    max_users: Optional[int] = None
    rate_limit: Optional[int] = None
    maintenance_mode: Optional[bool] = None
    features: Optional[dict[str, bool]] = None
