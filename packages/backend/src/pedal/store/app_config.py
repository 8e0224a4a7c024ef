"""AppConfig store — the runtime-editable singleton.

Learn: Updates are a *merge*, never a replace. A field left out of the
update (None, empty string, or a non-positive number) keeps its current
value, and feature flags are merged key by key, so the config is always
fully populated.
"""

from typing import Optional

from pedal.store.base import LockedStore
from pedal.store.models import AppConfig


def default_app_config() -> AppConfig:
    return AppConfig(
        app_name="PEDAL Backend",
        version="2.0.0",
        max_users=10000,
        rate_limit=20,
        maintenance_mode=False,
        features={
            "websocket": True,
            "realtime": True,
            "comments": True,
            "reactions": True,
            "fileUpload": False,
            "notifications": True,
        },
    )


class AppConfigStore(LockedStore):
    def __init__(self, initial: Optional[AppConfig] = None) -> None:
        super().__init__()
        self._config = (initial or default_app_config()).copy()

    def get(self) -> AppConfig:
        with self._reading():
            return self._config.copy()

    def feature_enabled(self, name: str, default: bool = False) -> bool:
        with self._reading():
            return self._config.features.get(name, default)

    def update(
        self,
        app_name: Optional[str] = None,
        version: Optional[str] = None,
        max_users: Optional[int] = None,
        rate_limit: Optional[int] = None,
        maintenance_mode: Optional[bool] = None,
        features: Optional[dict[str, bool]] = None,
    ) -> AppConfig:
        with self._writing():
            cfg = self._config
            if app_name:
                cfg.app_name = app_name
            if version:
                cfg.version = version
            if max_users is not None and max_users > 0:
                cfg.max_users = max_users
            if rate_limit is not None and rate_limit > 0:
                cfg.rate_limit = rate_limit
            if maintenance_mode is not None:
                cfg.maintenance_mode = maintenance_mode
            if features:
                cfg.features.update(features)
            return cfg.copy()
