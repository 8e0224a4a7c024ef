"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars with PEDAL_ prefix.
No YAML files, no file-based config — just env vars (12-factor app style).

Learn: This is *process* configuration (secrets, URLs, timeouts). The
runtime-editable AppConfig (feature flags, maintenance mode) lives in
pedal.store.app_config and is changed through the API.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All process configuration. Set via PEDAL_* env vars."""

    # Optional dependencies: empty means "not configured"
    database_url: str = ""
    redis_url: str = ""

    # Auth
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 24 * 60
    refresh_token_expire_days: int = 30
    bcrypt_rounds: int = 12

    # Server
    environment: str = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Rate limiting
    rate_limit_rpm: int = 20  # requests per minute per IP
    rate_limit_auth_rpm: int = 10  # stricter limit for login/register

    # Timeouts
    health_timeout_seconds: float = 2.0
    ws_send_timeout_seconds: float = 5.0
    slow_request_seconds: float = 1.0

    # Start with the demo users/posts/follows loaded
    seed_demo_data: bool = True

    model_config = {"env_prefix": "PEDAL_"}

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure sensitive defaults are changed in non-development environments."""
        if (
            self.environment != "development"
            and self.jwt_secret == "change-me-in-production"
        ):
            raise ValueError(
                "PEDAL_JWT_SECRET must be set to a secure value in "
                "non-development environments. Generate one with: "
                'python -c "import secrets; print(secrets.token_urlsafe(32))"'
            )
        return self


# Singleton, import this everywhere
settings = Settings()
