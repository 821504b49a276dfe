"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars with TASKIFY_ prefix.

Learn: The signing secret and the bcrypt work factor live here and
nowhere else. They are read once at startup, handed to the TokenService
and CredentialHasher, and never change for the life of the process.
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """All app configuration. Set via TASKIFY_* env vars."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./taskify.db"

    # Auth
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    token_expire_minutes: int = Field(default=24 * 60, gt=0)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Server
    environment: str = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS (the React dev server)
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    model_config = {"env_prefix": "TASKIFY_"}

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure the signing secret is changed in non-development environments."""
        if not self.jwt_secret:
            raise ValueError("TASKIFY_JWT_SECRET must not be empty")
        if (
            self.environment != "development"
            and self.jwt_secret == DEFAULT_JWT_SECRET
        ):
            raise ValueError(
                "TASKIFY_JWT_SECRET must be set to a secure value in "
                "non-development environments. Generate one with: "
                'python -c "import secrets; print(secrets.token_urlsafe(32))"'
            )
        return self


# Singleton: import this everywhere
settings = Settings()
