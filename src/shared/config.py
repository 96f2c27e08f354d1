"""Environment-driven settings for the storefront API."""

import os
from functools import lru_cache

from pydantic import BaseModel

_LOG_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


def get_env() -> str:
    """Name of the running environment, lower-cased."""
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or "development").lower()


class Settings(BaseModel):
    env: str = "development"
    log_level: str = "INFO"
    log_dir: str | None = "logs"
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "skyelectrotech"
    jwt_secret: str = "dev-secret-change-me"
    jwt_algorithm: str = "HS256"
    cors_origins: list[str] = ["*"]

    @property
    def is_development(self) -> bool:
        return self.env == "development"

    @classmethod
    def from_env(cls) -> "Settings":
        env = get_env()
        # Tests log to the console only unless LOG_DIR says otherwise
        default_log_dir = None if env == "test" else "logs"
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            env=env,
            log_level=os.getenv("LOG_LEVEL", _LOG_LEVELS.get(env, "INFO")),
            log_dir=os.getenv("LOG_DIR", default_log_dir) or None,
            mongodb_uri=os.getenv("MONGODB_URI", "mongodb://localhost:27017"),
            mongodb_database=os.getenv("MONGODB_DATABASE", "skyelectrotech"),
            jwt_secret=os.getenv("JWT_SECRET", "dev-secret-change-me"),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            cors_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
