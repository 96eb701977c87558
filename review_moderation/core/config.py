from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import AnyUrl, BeforeValidator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


def get_env_file_path() -> str | None:
    """
    Returns the file path to the .env file.

    Returns:
        str | None: The file path to the .env file or None if not found.
    """

    possible_paths = [
        ".env",
    ]

    for path in possible_paths:
        if Path(path).exists():
            abs_path = Path(path).resolve()
            return str(abs_path)

    return None


class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=get_env_file_path(),
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "review-moderation"

    # Frontend Configuration
    FRONTEND_HOST: str = "http://localhost:3000"
    ENVIRONMENT: Literal["development", "production"] = "development"

    BACKEND_CORS_ORIGINS: Annotated[list[AnyUrl] | str, BeforeValidator(parse_cors)] = [
        "http://localhost:5173",
        "http://127.0.0.1:5500",
    ]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        """
        Combines backend CORS origins with the frontend host.

        Example Input:
        - BACKEND_CORS_ORIGINS = ["http://localhost:5173/", "http://127.0.0.1:5500"]
        - FRONTEND_HOST = "http://localhost:3000"

        Result: ["http://localhost:5173", "http://127.0.0.1:5500", "http://localhost:3000"]
        """
        origins = [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]
        if self.FRONTEND_HOST not in origins:
            origins.append(self.FRONTEND_HOST)
        return origins

    # Auth Configuration
    # - The upstream authenticator forwards the verified caller in these headers.
    AUTH_USER_ID_HEADER: str = "X-User-Id"
    AUTH_USER_ROLE_HEADER: str = "X-User-Role"

    # DB Config
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB_NAME: str = "review_moderation"


@lru_cache  # builds once, the first time it's asked for
def get_settings() -> Settings:
    return Settings()
