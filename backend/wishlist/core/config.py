from typing import Annotated, Any, Literal

from pydantic import AnyUrl, BeforeValidator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from wishlist.application.policy import RetryPolicy, WishlistPolicy


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Wishlist Service"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "test", "staging", "production"] = "local"

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    # Document store
    STORE_BACKEND: Literal["mongo", "memory"] = "mongo"
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "wishlist_db"
    MONGODB_COLLECTION: str = "wishlists"
    STORE_TIMEOUT_SECONDS: float = 2.0

    # Wishlist rules
    WISHLIST_MAX_ITEMS: int = 20
    WISHLIST_NOTE_MAX_LENGTH: int = 500

    # Optimistic concurrency retries
    CONCURRENCY_MAX_RETRIES: int = 3
    RETRY_BASE_DELAY_SECONDS: float = 0.01
    RETRY_MAX_DELAY_SECONDS: float = 0.25
    RETRY_JITTER: bool = True

    def policy(self) -> WishlistPolicy:
        """Build the orchestration policy handed to the application service."""
        return WishlistPolicy(
            max_items=self.WISHLIST_MAX_ITEMS,
            note_max_length=self.WISHLIST_NOTE_MAX_LENGTH,
            store_timeout_seconds=self.STORE_TIMEOUT_SECONDS,
            retry=RetryPolicy(
                max_retries=self.CONCURRENCY_MAX_RETRIES,
                base_delay_seconds=self.RETRY_BASE_DELAY_SECONDS,
                max_delay_seconds=self.RETRY_MAX_DELAY_SECONDS,
                jitter=self.RETRY_JITTER,
            ),
        )


settings = Settings()
