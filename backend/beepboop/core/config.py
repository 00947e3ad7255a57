from decimal import Decimal
from typing import Annotated, Any, Literal

from pydantic import AnyUrl, BeforeValidator, HttpUrl, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",")]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_ignore_empty=True, extra="ignore"
    )

    PROJECT_NAME: str = "Beep Boop Chat"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    SENTRY_DSN: HttpUrl | None = None

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    SQLALCHEMY_DATABASE_URI: str = "sqlite:///./beepboop.db"

    # Model completion service (OpenAI-compatible chat completions endpoint)
    COMPLETION_API_URL: str = "http://localhost:1234/v1/chat/completions"
    COMPLETION_TIMEOUT_SECONDS: float = 120.0
    COMPLETION_TEMPERATURE: float = 0.7
    COMPLETION_MAX_TOKENS: int = -1  # -1 means unbounded

    # Model seeded on first start-up
    DEFAULT_MODEL_NAME: str = "phi-4-mini-instruct"
    DEFAULT_MODEL_PATH: str = "microsoft/phi-4-mini-instruct"
    DEFAULT_MODEL_TOKEN_COST: Decimal = Decimal("1")

    DEFAULT_USER_CREDITS: Decimal = Decimal("10")
    MAX_BOOKMARKS_PER_CHAT: int = 10
    CHAT_TITLE_MAX_LENGTH: int = 50

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]


settings = Settings()  # type: ignore
