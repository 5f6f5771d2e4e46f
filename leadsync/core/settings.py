import logging
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):

    FACEBOOK_ACCESS_TOKEN: str = Field(
        default="",
        description="Access Token пользователя/системного пользователя Facebook",
    )
    FACEBOOK_API_VERSION: str = Field(default="v18.0", description="Версия Graph API")
    FACEBOOK_GRAPH_URL: str = Field(
        default="https://graph.facebook.com",
        description="Базовый URL Graph API",
    )
    GRAPH_PAGE_LIMIT: int = Field(default=100, description="Размер страницы при постраничной выборке")
    GRAPH_FOLLOW_PAGINATION: bool = Field(
        default=False,
        description="Дочитывать все страницы форм и лидов (по умолчанию только первая страница)",
    )
    GRAPH_TIMEOUT: float = Field(default=30.0, description="Таймаут запросов к Graph API в секундах")

    GOOGLE_SERVICE_ACCOUNT_JSON: str | None = Field(
        default=None,
        description="Путь до JSON-файла сервисного аккаунта Google Cloud (опционально)",
    )
    GOOGLE_CLIENT_EMAIL: str = Field(default="", description="client_email сервисного аккаунта")
    GOOGLE_PRIVATE_KEY: str = Field(default="", description="private_key сервисного аккаунта")
    SHEETS_APPEND_RANGE: str = Field(
        default="Sheet1!A1",
        description="Диапазон, в конец которого дописываются строки",
    )

    MAPPINGS_FILE: str = Field(
        default="page_mappings.json",
        description="Файл с сопоставлениями страница -> таблица",
    )

    APP_HOST: str = Field(default="0.0.0.0", description="Хост FastAPI-приложения")
    APP_PORT: int = Field(default=3000, description="Порт приложения")
    LOG_LEVEL: str = Field(default="INFO", description="Уровень логирования")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def log_level_value(self) -> int:
        """Возвращает числовой уровень логирования для logging.basicConfig."""
        return getattr(logging, self.LOG_LEVEL.upper(), logging.INFO)

    @property
    def graph_base_url(self) -> str:
        """Базовый URL Graph API с версией."""
        return f"{self.FACEBOOK_GRAPH_URL.rstrip('/')}/{self.FACEBOOK_API_VERSION}"

    @property
    def google_private_key(self) -> str:
        """Приватный ключ с восстановленными переводами строк."""
        return self.GOOGLE_PRIVATE_KEY.replace("\\n", "\n")


settings = Settings()
if settings.GOOGLE_SERVICE_ACCOUNT_JSON and not Path(settings.GOOGLE_SERVICE_ACCOUNT_JSON).is_absolute():
    base_path = Path(__file__).parent.parent.parent
    settings.GOOGLE_SERVICE_ACCOUNT_JSON = str(base_path / settings.GOOGLE_SERVICE_ACCOUNT_JSON)
