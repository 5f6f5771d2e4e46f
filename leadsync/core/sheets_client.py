import asyncio
import logging
import threading
from typing import Any

import gspread
from google.oauth2.service_account import Credentials

from leadsync.core.settings import settings

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


class SheetsClient:
    """Клиент для записи строк в Google Sheets."""

    def __init__(self, append_range: str | None = None) -> None:
        """Инициализация клиента Google Sheets."""
        self.append_range = append_range or settings.SHEETS_APPEND_RANGE
        self._client: gspread.Client | None = None
        self._init_lock = threading.Lock()

    def _get_credentials(self) -> Credentials:
        """
        Получение credentials сервисного аккаунта.

        Берётся JSON-файл, если он указан, иначе client_email и private_key из окружения.

        Returns:
            Credentials: Google OAuth2 credentials
        """
        if settings.GOOGLE_SERVICE_ACCOUNT_JSON:
            return Credentials.from_service_account_file(settings.GOOGLE_SERVICE_ACCOUNT_JSON, scopes=SCOPES)

        return Credentials.from_service_account_info(
            {
                "type": "service_account",
                "client_email": settings.GOOGLE_CLIENT_EMAIL,
                "private_key": settings.google_private_key,
                "token_uri": TOKEN_URI,
            },
            scopes=SCOPES,
        )

    def _get_client(self) -> gspread.Client:
        if self._client is None:
            with self._init_lock:
                if self._client is None:
                    self._client = gspread.authorize(self._get_credentials())
                    logger.info("Авторизация в Google Sheets выполнена")
        return self._client

    async def append_row(self, values: list[Any], sheet_id: str) -> dict[str, Any]:
        """
        Добавление одной строки в конец диапазона таблицы.

        Значения передаются как USER_ENTERED: таблица сама определяет типы и форматы.

        Args:
            values: Значения ячеек строки
            sheet_id: ID Google-таблицы

        Returns:
            dict[str, Any]: Ответ Sheets API
        """

        def append_row_sync() -> dict[str, Any]:
            # open_by_key запрашивает метаданные таблицы, поэтому пишем напрямую через HTTP-клиент
            return self._get_client().http_client.values_append(
                sheet_id,
                self.append_range,
                params={"valueInputOption": "USER_ENTERED"},
                body={"values": [values]},
            )

        try:
            result = await asyncio.to_thread(append_row_sync)
        except Exception as e:
            logger.error("Ошибка добавления строки в таблицу %s: %s", sheet_id, e)
            raise

        logger.debug("Добавлена строка в таблицу %s: %s", sheet_id, values)
        return result
