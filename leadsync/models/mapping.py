from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SHEET_NAME = "Leads"


class PageSheetMapping(BaseModel):
    """Сопоставление страницы Facebook с Google-таблицей."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    page_id: str = Field(..., alias="pageId", description="ID страницы Facebook")
    page_name: str | None = Field(None, alias="pageName", description="Название страницы")
    sheet_id: str = Field(..., alias="sheetId", description="ID Google-таблицы")
    sheet_name: str = Field(default=DEFAULT_SHEET_NAME, alias="sheetName", description="Название листа")
    last_sync: datetime | None = Field(None, alias="lastSync", description="Время последней синхронизации")

    @property
    def label(self) -> str:
        """Подпись страницы для строки в таблице."""
        return self.page_name or self.page_id

    def to_public(self) -> dict:
        """Сериализация в camelCase, как в файле и ответах API."""
        return self.model_dump(mode="json", by_alias=True)


class SetupMappingRequest(BaseModel):
    """Запрос на создание сопоставления страница -> таблица."""

    pageId: str | None = None
    pageName: str | None = None
    sheetId: str | None = None
    sheetName: str | None = None


class SetupPageRequest(BaseModel):
    """Запрос на настройку страницы по её ID."""

    pageId: str | None = None
    sheetId: str | None = None


class SyncLeadsRequest(BaseModel):
    """Запрос на синхронизацию лидов формы."""

    formId: str | None = None
    pageId: str | None = None
