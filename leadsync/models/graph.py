from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DIRECT_ACCESS = "Direct Access"


class LeadField(BaseModel):
    """Поле формы в лиде (элемент field_data)."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    values: list[Any] = Field(default_factory=list)
    value: Any = None

    @property
    def cell_value(self) -> Any:
        """Значение ячейки: несколько значений объединяются через запятую."""
        if self.values:
            if len(self.values) == 1:
                return self.values[0]
            return ", ".join(str(v) for v in self.values)
        return self.value if self.value is not None else ""


class Lead(BaseModel):
    """Лид из формы Facebook."""

    model_config = ConfigDict(extra="allow")

    id: str
    created_time: str | None = None
    field_data: list[LeadField] = Field(default_factory=list)

    def to_row(self, page_label: str) -> list[Any]:
        """Строка для таблицы: id, время создания, страница, значения полей."""
        return [self.id, self.created_time, page_label, *(field.cell_value for field in self.field_data)]


class Page(BaseModel):
    """Страница Facebook, доступная напрямую или через бизнес."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str | None = None
    access_token: str | None = None
    business_name: str | None = None

    def to_public(self) -> dict[str, Any]:
        """Краткое представление для /list-pages."""
        return {"id": self.id, "name": self.name, "business": self.business_name or DIRECT_ACCESS}


class Business(BaseModel):
    """Бизнес-аккаунт, владеющий страницами."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str | None = None
