import asyncio
import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from leadsync.models.mapping import PageSheetMapping

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class MappingStore(ABC):
    """Хранилище сопоставлений страница -> таблица."""

    def __init__(self) -> None:
        self._mappings: dict[str, PageSheetMapping] = {}

    def get(self, page_id: str) -> PageSheetMapping | None:
        return self._mappings.get(page_id)

    def set(self, page_id: str, mapping: PageSheetMapping) -> None:
        """Полная перезапись сопоставления, без слияния полей."""
        if mapping.page_id != page_id:
            mapping = mapping.model_copy(update={"page_id": page_id})
        self._mappings[page_id] = mapping

    def delete(self, page_id: str) -> bool:
        return self._mappings.pop(page_id, None) is not None

    def list(self) -> list[tuple[str, PageSheetMapping]]:
        return list(self._mappings.items())

    def __len__(self) -> int:
        return len(self._mappings)

    @abstractmethod
    async def persist(self) -> None:
        """Сохранить текущее содержимое целиком."""

    @abstractmethod
    async def load(self) -> None:
        """Загрузить содержимое при старте приложения."""


class InMemoryMappingStore(MappingStore):
    """Хранилище без сохранения на диск (для тестов)."""

    def __init__(self, mappings: dict[str, PageSheetMapping] | None = None) -> None:
        super().__init__()
        self.persist_calls = 0
        for page_id, mapping in (mappings or {}).items():
            self.set(page_id, mapping)

    async def persist(self) -> None:
        self.persist_calls += 1

    async def load(self) -> None:
        return None


class JsonFileMappingStore(MappingStore):
    """
    Хранилище сопоставлений в JSON-файле.

    Формат файла: {"version": 1, "mappings": {pageId: {...}}}.
    Старый формат без версии (объект, ключи которого - pageId) тоже читается.
    """

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)

    def _dump(self) -> str:
        document = {
            "version": SCHEMA_VERSION,
            "mappings": {page_id: mapping.to_public() for page_id, mapping in self._mappings.items()},
        }
        return json.dumps(document, indent=2, ensure_ascii=False)

    async def persist(self) -> None:
        content = self._dump()

        def write_sync() -> None:
            if self.path.parent and not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            tmp_path.write_text(content, encoding="utf-8")
            os.replace(tmp_path, self.path)

        await asyncio.to_thread(write_sync)
        logger.info("Сохранено %s сопоставлений в %s", len(self._mappings), self.path)

    async def load(self) -> None:
        self._mappings = {}
        try:
            raw = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
            document = json.loads(raw)
        except FileNotFoundError:
            logger.info("Файл сопоставлений %s не найден, начинаем с пустого хранилища", self.path)
            return
        except Exception as e:
            logger.error("Ошибка загрузки сопоставлений из %s: %s", self.path, e, exc_info=True)
            return

        records = self._extract_records(document)
        for page_id, record in records.items():
            try:
                mapping = PageSheetMapping.model_validate({**record, "pageId": page_id})
            except (ValidationError, TypeError) as e:
                logger.warning("Пропущено некорректное сопоставление для страницы %s: %s", page_id, e)
                continue
            self._mappings[page_id] = mapping

        logger.info("Загружено %s сопоставлений из %s", len(self._mappings), self.path)

    def _extract_records(self, document: Any) -> dict[str, Any]:
        if not isinstance(document, dict):
            logger.error("Некорректный формат файла сопоставлений %s: ожидался объект", self.path)
            return {}

        if "version" not in document:
            return document

        version = document.get("version")
        if version != SCHEMA_VERSION:
            logger.error("Неподдерживаемая версия файла сопоставлений %s: %s", self.path, version)
            return {}

        mappings = document.get("mappings") or {}
        if not isinstance(mappings, dict):
            logger.error("Некорректный раздел mappings в %s", self.path)
            return {}
        return mappings
