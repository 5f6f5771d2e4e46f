import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Protocol

from leadsync.core.errors import MissingFieldError, PageNotConfiguredError
from leadsync.core.mapping_store import MappingStore
from leadsync.services.lead_source import LeadSourceClient

logger = logging.getLogger(__name__)


class RowWriter(Protocol):
    async def append_row(self, values: list[Any], sheet_id: str) -> Any: ...


@dataclass
class SyncResult:
    leads_count: int
    sheet_name: str


class SyncService:
    """Синхронизация лидов формы в таблицу, сопоставленную странице."""

    def __init__(self, store: MappingStore, lead_source: LeadSourceClient, writer: RowWriter) -> None:
        self.store = store
        self.lead_source = lead_source
        self.writer = writer

    async def sync_leads(self, form_id: str | None, page_id: str | None) -> SyncResult:
        """
        Выгрузка всех лидов формы в таблицу страницы.

        Строки добавляются последовательно. При ошибке добавления синхронизация
        прерывается, уже добавленные строки остаются, lastSync не обновляется.

        Args:
            form_id: ID лид-формы
            page_id: ID страницы, для которой настроено сопоставление

        Returns:
            SyncResult: Количество выгруженных лидов и название листа
        """
        if not form_id or not page_id:
            raise MissingFieldError("Missing formId or pageId")

        mapping = self.store.get(page_id)
        if mapping is None:
            raise PageNotConfiguredError()

        leads = await self.lead_source.get_leads_for_form(form_id)
        logger.info("Синхронизация %s лидов формы %s в таблицу %s", len(leads), form_id, mapping.sheet_id)

        for lead in leads:
            await self.writer.append_row(lead.to_row(mapping.label), mapping.sheet_id)

        self.store.set(page_id, mapping.model_copy(update={"last_sync": datetime.now(timezone.utc)}))
        await self.store.persist()

        logger.info("Синхронизация формы %s завершена: %s лидов", form_id, len(leads))
        return SyncResult(leads_count=len(leads), sheet_name=mapping.sheet_name)
