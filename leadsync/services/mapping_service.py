import logging

from leadsync.core.errors import MappingNotFoundError, MissingFieldError
from leadsync.core.mapping_store import MappingStore
from leadsync.models.mapping import DEFAULT_SHEET_NAME, PageSheetMapping, SetupMappingRequest, SetupPageRequest
from leadsync.services.lead_source import LeadSourceClient

logger = logging.getLogger(__name__)


async def setup_mapping(store: MappingStore, payload: SetupMappingRequest) -> PageSheetMapping:
    """Создание или полная замена сопоставления страницы."""
    if not payload.pageId or not payload.sheetId:
        raise MissingFieldError("Missing pageId or sheetId")

    mapping = PageSheetMapping(
        page_id=payload.pageId,
        page_name=payload.pageName,
        sheet_id=payload.sheetId,
        sheet_name=payload.sheetName or DEFAULT_SHEET_NAME,
        last_sync=None,
    )
    store.set(payload.pageId, mapping)
    await store.persist()

    logger.info("Сохранено сопоставление: страница=%s, таблица=%s", payload.pageId, payload.sheetId)
    return mapping


async def setup_page(store: MappingStore, lead_source: LeadSourceClient, payload: SetupPageRequest) -> PageSheetMapping:
    """Настройка страницы по ID: название берётся из Graph API."""
    if not payload.pageId or not payload.sheetId:
        raise MissingFieldError("Missing pageId or sheetId")

    page = await lead_source.get_page(payload.pageId)
    return await setup_mapping(
        store,
        SetupMappingRequest(pageId=payload.pageId, pageName=page.name, sheetId=payload.sheetId),
    )


async def delete_mapping(store: MappingStore, page_id: str) -> None:
    """Удаление сопоставления страницы."""
    if not store.delete(page_id):
        raise MappingNotFoundError()

    await store.persist()
    logger.info("Удалено сопоставление для страницы %s", page_id)
