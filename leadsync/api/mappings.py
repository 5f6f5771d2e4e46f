import logging
from typing import Any

from fastapi import APIRouter, Depends

from leadsync.api.deps import get_lead_source, get_mapping_store
from leadsync.core.errors import LeadSyncError
from leadsync.core.mapping_store import MappingStore
from leadsync.models.mapping import SetupMappingRequest, SetupPageRequest
from leadsync.services import mapping_service
from leadsync.services.lead_source import LeadSourceClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["mappings"])


@router.post("/setup-page")
async def setup_page(
    payload: SetupPageRequest,
    store: MappingStore = Depends(get_mapping_store),
    lead_source: LeadSourceClient = Depends(get_lead_source),
) -> dict[str, Any]:
    """Настройка страницы: сопоставление с таблицей по ID страницы."""
    try:
        await mapping_service.setup_page(store, lead_source, payload)
    except LeadSyncError:
        raise
    except Exception as e:
        logger.error("Ошибка настройки страницы: %s", e, exc_info=True)
        raise LeadSyncError(str(e)) from e

    return {"success": True, "message": "Page configured successfully"}


@router.post("/setup-mapping")
async def setup_mapping(
    payload: SetupMappingRequest,
    store: MappingStore = Depends(get_mapping_store),
) -> dict[str, Any]:
    """Создание или замена сопоставления страница -> таблица."""
    try:
        await mapping_service.setup_mapping(store, payload)
    except LeadSyncError:
        raise
    except Exception as e:
        logger.error("Ошибка сохранения сопоставления: %s", e, exc_info=True)
        raise LeadSyncError(str(e)) from e

    return {"success": True, "message": "Mapping saved successfully"}


@router.get("/mappings")
async def list_mappings(store: MappingStore = Depends(get_mapping_store)) -> dict[str, Any]:
    """Все сопоставления."""
    return {"success": True, "mappings": [mapping.to_public() for _, mapping in store.list()]}


@router.delete("/mapping/{page_id}")
async def delete_mapping(page_id: str, store: MappingStore = Depends(get_mapping_store)) -> dict[str, Any]:
    """Удаление сопоставления страницы."""
    try:
        await mapping_service.delete_mapping(store, page_id)
    except LeadSyncError:
        raise
    except Exception as e:
        logger.error("Ошибка удаления сопоставления %s: %s", page_id, e, exc_info=True)
        raise LeadSyncError(str(e)) from e

    return {"success": True, "message": "Mapping deleted successfully"}
