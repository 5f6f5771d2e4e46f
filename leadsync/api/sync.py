import logging
from typing import Any

from fastapi import APIRouter, Depends

from leadsync.api.deps import get_sync_service
from leadsync.core.errors import LeadSyncError
from leadsync.models.mapping import SyncLeadsRequest
from leadsync.services.sync_service import SyncService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sync"])


@router.post("/sync-leads")
async def sync_leads(payload: SyncLeadsRequest, service: SyncService = Depends(get_sync_service)) -> dict[str, Any]:
    """Синхронизация лидов формы в таблицу страницы."""
    try:
        result = await service.sync_leads(payload.formId, payload.pageId)
    except LeadSyncError:
        raise
    except Exception as e:
        logger.error("Ошибка синхронизации: %s", e, exc_info=True)
        raise LeadSyncError(str(e)) from e

    return {
        "success": True,
        "message": f"Leads synced successfully to sheet {result.sheet_name}",
        "leadsCount": result.leads_count,
    }
