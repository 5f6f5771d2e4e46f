import logging
from typing import Any

from fastapi import APIRouter, Depends

from leadsync.api.deps import get_lead_source
from leadsync.core.errors import LeadSyncError
from leadsync.services.lead_source import LeadSourceClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["facebook"])


@router.get("/list-pages")
async def list_pages(lead_source: LeadSourceClient = Depends(get_lead_source)) -> dict[str, Any]:
    """Все страницы, доступные напрямую и через бизнесы."""
    try:
        pages = await lead_source.list_all_pages()
    except Exception as e:
        logger.error("Ошибка получения списка страниц: %s", e, exc_info=True)
        raise LeadSyncError(str(e)) from e

    formatted = [page.to_public() for page in pages]
    return {"success": True, "total": len(formatted), "pages": formatted}


@router.get("/page-forms/{page_id}")
async def page_forms(page_id: str, lead_source: LeadSourceClient = Depends(get_lead_source)) -> dict[str, Any]:
    """Лид-формы страницы."""
    try:
        forms = await lead_source.list_forms_for_page(page_id)
    except Exception as e:
        logger.error("Ошибка получения форм страницы %s: %s", page_id, e, exc_info=True)
        raise LeadSyncError(str(e)) from e

    return {"success": True, "forms": forms}


@router.get("/form-details/{form_id}")
async def form_details(form_id: str, lead_source: LeadSourceClient = Depends(get_lead_source)) -> dict[str, Any]:
    """Метаданные лид-формы."""
    try:
        form = await lead_source.get_form_details(form_id)
    except Exception as e:
        logger.error("Ошибка получения формы %s: %s", form_id, e, exc_info=True)
        raise LeadSyncError(str(e)) from e

    return {"success": True, "form": form}


@router.get("/form-leads/{form_id}")
async def form_leads(form_id: str, lead_source: LeadSourceClient = Depends(get_lead_source)) -> dict[str, Any]:
    """Лиды формы без записи в таблицу."""
    try:
        leads = await lead_source.get_leads_for_form(form_id)
    except Exception as e:
        logger.error("Ошибка получения лидов формы %s: %s", form_id, e, exc_info=True)
        raise LeadSyncError(str(e)) from e

    return {"success": True, "leads": [lead.model_dump(exclude_unset=True) for lead in leads]}
