import logging
from typing import Any

from leadsync.core.graph_client import GraphClient
from leadsync.core.settings import settings
from leadsync.models.graph import Business, Lead, Page

logger = logging.getLogger(__name__)

PAGE_FIELDS = "id,name,access_token"
BUSINESS_FIELDS = "id,name"
FORM_FIELDS = "id,name,status,created_time"
FORM_DETAIL_FIELDS = "id,name,page,status,created_time"
LEAD_FIELDS = "id,created_time,field_data"


class LeadSourceClient:
    """Получение страниц, форм и лидов из Graph API."""

    def __init__(self, graph: GraphClient, follow_pagination: bool | None = None) -> None:
        self.graph = graph
        self.follow_pagination = (
            settings.GRAPH_FOLLOW_PAGINATION if follow_pagination is None else follow_pagination
        )
        self.page_limit = settings.GRAPH_PAGE_LIMIT

    async def list_all_pages(self) -> list[Page]:
        """
        Все доступные страницы: сначала прямые, затем страницы каждого бизнеса.

        Страница, доступная и напрямую и через бизнес, вернётся дважды.
        """
        try:
            raw_pages = await self.graph.get_all_paginated(
                self.graph.url("me/accounts"),
                self.graph.auth_params(fields=PAGE_FIELDS, limit=self.page_limit),
            )
            pages = [Page.model_validate(item) for item in raw_pages]

            raw_businesses = await self.graph.get_all_paginated(
                self.graph.url("me/businesses"),
                self.graph.auth_params(fields=BUSINESS_FIELDS, limit=self.page_limit),
            )
            businesses = [Business.model_validate(item) for item in raw_businesses]

            for business in businesses:
                business_pages = await self.graph.get_all_paginated(
                    self.graph.url(f"{business.id}/owned_pages"),
                    self.graph.auth_params(fields=PAGE_FIELDS, limit=self.page_limit),
                )
                pages.extend(
                    Page.model_validate({**item, "business_name": business.name}) for item in business_pages
                )
        except Exception as e:
            logger.error("Ошибка получения страниц: %s", e)
            raise

        logger.info("Получено %s страниц (бизнесов: %s)", len(pages), len(businesses))
        return pages

    async def _list(self, path: str, fields: str) -> list[dict[str, Any]]:
        url = self.graph.url(path)
        params = self.graph.auth_params(fields=fields)
        if self.follow_pagination:
            return await self.graph.get_all_paginated(url, params)

        data = await self.graph.get(url, params)
        return data.get("data") or []

    async def list_forms_for_page(self, page_id: str) -> list[dict[str, Any]]:
        """Лид-формы страницы в порядке, который вернул сервер."""
        return await self._list(f"{page_id}/leadgen_forms", FORM_FIELDS)

    async def get_form_details(self, form_id: str) -> dict[str, Any]:
        """Метаданные формы."""
        return await self.graph.get(self.graph.url(form_id), self.graph.auth_params(fields=FORM_DETAIL_FIELDS))

    async def get_page(self, page_id: str) -> Page:
        """Данные одной страницы (id и название)."""
        data = await self.graph.get(self.graph.url(page_id), self.graph.auth_params(fields="id,name"))
        return Page.model_validate(data)

    async def get_leads_for_form(self, form_id: str) -> list[Lead]:
        """Лиды формы (только первая страница, если не включён GRAPH_FOLLOW_PAGINATION)."""
        logger.info("Получение лидов формы %s", form_id)
        raw_leads = await self._list(f"{form_id}/leads", LEAD_FIELDS)
        leads = [Lead.model_validate(item) for item in raw_leads]
        logger.info("Получено %s лидов для формы %s", len(leads), form_id)
        return leads
