import logging
from typing import Any

import httpx

from leadsync.core.errors import GraphAPIError
from leadsync.core.settings import settings

logger = logging.getLogger(__name__)


class GraphClient:
    """Клиент для Facebook Graph API."""

    def __init__(
        self,
        access_token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Инициализация HTTP-клиента Graph API."""
        self.access_token = access_token if access_token is not None else settings.FACEBOOK_ACCESS_TOKEN
        self.base_url = (base_url or settings.graph_base_url).rstrip("/")
        self._client = httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.GRAPH_TIMEOUT,
            transport=transport,
        )

    def url(self, path: str) -> str:
        """Полный URL для пути вида 'me/accounts'."""
        return f"{self.base_url}/{path.lstrip('/')}"

    def auth_params(self, **params: Any) -> dict[str, Any]:
        """Параметры запроса с access_token."""
        return {"access_token": self.access_token, **params}

    async def get(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        GET-запрос к Graph API.

        Args:
            url: Полный URL (в том числе курсор paging.next)
            params: Параметры запроса

        Returns:
            dict[str, Any]: Тело ответа

        Raises:
            GraphAPIError: Ответ с ошибкой или сетевая ошибка
        """
        try:
            response = await self._client.get(url, params=params or None)
        except httpx.HTTPError as e:
            raise GraphAPIError(str(e) or e.__class__.__name__) from e

        if response.is_error:
            raise self._error_from_response(response)

        return response.json() if response.content else {}

    async def get_all_paginated(self, url: str, params: dict[str, Any] | None = None) -> list[Any]:
        """
        Выборка всех элементов постраничного списка по курсору paging.next.

        Параметры (вместе с access_token) передаются только в первом запросе:
        URL курсора уже содержит их.

        Args:
            url: URL первой страницы
            params: Параметры первого запроса

        Returns:
            list[Any]: Элементы всех страниц в порядке получения
        """
        items: list[Any] = []
        next_url: str | None = url
        request_params = dict(params or {})
        pages = 0

        while next_url:
            data = await self.get(next_url, params=request_params)
            pages += 1
            items.extend(data.get("data") or [])

            next_url = (data.get("paging") or {}).get("next")
            if next_url:
                request_params = {}

        logger.debug("Получено %s элементов за %s запросов: %s", len(items), pages, url)
        return items

    @staticmethod
    def _error_from_response(response: httpx.Response) -> GraphAPIError:
        try:
            payload = response.json()
        except ValueError:
            payload = {}

        error = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(error, dict):
            return GraphAPIError(
                message=error.get("message") or f"Graph API error: {response.status_code}",
                code=error.get("code"),
                error_type=error.get("type"),
                http_status=response.status_code,
                payload=payload,
            )

        return GraphAPIError(
            message=f"Graph API error: {response.status_code}",
            http_status=response.status_code,
            payload=payload if isinstance(payload, dict) else None,
        )

    async def close(self) -> None:
        """Закрыть HTTP-клиент."""
        await self._client.aclose()
