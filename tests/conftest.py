from typing import Any

import httpx
import pytest

from leadsync.core.graph_client import GraphClient
from leadsync.services.lead_source import LeadSourceClient

GRAPH_URL = "https://graph.test/v18.0"
TOKEN = "test-token"


class FakeSheetsWriter:
    """Запись строк в память вместо Google Sheets."""

    def __init__(self, fail_on_call: int | None = None) -> None:
        self.fail_on_call = fail_on_call
        self.calls = 0
        self.rows: list[tuple[str, list[Any]]] = []

    async def append_row(self, values: list[Any], sheet_id: str) -> dict[str, Any]:
        self.calls += 1
        if self.fail_on_call == self.calls:
            raise RuntimeError("Sheets API unavailable")
        self.rows.append((sheet_id, list(values)))
        return {"updates": {"updatedRows": 1}}


class GraphStub:
    """Ответы Graph API по пути запроса (и курсору after)."""

    def __init__(self, routes: dict[str, Any]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v18.0")
        after = request.url.params.get("after")
        key = f"{path}?after={after}" if after else path

        if key not in self.routes:
            return httpx.Response(
                400,
                json={"error": {"message": f"Unsupported get request: {key}", "type": "GraphMethodException", "code": 100}},
            )

        body = self.routes[key]
        status_code = 200
        if isinstance(body, tuple):
            status_code, body = body
        return httpx.Response(status_code, json=body)

    def client(self) -> GraphClient:
        return GraphClient(access_token=TOKEN, base_url=GRAPH_URL, transport=httpx.MockTransport(self.handler))


def next_url(path: str, cursor: str) -> str:
    return f"{GRAPH_URL}{path}?access_token={TOKEN}&after={cursor}"


def make_lead(lead_id: str, *values: str) -> dict[str, Any]:
    return {
        "id": lead_id,
        "created_time": "2024-01-15T10:00:00+0000",
        "field_data": [{"name": f"field_{i}", "values": [value]} for i, value in enumerate(values)],
    }


@pytest.fixture
def writer() -> FakeSheetsWriter:
    return FakeSheetsWriter()


@pytest.fixture
def make_lead_source():
    def factory(routes: dict[str, Any], follow_pagination: bool = False) -> tuple[LeadSourceClient, GraphStub]:
        stub = GraphStub(routes)
        return LeadSourceClient(stub.client(), follow_pagination=follow_pagination), stub

    return factory
