import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from leadsync.api import health, mappings, pages, sync
from leadsync.core.errors import LeadSyncError
from leadsync.core.graph_client import GraphClient
from leadsync.core.mapping_store import JsonFileMappingStore
from leadsync.core.settings import settings
from leadsync.core.sheets_client import SheetsClient
from leadsync.services.lead_source import LeadSourceClient

logging.basicConfig(
    level=settings.log_level_value,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Facebook Leads - GSheets Sync")

app.include_router(health.router)
app.include_router(pages.router)
app.include_router(mappings.router)
app.include_router(sync.router)


@app.exception_handler(LeadSyncError)
async def lead_sync_error_handler(request: Request, exc: LeadSyncError) -> JSONResponse:
    """Ошибки приложения в формате {success: false, error}."""
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Некорректное тело запроса - 400 в общем формате ошибок."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"Invalid request: {location}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    logger.warning("Некорректный запрос %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"success": False, "error": message})


@app.on_event("startup")
async def on_startup() -> None:
    """Загрузка сопоставлений и создание клиентов внешних API."""
    store = JsonFileMappingStore(settings.MAPPINGS_FILE)
    await store.load()

    graph = GraphClient()
    app.state.mapping_store = store
    app.state.graph_client = graph
    app.state.lead_source = LeadSourceClient(graph)
    app.state.sheets_client = SheetsClient()
    logger.info("Приложение запущено, сопоставлений: %s", len(store))


@app.on_event("shutdown")
async def on_shutdown() -> None:
    """Закрытие HTTP-клиента Graph API."""
    graph = getattr(app.state, "graph_client", None)
    if graph is not None:
        await graph.close()


def run() -> None:
    """Запуск сервера uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
