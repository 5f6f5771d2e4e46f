from fastapi import Request

from leadsync.core.mapping_store import MappingStore
from leadsync.core.sheets_client import SheetsClient
from leadsync.services.lead_source import LeadSourceClient
from leadsync.services.sync_service import SyncService


def get_mapping_store(request: Request) -> MappingStore:
    return request.app.state.mapping_store


def get_lead_source(request: Request) -> LeadSourceClient:
    return request.app.state.lead_source


def get_sheets_client(request: Request) -> SheetsClient:
    return request.app.state.sheets_client


def get_sync_service(request: Request) -> SyncService:
    return SyncService(
        store=get_mapping_store(request),
        lead_source=get_lead_source(request),
        writer=get_sheets_client(request),
    )
