from typing import Any

from fastapi import APIRouter, Depends

from leadsync.api.deps import get_mapping_store
from leadsync.core.mapping_store import MappingStore

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(store: MappingStore = Depends(get_mapping_store)) -> dict[str, Any]:
    """
    Проверка статуса приложения и числа настроенных страниц.

    Служебный ответ без поля success, как у обычной проверки живости.
    """
    return {"status": "ok", "mappings": len(store)}
