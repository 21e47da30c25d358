"""Health check endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from tarefas.core.config import Settings, get_settings
from tarefas.providers.base import KeyValueStoreProvider
from tarefas.server.dependencies import get_store
from tarefas.server.models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(
    store: Annotated[KeyValueStoreProvider, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Health check endpoint. Reports "degraded" when the store is unreachable."""
    reachable = await store.check_connection()
    return HealthResponse(
        status="ok" if reachable else "degraded",
        store=store.provider_type,
        version=settings.VERSION,
    )
