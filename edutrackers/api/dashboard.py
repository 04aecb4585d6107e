"""Dashboard counters for the caller's role."""

from typing import Dict

from fastapi import APIRouter, Depends

from edutrackers.dependencies import get_store
from edutrackers.services.dashboard import dashboard_for
from edutrackers.store import ScopedStore

router = APIRouter()


@router.get("/", response_model=Dict[str, int])
async def get_dashboard(store: ScopedStore = Depends(get_store)):
    return dashboard_for(store)
