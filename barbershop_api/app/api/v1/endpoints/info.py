"""
Information endpoint for API v1.

Returns the service name and version along with the number of
records in each collection.  Useful as a health check: it fails with
HTTP 500 when a collection cannot be read.
"""

from typing import Any, Dict

from fastapi import APIRouter

from barbershop_api.app.core.config import settings
from barbershop_api.app.core.store import COLLECTIONS, get_store

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
async def get_info() -> Dict[str, Any]:
    store = get_store()
    counts = {name: len(store.list(name)) for name in COLLECTIONS}
    return {"name": settings.project_name, "version": settings.api_version, "collections": counts}
