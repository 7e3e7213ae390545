"""
Maintenance endpoints.
"""

from fastapi import APIRouter, Depends
from dailyops.app.db.registry import CollectionRegistry, get_registry
from dailyops.app.schemas.common import SuccessResponse

router = APIRouter(tags=["Maintenance"])


@router.post("/reset", response_model=SuccessResponse)
async def reset_data(registry: CollectionRegistry = Depends(get_registry)):
    """
    Rewrite users, tasks and daily reports with the seed defaults.

    Every existing report is discarded. Returns 500 if a collection could
    not be written.
    """
    await registry.reset()
    return SuccessResponse(success=True, message="Data was reset to defaults")
