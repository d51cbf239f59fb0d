# thumbgallery/routers/health_routers.py
from fastapi import APIRouter

from ..dependencies import SyncWorkerDep
from ..models.shared_models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def get_health(sync_worker: SyncWorkerDep):
    """Report whether thumbnails are still following the image tree."""
    if sync_worker is None:
        return HealthResponse(status="degraded")

    status = sync_worker.get_status()
    return HealthResponse(
        status="healthy" if status.healthy else "degraded", thumbnail_sync=status
    )
