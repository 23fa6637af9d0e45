"""Health check API endpoints."""

import time

from fastapi import APIRouter, Depends, HTTPException

from ..config import get_settings
from ..core.directory import PeopleDirectory
from ..models.response import HealthResponse
from .dependencies import get_directory

router = APIRouter(prefix="/api/v1", tags=["health"])
settings = get_settings()

# Track application start time
app_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the service"
)
async def health_check(directory: PeopleDirectory = Depends(get_directory)) -> HealthResponse:
    """
    Perform a health check.
    
    Runs a throwaway query against the current index to verify the search
    path works end to end.
    """
    try:
        uptime = time.time() - app_start_time
        
        dependencies = {
            "record_store": "healthy",
            "search_index": "healthy",
        }
        
        try:
            directory.engine.search(directory.index, "health")
        except Exception:
            dependencies["search_index"] = "unhealthy"
        
        if all(status == "healthy" for status in dependencies.values()):
            status = "healthy"
        else:
            status = "unhealthy"
        
        return HealthResponse(
            status=status,
            version=settings.app_version,
            uptime=uptime,
            total_records=len(directory.records),
            dependencies=dependencies
        )
        
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Health check failed: {str(e)}"
        )
