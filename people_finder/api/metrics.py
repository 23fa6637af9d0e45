"""Metrics API endpoints."""

import psutil
from fastapi import APIRouter, Depends, HTTPException

from ..core.directory import PeopleDirectory
from ..models.response import MetricsResponse
from .dependencies import get_directory

router = APIRouter(prefix="/api/v1", tags=["metrics"])


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Get search metrics",
    description="Query counters, index size and process memory"
)
async def get_metrics(directory: PeopleDirectory = Depends(get_directory)) -> MetricsResponse:
    """Get search and index metrics."""
    try:
        stats = directory.get_stats()
        index_stats = stats["index_stats"]
        
        memory_usage_mb = psutil.Process().memory_info().rss / (1024 * 1024)
        
        return MetricsResponse(
            total_queries=stats["total_queries"],
            blank_queries=stats["blank_queries"],
            queries_with_hits=stats["queries_with_hits"],
            queries_without_hits=stats["queries_without_hits"],
            average_response_time_ms=stats["average_execution_time_ms"],
            index_rebuilds=stats["index_rebuilds"],
            indexed_records=index_stats["total_records"],
            indexed_values=index_stats["total_values"],
            memory_usage_mb=memory_usage_mb
        )
        
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get metrics: {str(e)}"
        )
