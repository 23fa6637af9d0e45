"""Search API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query

from ..config import get_settings
from ..core.directory import PeopleDirectory
from ..models.request import SearchRequest
from ..models.response import SearchResponse
from .dependencies import get_directory

router = APIRouter(prefix="/api/v1", tags=["search"])
settings = get_settings()


def _run_search(directory: PeopleDirectory, query: str) -> SearchResponse:
    if len(query) > settings.max_query_length:
        raise HTTPException(
            status_code=400,
            detail=f"Query too long. Maximum length is {settings.max_query_length} characters"
        )
    
    try:
        return directory.search(query)
        
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Search failed: {str(e)}"
        )


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search records",
    description="Fuzzy search over names, notes, places and tags; a blank query lists everything"
)
async def search_records(
    q: str = Query("", description="The text to search for"),
    directory: PeopleDirectory = Depends(get_directory)
) -> SearchResponse:
    """
    Search records by approximate text match.
    
    Results are ranked best first and every hit carries display segments
    marking the matched characters of each field.
    """
    return _run_search(directory, q)


@router.post(
    "/search",
    response_model=SearchResponse,
    summary="Search with request body",
    description="Search records using a structured request body"
)
async def search_with_body(
    request: SearchRequest,
    directory: PeopleDirectory = Depends(get_directory)
) -> SearchResponse:
    """Search records using a JSON request body."""
    return _run_search(directory, request.query)
