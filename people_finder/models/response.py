"""Response models for API endpoints."""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .record import Record


class Segment(BaseModel):
    """A run of field text, either plain or part of a match."""
    
    model_config = ConfigDict(frozen=True)
    
    kind: Literal["plain", "matched"] = Field(..., description="Segment kind")
    text: str = Field(..., description="Verbatim text of the segment")


class MatchSpan(BaseModel):
    """Character ranges of one field (or one tag) that matched a query."""
    
    model_config = ConfigDict(frozen=True)
    
    field: str = Field(..., description="Searchable field name")
    array_index: Optional[int] = Field(None, description="Element index for list-valued fields")
    ranges: Tuple[Tuple[int, int], ...] = Field(..., description="Inclusive (start, end) ranges")


class RecordHighlights(BaseModel):
    """Projected segments for every displayed field of a record."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    name: List[Segment] = Field(default_factory=list)
    notes: List[Segment] = Field(default_factory=list)
    where_met: List[Segment] = Field(default_factory=list, alias="whereMet")
    tags: List[List[Segment]] = Field(default_factory=list)


class SearchHit(BaseModel):
    """One row of a search response."""
    
    record: Record = Field(..., description="The matched record")
    score: Optional[float] = Field(None, description="Aggregate score, lower is better")
    matches: List[MatchSpan] = Field(default_factory=list, description="Matched spans per field")
    highlights: RecordHighlights = Field(..., description="Display segments")


class SearchResponse(BaseModel):
    """Response for search queries."""
    
    query: str = Field(..., description="Query as received")
    searched: bool = Field(..., description="False when the query was blank and everything is listed")
    execution_time_ms: float = Field(..., description="Query execution time in milliseconds")
    total_results: int = Field(..., description="Total number of results")
    results: List[SearchHit] = Field(..., description="Ranked hits")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class ImportResponse(BaseModel):
    """Response for bulk imports."""
    
    mode: str = Field(..., description="Identifier policy used")
    imported: int = Field(..., description="Number of records written")
    total_records: int = Field(..., description="Collection size after import")


class ErrorResponse(BaseModel):
    """Error response model."""
    
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    uptime: float = Field(..., description="Service uptime in seconds")
    total_records: int = Field(..., description="Records in the current snapshot")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    dependencies: Dict[str, str] = Field(..., description="Dependency status")


class MetricsResponse(BaseModel):
    """Search metrics response."""
    
    total_queries: int = Field(..., description="Non-blank queries processed")
    blank_queries: int = Field(..., description="Blank queries served from the listing")
    queries_with_hits: int = Field(..., description="Queries returning at least one hit")
    queries_without_hits: int = Field(..., description="Queries returning nothing")
    average_response_time_ms: float = Field(..., description="Average search time")
    index_rebuilds: int = Field(..., description="Index rebuilds since start")
    indexed_records: int = Field(..., description="Records in the current index")
    indexed_values: int = Field(..., description="Field values in the current index")
    memory_usage_mb: float = Field(..., description="Process resident memory in MB")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Metrics timestamp")
