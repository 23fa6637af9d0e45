"""Data models for People Finder."""

from .record import Record
from .request import RecordCreate, RecordUpdate, SearchRequest, parse_tags
from .response import (
    Segment,
    MatchSpan,
    RecordHighlights,
    SearchHit,
    SearchResponse,
    ImportResponse,
    ErrorResponse,
    HealthResponse,
    MetricsResponse,
)

__all__ = [
    "Record",
    "RecordCreate",
    "RecordUpdate",
    "SearchRequest",
    "parse_tags",
    "Segment",
    "MatchSpan",
    "RecordHighlights",
    "SearchHit",
    "SearchResponse",
    "ImportResponse",
    "ErrorResponse",
    "HealthResponse",
    "MetricsResponse",
]
