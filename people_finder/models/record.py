"""Record model shared by the store, the search core and the API."""

from datetime import date, datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class Record(BaseModel):
    """
    One person in the collection.
    
    Field aliases follow the JSON export format (``whereMet``, ``whenMet``,
    ``createdAt``). Malformed optional fields are coerced to empty values
    instead of failing validation, so partially broken imports stay
    searchable and displayable.
    """
    
    model_config = ConfigDict(populate_by_name=True)
    
    id: str = Field(..., description="Opaque unique identifier")
    name: str = Field(default="", description="Display name")
    notes: str = Field(default="", description="Free-text notes")
    where_met: str = Field(default="", alias="whereMet", description="Where the person was met")
    when_met: Optional[date] = Field(default=None, alias="whenMet", description="When the person was met")
    tags: List[str] = Field(default_factory=list, description="Tags in display order")
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt", description="Creation timestamp")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("name", "notes", "where_met", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        if isinstance(v, str):
            return v
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return ""

    @field_validator("when_met", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> Optional[date]:
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, date):
            return v
        if isinstance(v, str) and v.strip():
            try:
                return date.fromisoformat(v.strip()[:10])
            except ValueError:
                return None
        return None

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v: Any) -> List[str]:
        if not isinstance(v, (list, tuple)):
            return []
        return [tag if isinstance(tag, str) else str(tag) for tag in v if tag is not None]

    @field_validator("created_at", mode="before")
    @classmethod
    def coerce_created_at(cls, v: Any) -> datetime:
        if isinstance(v, datetime):
            parsed = v
        elif isinstance(v, str) and v.strip():
            try:
                parsed = datetime.fromisoformat(v.strip())
            except ValueError:
                return utcnow()
        else:
            return utcnow()
        # Naive timestamps are read as UTC so the collection stays sortable
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    def to_json(self) -> dict:
        """Serialize using the export format field names."""
        return self.model_dump(by_alias=True, mode="json")
