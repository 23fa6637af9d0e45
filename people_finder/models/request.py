"""Request models for API endpoints."""

from datetime import date
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def parse_tags(value: Any) -> List[str]:
    """
    Accept tags either as a list or as one comma-separated string.
    
    Blank entries are dropped and every tag is trimmed.
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        return []
    return [str(tag).strip() for tag in value if tag is not None and str(tag).strip()]


class RecordCreate(BaseModel):
    """Request model for creating a record."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    name: str = Field(..., min_length=1, max_length=200, description="Display name")
    notes: str = Field(default="", description="Free-text notes")
    where_met: str = Field(default="", alias="whereMet", description="Where the person was met")
    when_met: Optional[date] = Field(default=None, alias="whenMet", description="When the person was met")
    tags: List[str] = Field(default_factory=list, description="Tags, list or comma-separated string")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate and normalize the name."""
        if not v or not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()

    @field_validator("when_met", mode="before")
    @classmethod
    def blank_date(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: Any) -> List[str]:
        return parse_tags(v)


class RecordUpdate(BaseModel):
    """Request model for partially updating a record."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    notes: Optional[str] = None
    where_met: Optional[str] = Field(None, alias="whereMet")
    when_met: Optional[date] = Field(None, alias="whenMet")
    tags: Optional[List[str]] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        """A name, when given, must not be blank."""
        if v is None:
            return v
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()

    @field_validator("when_met", mode="before")
    @classmethod
    def blank_date(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: Any) -> Optional[List[str]]:
        if v is None:
            return None
        return parse_tags(v)

    def changes(self) -> dict:
        """Fields explicitly sent by the client."""
        return self.model_dump(exclude_unset=True)


class SearchRequest(BaseModel):
    """Request model for search queries."""
    
    query: str = Field(default="", max_length=200, description="Search query, blank lists everything")
