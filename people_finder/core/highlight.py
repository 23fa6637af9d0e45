"""Projection of matched ranges onto display segments."""

from typing import Any, Iterable, List, Optional, Sequence, Tuple

from ..models.response import MatchSpan, RecordHighlights, Segment


def project(text: str, ranges: Iterable[Tuple[int, int]]) -> List[Segment]:
    """
    Split text into plain and matched segments.
    
    ``ranges`` must be increasing, non-overlapping inclusive ranges. Ranges
    that touch are emitted as one matched segment. Joining the text of the
    returned segments always gives back ``text``.
    
    Args:
        text: Field text
        ranges: Inclusive (start, end) ranges
        
    Returns:
        Ordered segments covering the whole text
    """
    segments: List[Segment] = []
    cursor = 0
    
    for start, end in _merge_touching(ranges):
        if start >= len(text):
            break
        if start > cursor:
            segments.append(Segment(kind="plain", text=text[cursor:start]))
        segments.append(Segment(kind="matched", text=text[start:end + 1]))
        cursor = end + 1
    
    if cursor < len(text):
        segments.append(Segment(kind="plain", text=text[cursor:]))
    
    return segments


def _merge_touching(ranges: Iterable[Tuple[int, int]]) -> List[Tuple[int, int]]:
    merged: List[Tuple[int, int]] = []
    for start, end in ranges:
        if merged and start == merged[-1][1] + 1:
            merged[-1] = (merged[-1][0], end)
        else:
            merged.append((start, end))
    return merged


def find_span(
    spans: Sequence[MatchSpan], 
    field: str, 
    array_index: Optional[int] = None
) -> Optional[MatchSpan]:
    """Span of a field, or of one element of a list field."""
    for span in spans:
        if span.field == field and span.array_index == array_index:
            return span
    return None


def highlight_field(
    text: str, 
    spans: Sequence[MatchSpan], 
    field: str, 
    array_index: Optional[int] = None
) -> List[Segment]:
    """Project one field (or one tag) using its span, if any."""
    span = find_span(spans, field, array_index)
    return project(text, span.ranges if span else ())


def highlight_record(record: Any, spans: Sequence[MatchSpan] = ()) -> RecordHighlights:
    """
    Project every displayed field of a record.
    
    Without spans every field is a single plain segment, which is what the
    unfiltered listing shows.
    """
    return RecordHighlights(
        name=highlight_field(record.name, spans, "name"),
        notes=highlight_field(record.notes, spans, "notes"),
        where_met=highlight_field(record.where_met, spans, "whereMet"),
        tags=[
            highlight_field(tag, spans, "tags", i)
            for i, tag in enumerate(record.tags)
        ],
    )
