"""Index data structures for fuzzy record search."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..models.record import Record
from .normalizer import TextNormalizer

FieldValue = Union[str, Sequence[str], None]


@dataclass(frozen=True)
class SearchableField:
    """
    A record field taking part in search, with its ranking weight.

    ``name`` is the field's key in the record JSON and is what match spans
    report.
    """

    name: str
    weight: float
    extractor: Callable[[Any], FieldValue]
    is_list: bool = False


def _attribute(record: Any, attribute: str, alias: Optional[str] = None) -> Any:
    """Read a value from a Record model or from a plain mapping."""
    if isinstance(record, Mapping):
        if attribute in record:
            return record[attribute]
        return record.get(alias) if alias else None
    return getattr(record, attribute, None)


DEFAULT_FIELDS: Tuple[SearchableField, ...] = (
    SearchableField("name", 0.5, lambda r: _attribute(r, "name")),
    SearchableField("notes", 0.3, lambda r: _attribute(r, "notes")),
    SearchableField("whereMet", 0.1, lambda r: _attribute(r, "where_met", "whereMet")),
    SearchableField("tags", 0.1, lambda r: _attribute(r, "tags"), is_list=True),
)


@dataclass(frozen=True)
class IndexedValue:
    """One non-blank text value of a field, prepared for matching."""

    text: str
    normalized: str
    norm: float
    array_index: Optional[int] = None


@dataclass(frozen=True)
class IndexedField:
    """All indexed values of one field of one record."""

    name: str
    weight: float
    values: Tuple[IndexedValue, ...]


@dataclass(frozen=True)
class IndexedRecord:
    """A record with its prepared field values and collection position."""

    position: int
    record: Any
    fields: Tuple[IndexedField, ...]


@dataclass(frozen=True)
class RecordIndex:
    """
    Immutable search index over one snapshot of the record collection.
    
    Built by :func:`build_index` and replaced, never mutated, when the
    collection changes.
    """

    entries: Tuple[IndexedRecord, ...]
    fields: Tuple[SearchableField, ...]

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def records(self) -> List[Any]:
        """Indexed records in collection order."""
        return [entry.record for entry in self.entries]

    def get_stats(self) -> Dict[str, Any]:
        """Get index statistics."""
        per_field: Dict[str, int] = {field.name: 0 for field in self.fields}
        for entry in self.entries:
            for indexed_field in entry.fields:
                per_field[indexed_field.name] += len(indexed_field.values)
        return {
            "total_records": len(self.entries),
            "total_values": sum(per_field.values()),
            "values_per_field": per_field,
        }


def _text_values(raw: FieldValue, is_list: bool) -> List[Tuple[Optional[int], str]]:
    """Coerce a raw field value into (array index, text) pairs."""
    if is_list:
        if not isinstance(raw, (list, tuple)):
            return []
        return [
            (i, item if isinstance(item, str) else str(item))
            for i, item in enumerate(raw)
            if item is not None
        ]
    if isinstance(raw, str):
        return [(None, raw)]
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return [(None, str(raw))]
    return []


def build_index(
    records: Sequence[Union[Record, Mapping[str, Any]]],
    fields: Sequence[SearchableField] = DEFAULT_FIELDS,
    normalizer: Optional[TextNormalizer] = None,
) -> RecordIndex:
    """
    Build a search index for a collection snapshot.
    
    Missing or malformed fields are indexed as empty and blank values are
    skipped. Field weights are normalized by their total.
    
    Args:
        records: Records (models or mappings) in collection order
        fields: Searchable fields and their weights
        normalizer: Normalizer used for case folding
        
    Returns:
        A new immutable RecordIndex
    """
    normalizer = normalizer or TextNormalizer()
    total_weight = sum(field.weight for field in fields) or 1.0
    
    entries = []
    for position, record in enumerate(records):
        indexed_fields = []
        for field in fields:
            values = tuple(
                IndexedValue(
                    text=text,
                    normalized=normalizer.normalize(text),
                    norm=normalizer.field_norm(text),
                    array_index=array_index,
                )
                for array_index, text in _text_values(field.extractor(record), field.is_list)
                if text.strip()
            )
            if values:
                indexed_fields.append(
                    IndexedField(name=field.name, weight=field.weight / total_weight, values=values)
                )
        entries.append(IndexedRecord(position=position, record=record, fields=tuple(indexed_fields)))
    
    return RecordIndex(entries=tuple(entries), fields=tuple(fields))
