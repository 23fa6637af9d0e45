"""Record persistence."""

from .record_store import ImportMode, RecordStore, new_id

__all__ = ["ImportMode", "RecordStore", "new_id"]
