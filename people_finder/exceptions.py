"""Exceptions raised by the record store and directory."""


class PeopleFinderError(Exception):
    """Base class for all People Finder errors."""


class RecordNotFoundError(PeopleFinderError):
    """Raised when a record id is not present in the store."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Record '{record_id}' not found")
        self.record_id = record_id


class DuplicateRecordError(PeopleFinderError):
    """Raised when adding a record whose id already exists."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Record '{record_id}' already exists")
        self.record_id = record_id


class ImportFormatError(PeopleFinderError):
    """Raised when an import payload is not a JSON array of objects."""
