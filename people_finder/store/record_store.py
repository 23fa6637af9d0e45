"""Record store with optional JSON-file persistence."""

import json
import os
import threading
import uuid
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Union

import structlog
from pydantic import BaseModel

from ..exceptions import DuplicateRecordError, ImportFormatError, RecordNotFoundError
from ..models.record import Record

logger = structlog.get_logger()


class ImportMode(str, Enum):
    """Identifier policy for bulk imports."""

    MERGE = "merge"  # keep a present id, overwriting the stored record
    NEW_IDS = "newIds"  # always assign a fresh id


def new_id() -> str:
    """Generate a new record identifier."""
    return str(uuid.uuid4())


def _by_alias(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Rename model field names (``where_met``) to their aliases (``whereMet``)."""
    renamed = {}
    for key, value in fields.items():
        info = Record.model_fields.get(key)
        renamed[info.alias if info is not None and info.alias else key] = value
    return renamed


class RecordStore:
    """
    Keyed record collection.
    
    Records live in memory. When a path is given, the whole collection is
    loaded from it on start and written back as a JSON array after every
    write. Each write is a transaction: if persisting fails, the in-memory
    collection is restored to its previous state and the error propagates.
    """
    
    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        """
        Initialize the store.
        
        Args:
            path: JSON file to persist to, or None for memory only
        """
        self.path = Path(path) if path else None
        self._records: Dict[str, Record] = {}
        self._lock = threading.RLock()
        
        if self.path is not None and self.path.exists():
            self._load()
    
    def __len__(self) -> int:
        return len(self._records)
    
    def list(self) -> List[Record]:
        """All records, most recently created first."""
        with self._lock:
            return sorted(self._records.values(), key=lambda r: r.created_at, reverse=True)
    
    def get(self, record_id: str) -> Optional[Record]:
        """Get a record by id, or None."""
        return self._records.get(record_id)
    
    def add(self, data: Union[Mapping[str, Any], BaseModel]) -> Record:
        """
        Add a new record.
        
        Text fields are trimmed; id and creation time are assigned when
        absent.
        
        Args:
            data: Record fields, by name or by alias
            
        Returns:
            The stored record
            
        Raises:
            DuplicateRecordError: If the id is already present
        """
        fields = _by_alias(self._as_mapping(data))
        fields["id"] = fields.get("id") or new_id()
        record = Record.model_validate(fields)
        record = record.model_copy(update={
            "name": record.name.strip(),
            "notes": record.notes.strip(),
            "where_met": record.where_met.strip(),
        })
        
        with self._transaction():
            if record.id in self._records:
                raise DuplicateRecordError(record.id)
            self._records[record.id] = record
        
        return record
    
    def update(self, record_id: str, changes: Union[Mapping[str, Any], BaseModel]) -> Record:
        """
        Merge changes into an existing record.
        
        Args:
            record_id: Id of the record to update
            changes: Fields to overwrite
            
        Returns:
            The updated record
            
        Raises:
            RecordNotFoundError: If the id is unknown
        """
        with self._transaction():
            previous = self._records.get(record_id)
            if previous is None:
                raise RecordNotFoundError(record_id)
            
            merged = {
                **previous.model_dump(by_alias=True),
                **_by_alias(self._as_mapping(changes)),
                "id": record_id,
            }
            record = Record.model_validate(merged)
            self._records[record_id] = record
        
        return record
    
    def delete(self, record_id: str) -> None:
        """Delete a record; unknown ids are ignored."""
        with self._transaction():
            self._records.pop(record_id, None)
    
    def bulk_import(
        self, 
        items: Sequence[Mapping[str, Any]], 
        mode: ImportMode = ImportMode.MERGE
    ) -> int:
        """
        Write many records at once.
        
        In ``merge`` mode a present id is kept (replacing any stored record
        with that id); in ``newIds`` mode every record gets a fresh id.
        Missing creation times and tags are defaulted. Nothing is written if
        any item is not an object.
        
        Args:
            items: Records as mappings
            mode: Identifier policy
            
        Returns:
            Number of records written
            
        Raises:
            ImportFormatError: If items is not a list of objects
        """
        if not isinstance(items, list):
            raise ImportFormatError("Import payload must be an array")
        
        mode = ImportMode(mode)
        records = []
        for position, item in enumerate(items):
            if not isinstance(item, Mapping):
                raise ImportFormatError(f"Import item {position} is not an object")
            fields = _by_alias(item)
            if mode == ImportMode.NEW_IDS or not fields.get("id"):
                fields["id"] = new_id()
            records.append(Record.model_validate(fields))
        
        with self._transaction():
            for record in records:
                self._records[record.id] = record
        
        logger.info("records_imported", count=len(records), mode=mode.value)
        return len(records)
    
    def export_all(self) -> List[Record]:
        """Full snapshot, in the same order as :meth:`list`."""
        return self.list()
    
    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Apply a write atomically, restoring the previous state on failure."""
        with self._lock:
            backup = dict(self._records)
            try:
                yield
                self._persist()
            except Exception:
                self._records = backup
                raise
    
    def _persist(self) -> None:
        if self.path is None:
            return
        
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        payload = [record.to_json() for record in self.list()]
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)
    
    def _load(self) -> None:
        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        
        if not isinstance(data, list):
            raise ImportFormatError(f"{self.path} does not contain a JSON array")
        
        for item in data:
            if not isinstance(item, Mapping):
                continue
            fields = _by_alias(item)
            fields["id"] = fields.get("id") or new_id()
            record = Record.model_validate(fields)
            self._records[record.id] = record
        
        logger.info("record_store_loaded", path=str(self.path), total_records=len(self._records))
    
    @staticmethod
    def _as_mapping(data: Union[Mapping[str, Any], BaseModel]) -> Mapping[str, Any]:
        if isinstance(data, BaseModel):
            return data.model_dump(exclude_unset=True)
        return data
