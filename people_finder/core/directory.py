"""Owner of the current record snapshot and its search index."""

import threading
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import structlog
from pydantic import BaseModel

from ..models.record import Record
from ..models.response import SearchHit, SearchResponse
from ..store.record_store import ImportMode, RecordStore
from .engine import SearchEngine
from .highlight import highlight_record
from .index import RecordIndex, build_index

logger = structlog.get_logger()


class PeopleDirectory:
    """
    Holds the collection snapshot and the index built from it.
    
    Every mutation goes through the directory, which writes to the store and
    rebuilds the index before returning, so searches never run against a
    stale index. The snapshot and index are replaced together by reference;
    a search in progress keeps using the pair it started with. Writes are
    serialized, so a rebuild never replaces a newer snapshot with an older
    one.
    """
    
    def __init__(self, store: RecordStore, engine: Optional[SearchEngine] = None) -> None:
        """
        Initialize the directory and build the first index.
        
        Args:
            store: Record store backing the collection
            engine: Search engine (default thresholds when omitted)
        """
        self.store = store
        self.engine = engine or SearchEngine()
        self._records: Tuple[Record, ...] = ()
        self._index: RecordIndex = build_index([])
        self._stats = self._empty_stats()
        self._write_lock = threading.RLock()
        self.refresh()
    
    @property
    def records(self) -> Tuple[Record, ...]:
        """Current snapshot in listing order."""
        return self._records
    
    @property
    def index(self) -> RecordIndex:
        """Index of the current snapshot."""
        return self._index
    
    def refresh(self) -> RecordIndex:
        """Reload the snapshot from the store and rebuild the index."""
        start_time = time.time()
        with self._write_lock:
            records = tuple(self.store.list())
            index = build_index(records)
            self._records, self._index = records, index
            self._stats["index_rebuilds"] += 1

        logger.info(
            "index_rebuilt",
            total_records=len(records),
            build_time_ms=round((time.time() - start_time) * 1000, 2)
        )
        return index
    
    def get(self, record_id: str) -> Optional[Record]:
        """Get a record by id."""
        return self.store.get(record_id)
    
    def add(self, data: Union[Mapping[str, Any], BaseModel]) -> Record:
        """Add a record and rebuild the index."""
        with self._write_lock:
            record = self.store.add(data)
            logger.info("record_added", record_id=record.id)
            self.refresh()
        return record

    def update(self, record_id: str, changes: Union[Mapping[str, Any], BaseModel]) -> Record:
        """Update a record and rebuild the index."""
        with self._write_lock:
            record = self.store.update(record_id, changes)
            logger.info("record_updated", record_id=record_id)
            self.refresh()
        return record

    def delete(self, record_id: str) -> None:
        """Delete a record and rebuild the index."""
        with self._write_lock:
            self.store.delete(record_id)
            logger.info("record_deleted", record_id=record_id)
            self.refresh()

    def bulk_import(
        self,
        items: Sequence[Mapping[str, Any]],
        mode: ImportMode = ImportMode.MERGE
    ) -> int:
        """Import records and rebuild the index."""
        with self._write_lock:
            count = self.store.bulk_import(items, mode)
            self.refresh()
        return count
    
    def export_all(self) -> List[Record]:
        """Full collection snapshot for export."""
        return self.store.export_all()
    
    def search(self, query: str) -> SearchResponse:
        """
        Search the current snapshot.
        
        A blank query lists the whole snapshot in store order, unscored and
        without highlights. Otherwise the engine ranks the matching records
        and each hit carries its spans and projected segments.
        
        Args:
            query: Raw query text
            
        Returns:
            SearchResponse with hits and timing
        """
        start_time = time.time()
        records, index = self._records, self._index
        
        if not query or not query.strip():
            searched = False
            hits = [
                SearchHit(record=record, score=None, matches=[], highlights=highlight_record(record))
                for record in records
            ]
            self._stats["blank_queries"] += 1
        else:
            searched = True
            hits = [
                SearchHit(
                    record=result.record,
                    score=result.score,
                    matches=list(result.matches),
                    highlights=highlight_record(result.record, result.matches),
                )
                for result in self.engine.search(index, query)
            ]
            self._stats["total_queries"] += 1
            if hits:
                self._stats["queries_with_hits"] += 1
            else:
                self._stats["queries_without_hits"] += 1
        
        execution_time = (time.time() - start_time) * 1000
        if searched:
            self._stats["total_execution_time"] += execution_time
        
        return SearchResponse(
            query=query or "",
            searched=searched,
            execution_time_ms=execution_time,
            total_results=len(hits),
            results=hits,
        )
    
    def get_stats(self) -> Dict[str, Any]:
        """Get search statistics."""
        stats = self._stats.copy()
        
        if stats["total_queries"] > 0:
            stats["average_execution_time_ms"] = (
                stats["total_execution_time"] / stats["total_queries"]
            )
        else:
            stats["average_execution_time_ms"] = 0.0
        
        stats["index_stats"] = self._index.get_stats()
        return stats
    
    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            "total_queries": 0,
            "blank_queries": 0,
            "queries_with_hits": 0,
            "queries_without_hits": 0,
            "total_execution_time": 0.0,
            "index_rebuilds": 0,
        }
