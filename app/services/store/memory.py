import copy
import logging
import threading
from typing import Any, Dict, List, Mapping, Optional, Sequence

from app.core.exceptions import RecordNotFoundError, StoreValidationError
from app.services.store.base import (
    Collection, Filters, Record, Sort, Store, new_record_id,
)

logger = logging.getLogger(__name__)


def _sort_key(value):
    # None sorts before everything else, like a missing field in a document store
    return (value is not None, value)


class MemoryCollection(Collection):
    """
    Dict-backed collection. Records come back as deep copies so callers
    can never mutate stored state by accident.
    """

    def __init__(self, label: str, unique_fields: Sequence[str] = ()):
        self.label = label
        self.unique_fields = tuple(unique_fields)
        self._records: Dict[str, Record] = {}
        self._lock = threading.Lock()

    def _check_unique(self, record: Mapping[str, Any], ignore_id: Optional[str] = None) -> None:
        for field in self.unique_fields:
            value = record.get(field)
            if value is None:
                continue
            for existing in self._records.values():
                if existing["id"] != ignore_id and existing.get(field) == value:
                    raise StoreValidationError(
                        f"Duplicate {self.label.lower()}: {field} '{value}' already exists",
                        details={"field": field},
                    )

    def insert(self, record: Mapping[str, Any]) -> Record:
        with self._lock:
            self._check_unique(record)
            stored = copy.deepcopy(dict(record))
            stored["id"] = new_record_id()
            self._records[stored["id"]] = stored
        logger.debug(f"Inserted {self.label} {stored['id']}")
        return copy.deepcopy(stored)

    def find_many(self, filters: Optional[Filters] = None, sort: Optional[Sort] = None) -> List[Record]:
        filters = filters or {}
        with self._lock:
            matches = [
                record for record in self._records.values()
                if all(record.get(field) == value for field, value in filters.items())
            ]
            matches = copy.deepcopy(matches)

        # Stable sorts applied last key first
        for field, direction in reversed(list(sort or [])):
            matches.sort(key=lambda r: _sort_key(r.get(field)), reverse=direction < 0)
        return matches

    def find_by_id(self, record_id: str) -> Optional[Record]:
        with self._lock:
            record = self._records.get(record_id)
            return copy.deepcopy(record) if record is not None else None

    def update_by_id(self, record_id: str, fields: Mapping[str, Any]) -> Record:
        with self._lock:
            record = self._records.get(record_id)
            if record is None:
                raise RecordNotFoundError(self.label, record_id)
            updated = {**record, **copy.deepcopy(dict(fields)), "id": record_id}
            self._check_unique(updated, ignore_id=record_id)
            self._records[record_id] = updated
            return copy.deepcopy(updated)


class MemoryStore(Store):
    def __init__(self):
        super().__init__(
            students=MemoryCollection("Student", unique_fields=("student_id", "email", "clerk_user_id")),
            courses=MemoryCollection("Course", unique_fields=("course_code",)),
            test_marks=MemoryCollection("Test marks"),
            submissions=MemoryCollection("Assignment"),
        )
