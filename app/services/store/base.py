"""
Record store interface.

A store is four collections of plain-dict records (students, courses,
test marks, assignment submissions). Each record carries a generated
string ``id``; cross-collection references hold the referenced ``id``.
"""
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Filters = Mapping[str, Any]
# [("submitted_at", -1)] -> newest first
Sort = Sequence[Tuple[str, int]]

ASCENDING = 1
DESCENDING = -1


def new_record_id() -> str:
    return uuid.uuid4().hex


class Collection(ABC):
    """CRUD over one kind of record."""

    #: Human-readable name used in error messages ("Assignment not found")
    label: str = "Record"

    @abstractmethod
    def insert(self, record: Mapping[str, Any]) -> Record:
        """Store a new record and return it with its generated ``id``.

        Raises StoreValidationError on a uniqueness violation.
        """

    @abstractmethod
    def find_many(self, filters: Optional[Filters] = None, sort: Optional[Sort] = None) -> List[Record]:
        """Records whose fields equal every value in ``filters``."""

    @abstractmethod
    def find_by_id(self, record_id: str) -> Optional[Record]:
        ...

    @abstractmethod
    def update_by_id(self, record_id: str, fields: Mapping[str, Any]) -> Record:
        """Overwrite ``fields`` on one record and return the updated record.

        Raises RecordNotFoundError when ``record_id`` does not exist.
        """

    def find_one(self, filters: Filters) -> Optional[Record]:
        records = self.find_many(filters)
        return records[0] if records else None

    def find_by_ids(self, record_ids: Iterable[str]) -> List[Record]:
        records = []
        for record_id in record_ids:
            record = self.find_by_id(record_id)
            if record is not None:
                records.append(record)
        return records


class Store:
    """The four collections the dashboard works with, passed around as one handle."""

    def __init__(
        self,
        students: Collection,
        courses: Collection,
        test_marks: Collection,
        submissions: Collection,
    ):
        self.students = students
        self.courses = courses
        self.test_marks = test_marks
        self.submissions = submissions

    def populate(self, records: List[Record], field: str, collection: Collection) -> List[Record]:
        """
        Reference expansion: replace the id(s) held in ``field`` with the
        referenced records from ``collection``.

        A scalar reference that no longer resolves becomes None; dangling ids
        inside a list reference are dropped. Returns new dicts, the input
        records are left untouched.
        """
        wanted = set()
        for record in records:
            value = record.get(field)
            if isinstance(value, list):
                wanted.update(value)
            elif value is not None:
                wanted.add(value)

        by_id = {ref["id"]: ref for ref in collection.find_by_ids(sorted(wanted))}

        expanded = []
        for record in records:
            value = record.get(field)
            if isinstance(value, list):
                resolved = [by_id[ref_id] for ref_id in value if ref_id in by_id]
            else:
                resolved = by_id.get(value)
            expanded.append({**record, field: resolved})
        return expanded

    def populate_one(self, record: Record, field: str, collection: Collection) -> Record:
        return self.populate([record], field, collection)[0]

    def close(self) -> None:
        """Release any resources held by the backing store."""
