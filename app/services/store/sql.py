import logging
from typing import Any, Iterable, List, Mapping, Optional, Type

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from app.core.database import Base, create_db_engine, create_session_factory, create_database_tables
from app.core.exceptions import RecordNotFoundError, StoreValidationError
from app.models import AssignmentSubmission, Course, Student, TestMarks
from app.services.store.base import (
    Collection, Filters, Record, Sort, Store, new_record_id,
)

logger = logging.getLogger(__name__)


# Storage-only columns kept out of records
INTERNAL_COLUMNS = {"seq"}


def to_record(row: Base) -> Record:
    return {
        column.name: getattr(row, column.name)
        for column in row.__table__.columns
        if column.name not in INTERNAL_COLUMNS
    }


class SQLCollection(Collection):
    """
    Collection backed by one SQLAlchemy model. Every call runs in its own
    short-lived session, so a record write is committed before it returns.
    """

    def __init__(self, model: Type[Base], session_factory: sessionmaker, label: str):
        self.model = model
        self.session_factory = session_factory
        self.label = label

    def _get(self, db, record_id: str):
        return db.scalars(select(self.model).where(self.model.id == record_id)).first()

    def _column(self, field: str):
        try:
            return self.model.__table__.columns[field]
        except KeyError:
            raise ValueError(f"{self.model.__name__} has no field '{field}'")

    def insert(self, record: Mapping[str, Any]) -> Record:
        row = self.model(**{**record, "id": new_record_id()})
        with self.session_factory() as db:
            db.add(row)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                logger.warning(f"Rejected {self.label} insert: {e.orig}")
                raise StoreValidationError(f"{self.label} validation failed: {e.orig}")
            db.refresh(row)
            logger.debug(f"Inserted {self.label} {row.id}")
            return to_record(row)

    def find_many(self, filters: Optional[Filters] = None, sort: Optional[Sort] = None) -> List[Record]:
        query = select(self.model)
        for field, value in (filters or {}).items():
            query = query.where(self._column(field) == value)

        order_by = []
        for field, direction in sort or []:
            column = self._column(field)
            order_by.append(column.desc() if direction < 0 else column.asc())
        # Insertion order, alone or as the tiebreaker of an explicit sort
        order_by.append(self.model.seq.asc())
        query = query.order_by(*order_by)

        with self.session_factory() as db:
            return [to_record(row) for row in db.scalars(query).all()]

    def find_by_id(self, record_id: str) -> Optional[Record]:
        with self.session_factory() as db:
            row = self._get(db, record_id)
            return to_record(row) if row is not None else None

    def find_by_ids(self, record_ids: Iterable[str]) -> List[Record]:
        record_ids = list(record_ids)
        if not record_ids:
            return []
        query = select(self.model).where(self.model.id.in_(record_ids))
        with self.session_factory() as db:
            return [to_record(row) for row in db.scalars(query).all()]

    def update_by_id(self, record_id: str, fields: Mapping[str, Any]) -> Record:
        with self.session_factory() as db:
            row = self._get(db, record_id)
            if row is None:
                raise RecordNotFoundError(self.label, record_id)
            for field, value in fields.items():
                self._column(field)
                setattr(row, field, value)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise StoreValidationError(f"{self.label} validation failed: {e.orig}")
            db.refresh(row)
            return to_record(row)


class SQLStore(Store):
    """Store over a relational database through SQLAlchemy."""

    def __init__(self, engine: Engine):
        self.engine = engine
        session_factory = create_session_factory(engine)
        super().__init__(
            students=SQLCollection(Student, session_factory, "Student"),
            courses=SQLCollection(Course, session_factory, "Course"),
            test_marks=SQLCollection(TestMarks, session_factory, "Test marks"),
            submissions=SQLCollection(AssignmentSubmission, session_factory, "Assignment"),
        )

    @classmethod
    def from_url(cls, database_url: str = None, create_tables: bool = False) -> "SQLStore":
        engine = create_db_engine(database_url)
        if create_tables:
            create_database_tables(engine)
        logger.info(f"SQL store ready on {engine.url.render_as_string(hide_password=True)}")
        return cls(engine)

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database engine disposed")
