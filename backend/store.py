"""
Table-scoped data access.

Business code reads and writes rows only through DataStore, by logical table
name, and gets plain dicts back. Every ORM or driver failure leaves this
module as StoreError.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError

from errors import StoreError
from models import Car, Category, Booking, Gallery, Testimonial, Profile

logger = logging.getLogger(__name__)

TABLES = {
    "cars": Car,
    "categories": Category,
    "bookings": Booking,
    "galleries": Gallery,
    "testimonials": Testimonial,
    "profiles": Profile,
}

# (column, ascending)
Order = Sequence[Tuple[str, bool]]


def row_to_dict(obj, columns: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    names = columns or [c.name for c in obj.__table__.columns]
    return {name: getattr(obj, name) for name in names}


class DataStore:
    def __init__(self, session_factory):
        self.session_factory = session_factory

    def _model(self, table: str):
        try:
            return TABLES[table]
        except KeyError:
            raise StoreError(f"Unknown table: {table}")

    def _column(self, model, name: str):
        if name not in model.__table__.columns:
            raise StoreError(f"Unknown column: {model.__tablename__}.{name}")
        return getattr(model, name)

    def _query(self, db, model, eq: Optional[Dict[str, Any]]):
        query = db.query(model)
        for name, value in (eq or {}).items():
            query = query.filter(self._column(model, name) == value)
        return query

    def select(self, table: str, columns: Optional[List[str]] = None,
               eq: Optional[Dict[str, Any]] = None, order: Optional[Order] = None,
               limit: Optional[int] = None) -> List[Dict[str, Any]]:
        model = self._model(table)
        if columns:
            for name in columns:
                self._column(model, name)
        db = self.session_factory()
        try:
            query = self._query(db, model, eq)
            for name, ascending in order or ():
                column = self._column(model, name)
                query = query.order_by(column.asc() if ascending else column.desc())
            if limit is not None:
                query = query.limit(limit)
            return [row_to_dict(obj, columns) for obj in query.all()]
        except SQLAlchemyError as e:
            logger.exception("select on %s failed", table)
            raise StoreError(str(e)) from e
        finally:
            db.close()

    def single(self, table: str, columns: Optional[List[str]] = None,
               eq: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        rows = self.select(table, columns=columns, eq=eq, limit=2)
        if len(rows) > 1:
            raise StoreError(f"Expected a single row from {table}, got several")
        return rows[0] if rows else None

    def count(self, table: str, eq: Optional[Dict[str, Any]] = None) -> int:
        model = self._model(table)
        db = self.session_factory()
        try:
            return self._query(db, model, eq).count()
        except SQLAlchemyError as e:
            logger.exception("count on %s failed", table)
            raise StoreError(str(e)) from e
        finally:
            db.close()

    def insert(self, table: str, values: Dict[str, Any]) -> Dict[str, Any]:
        model = self._model(table)
        for name in values:
            self._column(model, name)
        db = self.session_factory()
        try:
            obj = model(**values)
            db.add(obj)
            db.commit()
            db.refresh(obj)
            return row_to_dict(obj)
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("insert into %s failed", table)
            raise StoreError(str(e)) from e
        finally:
            db.close()

    def update(self, table: str, values: Dict[str, Any],
               eq: Dict[str, Any]) -> List[Dict[str, Any]]:
        model = self._model(table)
        for name in values:
            self._column(model, name)
        db = self.session_factory()
        try:
            rows = self._query(db, model, eq).all()
            for obj in rows:
                for name, value in values.items():
                    setattr(obj, name, value)
            db.commit()
            for obj in rows:
                db.refresh(obj)
            return [row_to_dict(obj) for obj in rows]
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("update on %s failed", table)
            raise StoreError(str(e)) from e
        finally:
            db.close()
