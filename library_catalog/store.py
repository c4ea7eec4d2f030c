"""Thin query interface over a SQLAlchemy session.

Workflows receive a ``CatalogStore`` when they are built and never reach for the global
session themselves, so tests can hand them a store bound to any session.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Type

from .extensions import db


class CatalogStore:
    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def get(self, model: Type, record_id) -> Optional[object]:
        if not record_id:
            return None
        return self.session.get(model, record_id)

    def get_many(self, model: Type, ids: Iterable) -> List:
        ids = list(ids)
        if not ids:
            return []
        return self.session.execute(db.select(model).where(model.id.in_(ids))).scalars().all()

    def find(self, model: Type, *criteria, order_by=None) -> List:
        stmt = db.select(model)
        if criteria:
            stmt = stmt.where(*criteria)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        return self.session.execute(stmt).scalars().all()

    def find_one(self, model: Type, **by) -> Optional[object]:
        return self.session.execute(db.select(model).filter_by(**by).limit(1)).scalars().first()

    def count(self, model: Type, *criteria) -> int:
        stmt = db.select(db.func.count()).select_from(model)
        if criteria:
            stmt = stmt.where(*criteria)
        return self.session.execute(stmt).scalar_one()

    def insert(self, record):
        self.session.add(record)
        self._commit()
        return record

    def save(self):
        self._commit()

    def delete(self, record):
        self.session.delete(record)
        self._commit()

    def rollback(self):
        self.session.rollback()

    def _commit(self):
        try:
            self.session.commit()
        except Exception:
            self.rollback()
            raise
