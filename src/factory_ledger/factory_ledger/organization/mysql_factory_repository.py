from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .factory_model import Factory
from .factory_repository import FactoryRepository


def _to_factory(r: dict) -> Factory:
    return Factory(
        factory_id=str(r["id"]),
        name=r["name"],
        location=r["location"],
        created_at=r["created_at"],
        created_by=r["created_by"],
    )


class MySQLFactoryRepository(FactoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, factory_id: str) -> Optional[Factory]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, location, created_at, created_by FROM factories WHERE id=%s",
                (factory_id,),
            )
            row = fetchone(cur)
            return _to_factory(row) if row else None

    def list_all(self) -> Sequence[Factory]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, location, created_at, created_by FROM factories ORDER BY created_at, id")
            return [_to_factory(r) for r in fetchall(cur)]

    def create(self, *, name: str, location: str, created_at: str, created_by: str) -> str:
        factory_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO factories(id, name, location, created_at, created_by)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (factory_id, name, location, created_at, created_by),
            )
        return factory_id
