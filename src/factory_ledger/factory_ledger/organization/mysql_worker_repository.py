from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Worker
from .repository import WorkerRepository

_COLUMNS = "id, name, designation, image_url, factory_id, factory_name, created_at, created_by"


def _to_worker(r: dict) -> Worker:
    return Worker(
        worker_id=str(r["id"]),
        name=r["name"],
        designation=r["designation"],
        image_url=r.get("image_url"),
        factory_id=str(r["factory_id"]),
        factory_name=r["factory_name"],
        created_at=r["created_at"],
        created_by=r["created_by"],
    )


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workers WHERE id=%s", (worker_id,))
            row = fetchone(cur)
            return _to_worker(row) if row else None

    def list_workers(self, *, factory_id: Optional[str] = None) -> Sequence[Worker]:
        where = []
        params: list = []
        if factory_id is not None:
            where.append("factory_id=%s")
            params.append(factory_id)

        sql = f"SELECT {_COLUMNS} FROM workers"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY created_at, id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_worker(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        name: str,
        designation: str,
        image_url: Optional[str],
        factory_id: str,
        factory_name: str,
        created_at: str,
        created_by: str,
    ) -> str:
        worker_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO workers(id, name, designation, image_url, factory_id, factory_name, created_at, created_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (worker_id, name, designation, image_url, factory_id, factory_name, created_at, created_by),
            )
        return worker_id
