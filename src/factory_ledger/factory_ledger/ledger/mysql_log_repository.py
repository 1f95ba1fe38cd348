from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import DailyLog
from .repository import LogRepository

_COLUMNS = (
    "id, worker_id, worker_name, date, nature_of_work, amount_PKR, approved, "
    "factory_id, factory_name, created_at, created_by"
)


def _to_log(r: dict) -> DailyLog:
    return DailyLog(
        log_id=str(r["id"]),
        worker_id=str(r["worker_id"]),
        worker_name=r["worker_name"],
        date=str(r["date"]),
        nature_of_work=r["nature_of_work"],
        amount=float(r["amount_PKR"] or 0),
        approved=bool(r.get("approved")),
        factory_id=str(r["factory_id"]),
        factory_name=r["factory_name"],
        created_at=r["created_at"],
        created_by=r["created_by"],
    )


class MySQLLogRepository(LogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(
        self,
        *,
        worker_id: str,
        worker_name: str,
        date: str,
        nature_of_work: str,
        amount: float,
        factory_id: str,
        factory_name: str,
        created_at: str,
        created_by: str,
    ) -> str:
        log_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO daily_logs(
                    id, worker_id, worker_name, date, nature_of_work, amount_PKR, approved,
                    factory_id, factory_name, created_at, created_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,0,%s,%s,%s,%s)
                """,
                (
                    log_id,
                    worker_id,
                    worker_name,
                    date,
                    nature_of_work,
                    amount,
                    factory_id,
                    factory_name,
                    created_at,
                    created_by,
                ),
            )
        return log_id

    def find(
        self,
        *,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        factory_id: Optional[str] = None,
    ) -> Sequence[DailyLog]:
        where = []
        params: list = []
        if start_date is not None:
            where.append("date >= %s")
            params.append(start_date)
        if end_date is not None:
            where.append("date <= %s")
            params.append(end_date)
        if factory_id is not None:
            where.append("factory_id = %s")
            params.append(factory_id)

        sql = f"SELECT {_COLUMNS} FROM daily_logs"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY created_at, id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_log(r) for r in fetchall(cur)]
