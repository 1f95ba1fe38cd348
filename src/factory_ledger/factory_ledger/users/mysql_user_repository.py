from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ApprovalStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Identity, PendingManager, identity_from_row
from .repository import UserRepository

_COLUMNS = "id, email, name, role, status, assigned_factory, assigned_factory_name, approved_at, createdAt"


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[Identity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            if not row:
                return None
            return identity_from_row(row)

    def upsert_owner(self, *, user_id: str, email: str, created_at: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(id, email, role, status, createdAt)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    email=VALUES(email),
                    role=VALUES(role),
                    status=VALUES(status),
                    assigned_factory=NULL,
                    assigned_factory_name=NULL
                """,
                (user_id, email, Role.OWNER.value, ApprovalStatus.APPROVED.value, created_at),
            )

    def create_pending_manager(self, *, user_id: str, email: str, name: str, created_at: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(id, email, name, role, status, createdAt)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (user_id, email, name, Role.MANAGER_PENDING.value, ApprovalStatus.PENDING.value, created_at),
            )

    def list_pending_managers(self) -> Sequence[PendingManager]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM users
                WHERE role=%s AND status=%s
                ORDER BY createdAt, id
                """,
                (Role.MANAGER_PENDING.value, ApprovalStatus.PENDING.value),
            )
            rows = fetchall(cur)
            out: list[PendingManager] = []
            for r in rows:
                identity = identity_from_row(r)
                if isinstance(identity, PendingManager):
                    out.append(identity)
            return out

    def mark_approved(
        self,
        *,
        user_id: str,
        factory_id: str,
        factory_name: str,
        approved_at: str,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET role=%s, status=%s, assigned_factory=%s, assigned_factory_name=%s, approved_at=%s
                WHERE id=%s
                """,
                (Role.MANAGER.value, ApprovalStatus.APPROVED.value, factory_id, factory_name, approved_at, user_id),
            )