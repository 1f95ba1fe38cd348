from __future__ import annotations

import uuid
from typing import Optional

import mysql.connector
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import iso_timestamp
from ..core.exceptions import EmailInUse, PersistenceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .credentials import CredentialStore, check_credential_policy, normalize_email


class MySQLCredentialStore(CredentialStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get(self, email: str) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT uid, email, password_hash FROM credentials WHERE email=%s", (email,))
            return fetchone(cur)

    def create(self, email: str, password: str) -> str:
        email = normalize_email(email)
        check_credential_policy(email, password)

        if self._get(email):
            raise EmailInUse("The email address is already in use by another account")

        uid = uuid.uuid4().hex
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO credentials(uid, email, password_hash, created_at) VALUES(%s,%s,%s,%s)",
                    (uid, email, generate_password_hash(password), iso_timestamp()),
                )
        except PersistenceError as e:
            # Lost a race with a concurrent registration of the same address.
            if isinstance(e.__cause__, mysql.connector.IntegrityError):
                raise EmailInUse("The email address is already in use by another account") from e
            raise
        return uid

    def verify(self, email: str, password: str) -> Optional[str]:
        row = self._get(normalize_email(email))
        if not row:
            return None
        try:
            ok = check_password_hash(row["password_hash"], password)
        except ValueError:
            # e.g. placeholder or corrupted hash values
            ok = False
        return str(row["uid"]) if ok else None

    def ensure(self, email: str, password: str) -> str:
        email = normalize_email(email)
        row = self._get(email)
        if not row:
            return self.create(email, password)

        try:
            ok = check_password_hash(row["password_hash"], password)
        except ValueError:
            ok = False
        if not ok:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "UPDATE credentials SET password_hash=%s WHERE uid=%s",
                    (generate_password_hash(password), row["uid"]),
                )
        return str(row["uid"])
