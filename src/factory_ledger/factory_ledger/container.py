from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_PHOTO_MAX_SIZE
from .database.connection import DBConfig, DatabaseConnection
from .ledger.mysql_log_repository import MySQLLogRepository
from .ledger.service import LedgerService
from .organization.mysql_factory_repository import MySQLFactoryRepository
from .organization.mysql_worker_repository import MySQLWorkerRepository
from .organization.service import OrganizationService
from .reports.service import ReportService
from .storage.blob_store import LocalBlobStore
from .users.mysql_credential_store import MySQLCredentialStore
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService
from .users.session_state import FlaskSessionState, SessionState


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    blobs: LocalBlobStore

    users_repo: MySQLUserRepository
    credentials: MySQLCredentialStore
    factories_repo: MySQLFactoryRepository
    workers_repo: MySQLWorkerRepository
    logs_repo: MySQLLogRepository

    auth_service: AuthService
    user_service: UserService
    organization_service: OrganizationService
    ledger_service: LedgerService
    report_service: ReportService

    def close(self) -> None:
        self.conn.close()


def build_container(
    *,
    db_config: dict,
    owner_email: Optional[str],
    owner_password: Optional[str],
    blob_dir: str,
    blob_base_url: str = "/media",
    photo_max_size: int = DEFAULT_PHOTO_MAX_SIZE,
    session_state: Optional[SessionState] = None,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    blobs = LocalBlobStore(blob_dir, base_url=blob_base_url)

    users_repo = MySQLUserRepository(conn)
    credentials = MySQLCredentialStore(conn)
    factories_repo = MySQLFactoryRepository(conn)
    workers_repo = MySQLWorkerRepository(conn)
    logs_repo = MySQLLogRepository(conn)

    auth_service = AuthService(
        users_repo,
        credentials,
        session_state or FlaskSessionState(),
        owner_email=owner_email,
        owner_password=owner_password,
    )
    user_service = UserService(users_repo, factories_repo)
    organization_service = OrganizationService(
        factories_repo,
        workers_repo,
        blobs,
        photo_max_size=photo_max_size,
    )
    ledger_service = LedgerService(logs_repo, workers_repo)
    report_service = ReportService(ledger_service)

    return Container(
        conn=conn,
        blobs=blobs,
        users_repo=users_repo,
        credentials=credentials,
        factories_repo=factories_repo,
        workers_repo=workers_repo,
        logs_repo=logs_repo,
        auth_service=auth_service,
        user_service=user_service,
        organization_service=organization_service,
        ledger_service=ledger_service,
        report_service=report_service,
    )
