from __future__ import annotations

import io
import uuid
from types import SimpleNamespace
from datetime import date, datetime, timezone
from typing import Optional

import pytest
from PIL import Image

from src.factory_ledger.factory_ledger.core.enums import ApprovalStatus, Role
from src.factory_ledger.factory_ledger.core.exceptions import EmailInUse, PersistenceError
from src.factory_ledger.factory_ledger.ledger.model import DailyLog
from src.factory_ledger.factory_ledger.ledger.service import LedgerService
from src.factory_ledger.factory_ledger.organization.factory_model import Factory
from src.factory_ledger.factory_ledger.organization.model import Worker
from src.factory_ledger.factory_ledger.organization.service import OrganizationService
from src.factory_ledger.factory_ledger.reports.service import ReportService
from src.factory_ledger.factory_ledger.users.credentials import check_credential_policy, normalize_email
from src.factory_ledger.factory_ledger.users.model import PendingManager, identity_from_row
from src.factory_ledger.factory_ledger.users.service import AuthService, UserService

OWNER_EMAIL = "owner@example.com"
OWNER_PASSWORD = "owner-pass-123"


def _new_id() -> str:
    return uuid.uuid4().hex


class InMemorySessionState:
    def __init__(self):
        self.user_id: Optional[str] = None

    def get_user_id(self):
        return self.user_id

    def set_user_id(self, user_id):
        self.user_id = user_id

    def clear(self):
        self.user_id = None


class InMemoryCredentials:
    def __init__(self):
        self.by_email: dict[str, tuple[str, str]] = {}

    def create(self, email, password):
        email = normalize_email(email)
        check_credential_policy(email, password)
        if email in self.by_email:
            raise EmailInUse("The email address is already in use by another account")
        uid = _new_id()
        self.by_email[email] = (uid, password)
        return uid

    def verify(self, email, password):
        entry = self.by_email.get(normalize_email(email))
        if not entry or entry[1] != password:
            return None
        return entry[0]

    def ensure(self, email, password):
        email = normalize_email(email)
        entry = self.by_email.get(email)
        if not entry:
            return self.create(email, password)
        self.by_email[email] = (entry[0], password)
        return entry[0]


class InMemoryUsers:
    """Stores rows in the persisted `users` format."""

    def __init__(self):
        self.rows: dict[str, dict] = {}

    def get_by_id(self, user_id):
        row = self.rows.get(user_id)
        return identity_from_row(row) if row else None

    def upsert_owner(self, *, user_id, email, created_at):
        row = self.rows.setdefault(user_id, {"id": user_id, "createdAt": created_at})
        row.update(
            email=email,
            role=Role.OWNER.value,
            status=ApprovalStatus.APPROVED.value,
            assigned_factory=None,
            assigned_factory_name=None,
        )

    def create_pending_manager(self, *, user_id, email, name, created_at):
        self.rows[user_id] = {
            "id": user_id,
            "email": email,
            "name": name,
            "role": Role.MANAGER_PENDING.value,
            "status": ApprovalStatus.PENDING.value,
            "assigned_factory": None,
            "assigned_factory_name": None,
            "approved_at": None,
            "createdAt": created_at,
        }

    def list_pending_managers(self):
        out = []
        for row in self.rows.values():
            if row["role"] == Role.MANAGER_PENDING.value and row["status"] == ApprovalStatus.PENDING.value:
                identity = identity_from_row(row)
                if isinstance(identity, PendingManager):
                    out.append(identity)
        return out

    def mark_approved(self, *, user_id, factory_id, factory_name, approved_at):
        self.rows[user_id].update(
            role=Role.MANAGER.value,
            status=ApprovalStatus.APPROVED.value,
            assigned_factory=factory_id,
            assigned_factory_name=factory_name,
            approved_at=approved_at,
        )


class InMemoryFactories:
    def __init__(self):
        self.items: dict[str, Factory] = {}

    def get_by_id(self, factory_id):
        return self.items.get(factory_id)

    def list_all(self):
        return list(self.items.values())

    def create(self, *, name, location, created_at, created_by):
        factory_id = _new_id()
        self.items[factory_id] = Factory(
            factory_id=factory_id, name=name, location=location, created_at=created_at, created_by=created_by
        )
        return factory_id

    def add(self, name: str, location: str = "Sialkot") -> Factory:
        factory_id = self.create(name=name, location=location, created_at="2024-01-01T00:00:00.000+00:00", created_by="owner")
        return self.items[factory_id]


class InMemoryWorkers:
    def __init__(self):
        self.items: dict[str, Worker] = {}
        self.fail_on_create = False

    def get_by_id(self, worker_id):
        return self.items.get(worker_id)

    def list_workers(self, *, factory_id=None):
        return [w for w in self.items.values() if factory_id is None or w.factory_id == factory_id]

    def create(self, *, name, designation, image_url, factory_id, factory_name, created_at, created_by):
        if self.fail_on_create:
            raise PersistenceError("Database operation failed")
        worker_id = _new_id()
        self.items[worker_id] = Worker(
            worker_id=worker_id,
            name=name,
            designation=designation,
            image_url=image_url,
            factory_id=factory_id,
            factory_name=factory_name,
            created_at=created_at,
            created_by=created_by,
        )
        return worker_id

    def add(self, name: str, factory: Factory, designation: str = "Craftsman") -> Worker:
        worker_id = self.create(
            name=name,
            designation=designation,
            image_url=None,
            factory_id=factory.factory_id,
            factory_name=factory.name,
            created_at="2024-01-01T00:00:00.000+00:00",
            created_by="manager",
        )
        return self.items[worker_id]


class InMemoryLogs:
    def __init__(self):
        self.items: list[DailyLog] = []
        self.ignore_factory_filter = False
        self.last_query: Optional[dict] = None

    def append(self, *, worker_id, worker_name, date, nature_of_work, amount, factory_id, factory_name, created_at, created_by):
        log_id = _new_id()
        self.items.append(
            DailyLog(
                log_id=log_id,
                worker_id=worker_id,
                worker_name=worker_name,
                date=date,
                nature_of_work=nature_of_work,
                amount=amount,
                approved=False,
                factory_id=factory_id,
                factory_name=factory_name,
                created_at=created_at,
                created_by=created_by,
            )
        )
        return log_id

    def find(self, *, start_date=None, end_date=None, factory_id=None):
        self.last_query = {"start_date": start_date, "end_date": end_date, "factory_id": factory_id}
        out = []
        for log in self.items:
            if start_date is not None and log.date < start_date:
                continue
            if end_date is not None and log.date > end_date:
                continue
            if factory_id is not None and log.factory_id != factory_id and not self.ignore_factory_filter:
                continue
            out.append(log)
        return out


class InMemoryBlobs:
    def __init__(self):
        self.items: dict[str, bytes] = {}

    def put(self, key, data):
        self.items[key] = data
        return f"https://blobs.test/{key}"


def make_log(
    *,
    worker_name: str = "Bilal",
    day: str = "2024-03-05",
    amount: float = 100.0,
    factory_id: str = "f1",
    factory_name: str = "Factory A",
    approved: bool = False,
) -> DailyLog:
    return DailyLog(
        log_id=_new_id(),
        worker_id=f"w-{worker_name}",
        worker_name=worker_name,
        date=day,
        nature_of_work="Handle fitting",
        amount=amount,
        approved=approved,
        factory_id=factory_id,
        factory_name=factory_name,
        created_at="2024-03-05T10:00:00.000+00:00",
        created_by="manager",
    )


def image_bytes(size=(40, 30), color=(200, 160, 20), fmt="PNG") -> bytes:
    out = io.BytesIO()
    Image.new("RGB", size, color).save(out, format=fmt)
    return out.getvalue()


@pytest.fixture
def fixed_today() -> date:
    # A Friday.
    return date(2024, 3, 15)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def stores():
    return SimpleNamespace(
        users=InMemoryUsers(),
        credentials=InMemoryCredentials(),
        state=InMemorySessionState(),
        factories=InMemoryFactories(),
        workers=InMemoryWorkers(),
        logs=InMemoryLogs(),
        blobs=InMemoryBlobs(),
    )


@pytest.fixture
def auth_service(stores) -> AuthService:
    return AuthService(
        stores.users,
        stores.credentials,
        stores.state,
        owner_email=OWNER_EMAIL,
        owner_password=OWNER_PASSWORD,
    )


@pytest.fixture
def user_service(stores) -> UserService:
    return UserService(stores.users, stores.factories)


@pytest.fixture
def organization_service(stores) -> OrganizationService:
    return OrganizationService(stores.factories, stores.workers, stores.blobs, photo_max_size=64)


@pytest.fixture
def ledger_service(stores) -> LedgerService:
    return LedgerService(stores.logs, stores.workers)


@pytest.fixture
def report_service(ledger_service) -> ReportService:
    return ReportService(ledger_service)
