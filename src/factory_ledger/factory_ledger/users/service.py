from __future__ import annotations

import hmac
import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import iso_timestamp
from ..common.validators import require_matching, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import (
    AuthorizationError,
    InvalidCredentials,
    NotFoundError,
    PendingApproval,
    Unauthorized,
    ValidationError,
)
from ..organization.factory_repository import FactoryRepository
from .credentials import CredentialStore, normalize_email
from .model import ApprovedManager, OwnerIdentity, PendingManager, Scope, Session
from .repository import UserRepository
from .session_state import SessionState

logger = logging.getLogger(__name__)


def _same_secret(given: str, expected: str) -> bool:
    return hmac.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


class AuthService:
    """Use cases: login, registration, session restore, logout.

    The owner credential comes from configuration; it is never stored in code.
    """

    def __init__(
        self,
        users: UserRepository,
        credentials: CredentialStore,
        state: SessionState,
        *,
        owner_email: Optional[str] = None,
        owner_password: Optional[str] = None,
    ):
        self._users = users
        self._credentials = credentials
        self._state = state
        self._owner_email = normalize_email(owner_email or "")
        self._owner_password = owner_password or ""

    def _is_owner_credential(self, email: str, password: str) -> bool:
        if not self._owner_email or not self._owner_password:
            return False
        if not isinstance(email, str) or not isinstance(password, str):
            return False
        # Evaluate both comparisons so timing does not reveal which field matched.
        email_ok = _same_secret(normalize_email(email), self._owner_email)
        password_ok = _same_secret(password, self._owner_password)
        return email_ok and password_ok

    def authenticate_owner(self, email: str, password: str, *, now: datetime | None = None) -> Session:
        if not self._is_owner_credential(email, password):
            logger.warning("Owner login rejected")
            raise InvalidCredentials("Invalid owner credentials")

        uid = self._credentials.ensure(self._owner_email, self._owner_password)
        self._users.upsert_owner(user_id=uid, email=self._owner_email, created_at=iso_timestamp(now))
        self._state.set_user_id(uid)

        identity = self._users.get_by_id(uid)
        if not isinstance(identity, OwnerIdentity):
            identity = OwnerIdentity(user_id=uid, email=self._owner_email, name=None, created_at=None)
        logger.info("Owner signed in")
        return Session.from_identity(identity)

    def authenticate_manager(self, email: str, password: str) -> Session:
        email = require_non_empty(email, "Email")
        require_non_empty(password, "Password")

        uid = self._credentials.verify(email, password)
        if uid is None:
            logger.warning("Login rejected for %s", normalize_email(email))
            raise InvalidCredentials("Wrong email or password")

        self._state.set_user_id(uid)
        identity = self._users.get_by_id(uid)

        if isinstance(identity, (OwnerIdentity, ApprovedManager)):
            logger.info("User %s signed in as %s", uid, identity.role.value)
            return Session.from_identity(identity)

        self._state.clear()
        if isinstance(identity, PendingManager):
            raise PendingApproval("Account pending approval")
        raise Unauthorized("Unauthorized access")

    def register_manager(
        self,
        email: str,
        password: str,
        name: str,
        *,
        confirm_password: Optional[str] = None,
        now: datetime | None = None,
    ) -> PendingManager:
        name = require_non_empty(name, "Name")
        email = normalize_email(require_non_empty(email, "Email"))
        require_non_empty(password, "Password")
        if confirm_password is not None:
            require_matching(password, confirm_password, "Password")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        uid = self._credentials.create(email, password)
        created_at = iso_timestamp(now)
        self._users.create_pending_manager(user_id=uid, email=email, name=name, created_at=created_at)

        logger.info("Manager %s registered, awaiting approval", uid)
        return PendingManager(user_id=uid, email=email, name=name, created_at=created_at)

    def current_session(self) -> Optional[Session]:
        uid = self._state.get_user_id()
        if not uid:
            return None

        identity = self._users.get_by_id(uid)
        if isinstance(identity, (OwnerIdentity, ApprovedManager)):
            return Session.from_identity(identity)

        self._state.clear()
        return None

    def logout(self) -> None:
        self._state.clear()
        logger.info("Signed out")


class UserService:
    """Use cases: owner-side manager approval."""

    def __init__(self, users: UserRepository, factories: FactoryRepository):
        self._users = users
        self._factories = factories

    def list_pending_managers(self, scope: Scope) -> Sequence[PendingManager]:
        if not scope.is_owner:
            raise AuthorizationError("Only the owner can review managers")
        return self._users.list_pending_managers()

    def approve_manager(
        self,
        scope: Scope,
        *,
        identity_id: str,
        factory_id: str,
        now: datetime | None = None,
    ) -> ApprovedManager:
        """Approve a pending manager and assign their factory in one write.

        Re-approving with the same factory rewrites the same fields. Two concurrent
        approvals with different factories are last-write-wins.
        """

        if not scope.is_owner:
            raise AuthorizationError("Only the owner can approve managers")

        factory = self._factories.get_by_id(factory_id) if factory_id else None
        if not factory:
            raise NotFoundError("Factory does not exist")

        identity = self._users.get_by_id(identity_id) if identity_id else None
        if identity is None:
            raise NotFoundError("Manager does not exist")
        if isinstance(identity, OwnerIdentity):
            raise ValidationError("The owner account cannot be approved as a manager")
        if isinstance(identity, ApprovedManager) and identity.factory_id != factory.factory_id:
            raise ValidationError("Manager is already assigned to another factory")

        approved_at = iso_timestamp(now)
        if isinstance(identity, ApprovedManager) and identity.approved_at:
            approved_at = identity.approved_at
        self._users.mark_approved(
            user_id=identity.user_id,
            factory_id=factory.factory_id,
            factory_name=factory.name,
            approved_at=approved_at,
        )
        logger.info("Manager %s approved for factory %s", identity.user_id, factory.factory_id)
        return ApprovedManager(
            user_id=identity.user_id,
            email=identity.email,
            name=identity.name,
            created_at=identity.created_at,
            factory_id=factory.factory_id,
            factory_name=factory.name,
            approved_at=approved_at,
        )
