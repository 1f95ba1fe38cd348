from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ..core.enums import ApprovalStatus, Role


@dataclass(frozen=True)
class _IdentityBase:
    user_id: str
    email: str
    name: Optional[str]
    created_at: Optional[str]

    @property
    def display_name(self) -> str:
        return self.name or self.email


@dataclass(frozen=True)
class OwnerIdentity(_IdentityBase):
    """The single global-scope identity."""

    @property
    def role(self) -> Role:
        return Role.OWNER

    @property
    def status(self) -> ApprovalStatus:
        return ApprovalStatus.APPROVED


@dataclass(frozen=True)
class PendingManager(_IdentityBase):
    """A self-registered manager waiting for the owner's approval."""

    @property
    def role(self) -> Role:
        return Role.MANAGER_PENDING

    @property
    def status(self) -> ApprovalStatus:
        return ApprovalStatus.PENDING


@dataclass(frozen=True)
class ApprovedManager(_IdentityBase):
    """A manager scoped to exactly one factory.

    factory_name is a snapshot taken at approval time.
    """

    factory_id: str
    factory_name: str
    approved_at: Optional[str]

    @property
    def role(self) -> Role:
        return Role.MANAGER

    @property
    def status(self) -> ApprovalStatus:
        return ApprovalStatus.APPROVED


Identity = Union[OwnerIdentity, PendingManager, ApprovedManager]


def identity_from_row(row: Mapping[str, Any]) -> Optional[Identity]:
    """Classify a persisted users row into its identity variant.

    Returns None for rows in no recognised state (e.g. a manager without a factory).
    """

    common = dict(
        user_id=str(row["id"]),
        email=row.get("email") or "",
        name=row.get("name"),
        created_at=row.get("createdAt"),
    )
    role = row.get("role")
    status = row.get("status")

    if role == Role.OWNER.value:
        return OwnerIdentity(**common)
    if role == Role.MANAGER.value and status == ApprovalStatus.APPROVED.value:
        if not row.get("assigned_factory"):
            return None
        return ApprovedManager(
            **common,
            factory_id=str(row["assigned_factory"]),
            factory_name=row.get("assigned_factory_name") or "",
            approved_at=row.get("approved_at"),
        )
    if role == Role.MANAGER_PENDING.value or status == ApprovalStatus.PENDING.value:
        return PendingManager(**common)
    return None


def identity_to_row(identity: Identity) -> dict:
    """Persisted field set for an identity (inverse of identity_from_row)."""

    row = {
        "id": identity.user_id,
        "email": identity.email,
        "name": identity.name,
        "role": identity.role.value,
        "status": identity.status.value,
        "assigned_factory": None,
        "assigned_factory_name": None,
        "approved_at": None,
        "createdAt": identity.created_at,
    }
    if isinstance(identity, ApprovedManager):
        row["assigned_factory"] = identity.factory_id
        row["assigned_factory_name"] = identity.factory_name
        row["approved_at"] = identity.approved_at
    return row


@dataclass(frozen=True)
class Scope:
    """Factory restriction applied to a session.

    Owners see every factory (factory_id is None); managers see only their own.
    """

    user_id: str
    role: Role
    factory_id: Optional[str] = None
    factory_name: Optional[str] = None

    @property
    def is_owner(self) -> bool:
        return self.role == Role.OWNER

    @classmethod
    def owner(cls, user_id: str) -> "Scope":
        return cls(user_id=user_id, role=Role.OWNER)

    @classmethod
    def manager(cls, user_id: str, factory_id: str, factory_name: str) -> "Scope":
        return cls(user_id=user_id, role=Role.MANAGER, factory_id=factory_id, factory_name=factory_name)


@dataclass(frozen=True)
class Session:
    """What the client keeps after a successful login."""

    user_id: str
    email: str
    name: Optional[str]
    role: Role
    factory_id: Optional[str] = None
    factory_name: Optional[str] = None

    @classmethod
    def from_identity(cls, identity: Union[OwnerIdentity, ApprovedManager]) -> "Session":
        if isinstance(identity, ApprovedManager):
            return cls(
                user_id=identity.user_id,
                email=identity.email,
                name=identity.name,
                role=Role.MANAGER,
                factory_id=identity.factory_id,
                factory_name=identity.factory_name,
            )
        return cls(user_id=identity.user_id, email=identity.email, name=identity.name, role=Role.OWNER)

    @property
    def scope(self) -> Scope:
        return Scope(
            user_id=self.user_id,
            role=self.role,
            factory_id=self.factory_id,
            factory_name=self.factory_name,
        )

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "assigned_factory": self.factory_id,
            "assigned_factory_name": self.factory_name,
        }
