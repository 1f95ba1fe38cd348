from __future__ import annotations

from typing import Optional, Protocol

from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import ValidationError, WeakCredential


class CredentialStore(Protocol):
    """E-mail/password credentials, independent of the identity records."""

    def create(self, email: str, password: str) -> str:
        """Register a new credential and return its uid.

        Raises EmailInUse or WeakCredential per the store's policy.
        """

        raise NotImplementedError

    def verify(self, email: str, password: str) -> Optional[str]:
        """Return the uid when the pair matches, else None."""

        raise NotImplementedError

    def ensure(self, email: str, password: str) -> str:
        """Create the credential or reset its password; return the uid."""

        raise NotImplementedError


def normalize_email(email: str) -> str:
    if not isinstance(email, str):
        return ""
    return email.strip().lower()


def check_credential_policy(email: str, password: str) -> None:
    """Policy shared by every credential store implementation."""

    if "@" not in email or email.startswith("@") or email.endswith("@"):
        raise ValidationError("Email address is badly formatted")
    if password is None or len(password) < MIN_PASSWORD_LENGTH:
        raise WeakCredential(f"Password should be at least {MIN_PASSWORD_LENGTH} characters")
