from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Identity, PendingManager


class UserRepository(Protocol):
    """Repository interface for identity records (the `users` collection).

    Note (DIP): services depend on this interface, not on a concrete store.
    """

    def get_by_id(self, user_id: str) -> Optional[Identity]:
        raise NotImplementedError

    def upsert_owner(self, *, user_id: str, email: str, created_at: str) -> None:
        """Create the owner record or merge owner fields into an existing one."""

        raise NotImplementedError

    def create_pending_manager(self, *, user_id: str, email: str, name: str, created_at: str) -> None:
        raise NotImplementedError

    def list_pending_managers(self) -> Sequence[PendingManager]:
        raise NotImplementedError

    def mark_approved(
        self,
        *,
        user_id: str,
        factory_id: str,
        factory_name: str,
        approved_at: str,
    ) -> None:
        """Single-record update of role/status/assigned factory; last write wins."""

        raise NotImplementedError
