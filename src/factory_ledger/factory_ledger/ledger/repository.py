from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import DailyLog


class LogRepository(Protocol):
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
        """Insert a new, unapproved log and return its id."""

        raise NotImplementedError

    def find(
        self,
        *,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        factory_id: Optional[str] = None,
    ) -> Sequence[DailyLog]:
        """Logs with start_date <= date <= end_date (open bounds when None)."""

        raise NotImplementedError
