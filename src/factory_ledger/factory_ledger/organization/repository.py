from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Worker


class WorkerRepository(Protocol):
    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        raise NotImplementedError

    def list_workers(self, *, factory_id: Optional[str] = None) -> Sequence[Worker]:
        """All workers, or only those of one factory."""

        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        designation: str,
        image_url: Optional[str],
        factory_id: str,
        factory_name: str,
        created_at: str,
        created_by: str,
    ) -> str:
        raise NotImplementedError
