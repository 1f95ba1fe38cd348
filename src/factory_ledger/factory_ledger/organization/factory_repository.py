from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .factory_model import Factory


class FactoryRepository(Protocol):
    def get_by_id(self, factory_id: str) -> Optional[Factory]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Factory]:
        raise NotImplementedError

    def create(self, *, name: str, location: str, created_at: str, created_by: str) -> str:
        raise NotImplementedError
