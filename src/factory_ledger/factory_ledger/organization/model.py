from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class Worker:
    """Domain entity: a person employed at one factory for its lifetime.

    factory_name is a snapshot of the factory's name at creation time.
    """

    worker_id: str
    name: str
    designation: str
    image_url: Optional[str]
    factory_id: str
    factory_name: str
    created_at: str
    created_by: str

    def to_dict(self) -> dict:
        return asdict(self)
