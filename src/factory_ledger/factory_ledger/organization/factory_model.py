from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Factory:
    factory_id: str
    name: str
    location: str
    created_at: str
    created_by: str

    def to_dict(self) -> dict:
        return asdict(self)
