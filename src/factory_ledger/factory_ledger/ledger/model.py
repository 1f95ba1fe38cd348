from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DailyLog:
    """One piecework entry.

    worker_name and factory_name are snapshots taken at submission time; they are
    not kept in sync when a worker or factory is renamed later.
    `approved` starts False and no operation sets it.
    """

    log_id: str
    worker_id: str
    worker_name: str
    date: str
    nature_of_work: str
    amount: float
    approved: bool
    factory_id: str
    factory_name: str
    created_at: str
    created_by: str

    def to_dict(self) -> dict:
        return {
            "id": self.log_id,
            "worker_id": self.worker_id,
            "worker_name": self.worker_name,
            "date": self.date,
            "nature_of_work": self.nature_of_work,
            "amount_PKR": self.amount,
            "approved": self.approved,
            "factory_id": self.factory_id,
            "factory_name": self.factory_name,
            "created_at": self.created_at,
            "created_by": self.created_by,
        }
