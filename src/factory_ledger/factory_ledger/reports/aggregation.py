from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from ..core.constants import CHART_LABEL_MAX_CHARS, CHART_LABEL_SUFFIX
from ..ledger.model import DailyLog


@dataclass(frozen=True)
class Summary:
    count: int
    total_amount: float
    average_amount: float
    pending_count: int

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "total_amount": self.total_amount,
            "average_amount": self.average_amount,
            "pending_count": self.pending_count,
        }


@dataclass(frozen=True)
class SeriesPoint:
    label: str
    amount: float

    def to_dict(self) -> dict:
        return {"label": self.label, "amount": self.amount}


def truncate_label(name: str, max_chars: int = CHART_LABEL_MAX_CHARS) -> str:
    if len(name) > max_chars:
        return name[:max_chars] + CHART_LABEL_SUFFIX
    return name


def summarize(logs: Sequence[DailyLog]) -> Summary:
    count = len(logs)
    total = sum(log.amount for log in logs)
    return Summary(
        count=count,
        total_amount=total,
        average_amount=total / count if count else 0.0,
        pending_count=sum(1 for log in logs if not log.approved),
    )


def _group(logs: Iterable[DailyLog], key: Callable[[DailyLog], str]) -> dict[str, float]:
    # dict keeps the order in which each key was first seen.
    totals: dict[str, float] = {}
    for log in logs:
        k = key(log)
        totals[k] = totals.get(k, 0.0) + log.amount
    return totals


def group_by_worker(logs: Iterable[DailyLog]) -> list[SeriesPoint]:
    totals = _group(logs, lambda log: log.worker_name)
    return [SeriesPoint(label=truncate_label(name), amount=amount) for name, amount in totals.items()]


def group_by_factory(logs: Iterable[DailyLog]) -> list[SeriesPoint]:
    totals = _group(logs, lambda log: log.factory_name)
    return [SeriesPoint(label=name, amount=amount) for name, amount in totals.items()]


def status_label(log: DailyLog) -> str:
    return "Approved" if log.approved else "Pending"


def to_export_rows(logs: Iterable[DailyLog]) -> list[dict]:
    return [
        {
            "date": log.date,
            "worker_name": log.worker_name,
            "nature_of_work": log.nature_of_work,
            "amount": log.amount,
            "status": status_label(log),
        }
        for log in logs
    ]
