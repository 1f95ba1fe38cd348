from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from ..core.constants import CURRENCY
from .aggregation import Summary

EXPORT_FIELDS = ["date", "worker_name", "nature_of_work", "amount", "status"]


@dataclass(frozen=True)
class ReportPayload:
    """Everything an export adapter receives; rows are in log order."""

    title: str
    window: str
    period_label: str
    generated_at: datetime
    summary: Summary
    rows: list[dict]


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    mimetype: str
    content: bytes


class ExportAdapter(Protocol):
    def render(self, payload: ReportPayload) -> ExportArtifact:
        raise NotImplementedError


class CsvExportAdapter(ExportAdapter):
    """Spreadsheet-friendly export: a short summary block followed by the rows."""

    def render(self, payload: ReportPayload) -> ExportArtifact:
        out = io.StringIO()
        meta = csv.writer(out)
        meta.writerow([payload.title])
        meta.writerow(["Generated", payload.generated_at.strftime("%Y-%m-%d %H:%M:%S")])
        meta.writerow(["Period", payload.period_label])
        meta.writerow(["Total Logs", payload.summary.count])
        meta.writerow([f"Total Amount ({CURRENCY})", f"{payload.summary.total_amount:.2f}"])
        meta.writerow([f"Average per Log ({CURRENCY})", f"{payload.summary.average_amount:.2f}"])
        meta.writerow(["Pending", payload.summary.pending_count])
        meta.writerow([])

        writer = csv.DictWriter(out, fieldnames=EXPORT_FIELDS)
        writer.writeheader()
        for row in payload.rows:
            writer.writerow(row)

        filename = f"{payload.window}_report_{payload.generated_at.strftime('%Y%m%d_%H%M%S')}.csv"
        return ExportArtifact(
            filename=filename,
            mimetype="text/csv",
            content=out.getvalue().encode("utf-8-sig"),
        )
