from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import today_local
from ..core.enums import TimeWindow
from ..ledger.model import DailyLog
from ..ledger.service import LedgerService
from ..users.model import Scope
from .aggregation import SeriesPoint, Summary, group_by_factory, group_by_worker, summarize, to_export_rows
from .export import CsvExportAdapter, ExportAdapter, ExportArtifact, ReportPayload
from .windows import LogFilter, parse_window, resolve_range


@dataclass(frozen=True)
class ReportData:
    filter: LogFilter
    logs: list[DailyLog]
    summary: Summary
    by_worker: list[SeriesPoint]
    by_factory: list[SeriesPoint]
    rows: list[dict]

    def to_dict(self) -> dict:
        return {
            "window": self.filter.window.value,
            "period": self.filter.period_label,
            "start": self.filter.date_range.start,
            "end": self.filter.date_range.end,
            "factory_id": self.filter.factory_id,
            "summary": self.summary.to_dict(),
            "by_worker": [p.to_dict() for p in self.by_worker],
            "by_factory": [p.to_dict() for p in self.by_factory],
            "logs": [log.to_dict() for log in self.logs],
        }


class ReportService:
    def __init__(self, ledger: LedgerService, *, exporter: Optional[ExportAdapter] = None):
        self._ledger = ledger
        self._exporter = exporter or CsvExportAdapter()

    def build_report(
        self,
        scope: Scope,
        *,
        window: TimeWindow | str,
        start: Optional[str | date] = None,
        end: Optional[str | date] = None,
        factory_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> ReportData:
        window = parse_window(window)
        date_range = resolve_range(window, today=today or today_local(), start=start, end=end)
        log_filter = LogFilter.for_scope(scope, window, date_range, selected_factory_id=factory_id)

        logs = self._ledger.list_logs(log_filter)
        return ReportData(
            filter=log_filter,
            logs=logs,
            summary=summarize(logs),
            by_worker=group_by_worker(logs),
            by_factory=group_by_factory(logs) if scope.is_owner else [],
            rows=to_export_rows(logs),
        )

    def to_payload(self, report: ReportData, *, generated_at: Optional[datetime] = None) -> ReportPayload:
        window = report.filter.window
        return ReportPayload(
            title=f"{window.value.capitalize()} Report",
            window=window.value,
            period_label=report.filter.period_label,
            generated_at=generated_at or datetime.now(),
            summary=report.summary,
            rows=report.rows,
        )

    def export(self, report: ReportData, *, generated_at: Optional[datetime] = None) -> ExportArtifact:
        return self._exporter.render(self.to_payload(report, generated_at=generated_at))
