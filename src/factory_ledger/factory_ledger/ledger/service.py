from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import coerce_iso_date, iso_timestamp, today_local
from ..common.validators import parse_amount, require_non_empty
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..organization.repository import WorkerRepository
from ..reports.windows import LogFilter
from ..users.model import Scope
from .model import DailyLog
from .repository import LogRepository

logger = logging.getLogger(__name__)


class LedgerService:
    """Use cases: append daily logs and retrieve them per filter.

    Logs are never edited or deleted. Two identical submissions produce two rows.
    """

    def __init__(self, logs: LogRepository, workers: WorkerRepository):
        self._logs = logs
        self._workers = workers

    def submit_log(
        self,
        scope: Scope,
        *,
        worker_id: str,
        nature_of_work: str,
        amount: Any,
        work_date: Optional[str | date] = None,
        now: datetime | None = None,
    ) -> DailyLog:
        worker_id = require_non_empty(worker_id, "Worker")
        nature_of_work = require_non_empty(nature_of_work, "Nature of work")
        amount_value = parse_amount(amount)
        log_date = coerce_iso_date(work_date) if work_date else today_local().isoformat()

        if not scope.is_owner and not scope.factory_id:
            raise AuthorizationError("No factory assigned to this account")

        worker = self._workers.get_by_id(worker_id)
        if not worker:
            raise NotFoundError("Worker does not exist")

        if scope.is_owner:
            factory_id, factory_name = worker.factory_id, worker.factory_name
        else:
            if worker.factory_id != scope.factory_id:
                raise ValidationError("Worker does not belong to your factory")
            factory_id, factory_name = scope.factory_id, scope.factory_name or worker.factory_name

        created_at = iso_timestamp(now)
        log_id = self._logs.append(
            worker_id=worker.worker_id,
            worker_name=worker.name,
            date=log_date,
            nature_of_work=nature_of_work,
            amount=amount_value,
            factory_id=factory_id,
            factory_name=factory_name,
            created_at=created_at,
            created_by=scope.user_id,
        )
        logger.info("Log %s submitted for worker %s on %s", log_id, worker.worker_id, log_date)
        return DailyLog(
            log_id=log_id,
            worker_id=worker.worker_id,
            worker_name=worker.name,
            date=log_date,
            nature_of_work=nature_of_work,
            amount=amount_value,
            approved=False,
            factory_id=factory_id,
            factory_name=factory_name,
            created_at=created_at,
            created_by=scope.user_id,
        )

    def list_logs(self, log_filter: LogFilter) -> list[DailyLog]:
        rows = self._logs.find(
            start_date=log_filter.date_range.start,
            end_date=log_filter.date_range.end,
            factory_id=log_filter.factory_id,
        )
        return [log for log in rows if log_filter.matches(log)]
