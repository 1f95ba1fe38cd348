from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Persisted role of an identity."""

    OWNER = "owner"
    MANAGER_PENDING = "manager_pending"
    MANAGER = "manager"


class ApprovalStatus(str, Enum):
    """Persisted approval status of an identity."""

    PENDING = "pending"
    APPROVED = "approved"


class TimeWindow(str, Enum):
    """Reporting windows evaluated against DailyLog.date."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"
