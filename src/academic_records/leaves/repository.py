from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        requester_id: str,
        student_id: Optional[str],
        leave_type: str,
        from_date: date,
        to_date: date,
        reason: str,
    ) -> LeaveRequest:
        raise NotImplementedError

    def get_by_id(self, leave_id: str) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def count_by_status(self, *, requester_id: str, status: LeaveStatus) -> int:
        raise NotImplementedError

    def find_overlapping(
        self,
        *,
        requester_id: str,
        from_date: date,
        to_date: date,
        statuses: Iterable[LeaveStatus],
    ) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def set_status(
        self,
        *,
        leave_id: str,
        expected: LeaveStatus,
        status: LeaveStatus,
        approver_id: Optional[str],
        remarks: Optional[str] = None,
    ) -> Optional[LeaveRequest]:
        """Conditional update; returns None when the row is no longer in ``expected``."""

        raise NotImplementedError

    def delete(self, *, leave_id: str, expected: LeaveStatus) -> bool:
        raise NotImplementedError

    def list_leaves(
        self,
        *,
        requester_ids: Optional[Iterable[str]] = None,
        status: Optional[LeaveStatus] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        """``requester_ids=None`` means unrestricted; empty matches nothing."""

        raise NotImplementedError
