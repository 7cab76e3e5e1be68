from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: str
    requester_id: str
    student_id: Optional[str]
    leave_type: str
    from_date: date
    to_date: date
    reason: str
    status: LeaveStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    approver_id: Optional[str] = None
    remarks: Optional[str] = None

    def overlaps(self, from_date: date, to_date: date) -> bool:
        return self.from_date <= to_date and self.to_date >= from_date

    def to_dict(self) -> dict:
        return {
            "id": self.leave_id,
            "requesterId": self.requester_id,
            "studentId": self.student_id,
            "type": self.leave_type,
            "fromDate": self.from_date.strftime("%Y-%m-%d"),
            "toDate": self.to_date.strftime("%Y-%m-%d"),
            "reason": self.reason,
            "status": self.status.value,
            "approverId": self.approver_id,
            "remarks": self.remarks,
            "createdAt": self.created_at.isoformat(),
        }
