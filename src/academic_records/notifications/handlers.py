from __future__ import annotations

import logging
from typing import Optional

from ..common.events import EventBus
from ..core.constants import NOTIFICATION_CATEGORY_LEAVE
from ..core.enums import LeaveStatus, Role
from ..leaves.events import LeaveDecided, LeaveSubmitted
from ..users.repository import IdentityRepository
from .email_templates import leave_status_email, leave_submitted_email
from .fanout import NotificationFanout
from .model import FanoutResult

logger = logging.getLogger(__name__)


class LeaveNotificationHandler:
    """Turns leave workflow events into notifications.

    Submission goes to every admin; a decision goes back to the requester.
    """

    def __init__(self, fanout: NotificationFanout, identities: IdentityRepository):
        self._fanout = fanout
        self._identities = identities

    def register(self, bus: EventBus) -> None:
        bus.subscribe(LeaveSubmitted, self.on_leave_submitted)
        bus.subscribe(LeaveDecided, self.on_leave_decided)

    def _name_of(self, identity_id: Optional[str], fallback: str) -> str:
        if not identity_id:
            return fallback
        identity = self._identities.get_by_id(identity_id)
        return identity.name if identity else fallback

    def on_leave_submitted(self, event: LeaveSubmitted) -> FanoutResult:
        leave = event.leave
        requester_name = self._name_of(leave.requester_id, "A user")
        admins = list(self._identities.list_by_role(Role.ADMIN))
        if not admins:
            logger.warning("No admins to notify about leave %s", leave.leave_id)

        return self._fanout.notify(
            admins,
            title="New Leave Request",
            body=f"{requester_name} has submitted a leave request ({leave.leave_type})",
            link=f"/admin/leaves/{leave.leave_id}",
            category=NOTIFICATION_CATEGORY_LEAVE,
            payload={
                "leaveRequestId": leave.leave_id,
                "requesterId": leave.requester_id,
                "requesterName": requester_name,
            },
            subject="Leave Request Submitted",
            html=leave_submitted_email(requester_name, leave.leave_type, leave.from_date, leave.to_date, leave.reason),
        )

    def on_leave_decided(self, event: LeaveDecided) -> FanoutResult:
        leave = event.leave
        requester = self._identities.get_by_id(leave.requester_id)
        if not requester:
            logger.warning("Requester %s of leave %s no longer exists", leave.requester_id, leave.leave_id)
            return FanoutResult()

        label = "Approved" if leave.status == LeaveStatus.APPROVED else "Rejected"
        approver_name = self._name_of(event.actor_id, "An administrator")
        area = "teacher" if requester.role == Role.TEACHER else "student"

        return self._fanout.notify(
            [requester],
            title=f"Leave Request {label}",
            body=(
                f"Your leave request ({leave.leave_type}) from {leave.from_date:%Y-%m-%d} "
                f"to {leave.to_date:%Y-%m-%d} has been {label.lower()}."
            ),
            link=f"/{area}/leaves/{leave.leave_id}",
            category=NOTIFICATION_CATEGORY_LEAVE,
            payload={
                "leaveRequestId": leave.leave_id,
                "status": leave.status.value,
                "approverName": approver_name,
                "remarks": event.remarks,
            },
            subject=f"Leave Request {label}",
            html=leave_status_email(
                requester.name,
                leave.leave_type,
                leave.status.value,
                leave.from_date,
                leave.to_date,
                event.remarks,
            ),
        )
