from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.events import EventBus
from ..common.validators import require_min_length
from ..core.constants import LEAVE_REASON_MIN_LENGTH, LEAVE_TYPE_MIN_LENGTH, MAX_PENDING_LEAVES
from ..core.enums import LeaveStatus
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    InvalidTransitionError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)
from ..scope.model import Scope
from .events import LeaveDecided, LeaveSubmitted
from .model import LeaveRequest
from .repository import LeaveRepository
from .transitions import TERMINAL_STATES, ensure_transition

logger = logging.getLogger(__name__)

BLOCKING_STATUSES = (LeaveStatus.PENDING, LeaveStatus.APPROVED)


class LeaveService:
    """Leave request lifecycle: submit, decide, withdraw and scoped reads.

    Events are published only after the state change is stored.
    """

    def __init__(self, leaves: LeaveRepository, events: EventBus, *, max_pending: int = MAX_PENDING_LEAVES):
        self._leaves = leaves
        self._events = events
        self._max_pending = max_pending

    def _get(self, leave_id: str) -> LeaveRequest:
        leave = self._leaves.get_by_id(leave_id)
        if not leave:
            raise NotFoundError("Leave request not found")
        return leave

    def submit(
        self,
        scope: Scope,
        *,
        leave_type: str,
        from_date: date,
        to_date: date,
        reason: str,
    ) -> LeaveRequest:
        if scope.is_admin:
            raise AuthorizationError("Only students and teachers can submit leave requests")

        leave_type = require_min_length(leave_type, "type", LEAVE_TYPE_MIN_LENGTH)
        reason = require_min_length(reason, "reason", LEAVE_REASON_MIN_LENGTH)
        if from_date > to_date:
            raise ValidationError("toDate must be on or after fromDate", fields=["toDate"])

        pending = self._leaves.count_by_status(requester_id=scope.identity_id, status=LeaveStatus.PENDING)
        if pending >= self._max_pending:
            raise QuotaExceededError(f"You already have {pending} pending leave requests")

        clash = self._leaves.find_overlapping(
            requester_id=scope.identity_id,
            from_date=from_date,
            to_date=to_date,
            statuses=BLOCKING_STATUSES,
        )
        if clash:
            raise ConflictError("You already have a leave request covering these dates")

        leave = self._leaves.create(
            requester_id=scope.identity_id,
            student_id=scope.own_student_id if scope.is_student else None,
            leave_type=leave_type,
            from_date=from_date,
            to_date=to_date,
            reason=reason,
        )
        logger.info(
            "Leave %s submitted by %s (%s, %s..%s)",
            leave.leave_id,
            scope.identity_id,
            leave_type,
            from_date,
            to_date,
        )
        self._events.publish(LeaveSubmitted(leave=leave))
        return leave

    def decide(
        self,
        scope: Scope,
        *,
        leave_id: str,
        new_status: LeaveStatus,
        remarks: Optional[str] = None,
    ) -> LeaveRequest:
        leave = self._get(leave_id)
        if scope.is_student or not scope.can_view_identity(leave.requester_id):
            raise AuthorizationError("You cannot decide this leave request")

        ensure_transition(leave.status, new_status)
        if leave.status == new_status and new_status in TERMINAL_STATES:
            logger.info("Leave %s already %s; nothing to do", leave_id, new_status.value)
            return leave

        approver_id = None if new_status == LeaveStatus.PENDING else scope.identity_id
        updated = self._leaves.set_status(
            leave_id=leave_id,
            expected=leave.status,
            status=new_status,
            approver_id=approver_id,
            remarks=remarks,
        )
        if updated is None:
            # Someone else decided it between our read and the conditional update.
            current = self._get(leave_id)
            ensure_transition(current.status, new_status)
            raise InvalidTransitionError("Leave request was modified concurrently")

        logger.info("Leave %s set to %s by %s", leave_id, new_status.value, scope.identity_id)
        if new_status in TERMINAL_STATES:
            self._events.publish(LeaveDecided(leave=updated, actor_id=scope.identity_id, remarks=remarks))
        return updated

    def delete(self, scope: Scope, *, leave_id: str) -> None:
        leave = self._get(leave_id)
        if not scope.is_admin and leave.requester_id != scope.identity_id:
            raise AuthorizationError("You can only delete your own leave requests")
        if leave.status != LeaveStatus.PENDING:
            raise InvalidStateError("Only pending leave requests can be deleted")
        if not self._leaves.delete(leave_id=leave_id, expected=LeaveStatus.PENDING):
            raise InvalidStateError("Only pending leave requests can be deleted")
        logger.info("Leave %s deleted by %s", leave_id, scope.identity_id)

    def get_leave(self, scope: Scope, *, leave_id: str) -> LeaveRequest:
        leave = self._get(leave_id)
        if not scope.can_view_identity(leave.requester_id):
            raise AuthorizationError("Forbidden")
        return leave

    def list_leaves(
        self,
        scope: Scope,
        *,
        status: Optional[LeaveStatus] = None,
        requester_id: Optional[str] = None,
    ) -> Sequence[LeaveRequest]:
        requester_ids = scope.requester_filter()
        if requester_id:
            requester_ids = frozenset({requester_id}) if requester_ids is None else requester_ids & {requester_id}
        return list(self._leaves.list_leaves(requester_ids=requester_ids, status=status))
