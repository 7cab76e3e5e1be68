from __future__ import annotations

from ..core.enums import LeaveStatus
from ..core.exceptions import InvalidTransitionError

# PENDING is the only entry state; APPROVED and REJECTED are terminal.
ALLOWED_TRANSITIONS: dict[LeaveStatus, frozenset[LeaveStatus]] = {
    LeaveStatus.PENDING: frozenset({LeaveStatus.PENDING, LeaveStatus.APPROVED, LeaveStatus.REJECTED}),
    LeaveStatus.APPROVED: frozenset({LeaveStatus.APPROVED}),
    LeaveStatus.REJECTED: frozenset({LeaveStatus.REJECTED}),
}

TERMINAL_STATES = frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED})


def can_transition(current: LeaveStatus, new: LeaveStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]


def ensure_transition(current: LeaveStatus, new: LeaveStatus) -> None:
    if can_transition(current, new):
        return
    if current == LeaveStatus.APPROVED and new == LeaveStatus.REJECTED:
        raise InvalidTransitionError("Cannot reject an approved leave request")
    if current == LeaveStatus.REJECTED and new == LeaveStatus.APPROVED:
        raise InvalidTransitionError("Cannot approve a rejected leave request")
    raise InvalidTransitionError(f"Cannot move a {current.value.lower()} leave request back to {new.value.lower()}")
