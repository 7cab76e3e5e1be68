from datetime import date

import pytest

from academic_records.core.enums import LeaveStatus
from academic_records.core.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    InvalidTransitionError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)
from academic_records.leaves.events import LeaveDecided, LeaveSubmitted


def _submit(container, scope, start, end, leave_type="Medical", reason="Doctor appointment in town"):
    return container.leave_service.submit(scope, leave_type=leave_type, from_date=start, to_date=end, reason=reason)


@pytest.fixture
def published(container):
    seen = []
    container.events.subscribe(LeaveSubmitted, seen.append)
    container.events.subscribe(LeaveDecided, seen.append)
    return seen


def test_student_submission_links_profile(container, scope_of, published):
    leave = _submit(container, scope_of("usr-s1"), date(2024, 6, 1), date(2024, 6, 2))

    assert leave.status == LeaveStatus.PENDING
    assert leave.requester_id == "usr-s1"
    assert leave.student_id == "stu-1"
    assert published == [LeaveSubmitted(leave=leave)]


def test_teacher_submission_has_no_student(container, scope_of):
    leave = _submit(container, scope_of("usr-t1"), date(2024, 6, 1), date(2024, 6, 1))

    assert leave.student_id is None


def test_admin_cannot_submit(container, scope_of):
    with pytest.raises(AuthorizationError):
        _submit(container, scope_of("usr-admin"), date(2024, 6, 1), date(2024, 6, 2))


@pytest.mark.parametrize(
    "leave_type,reason,field",
    [("M", "Doctor appointment", "type"), ("Medical", "too short", "reason")],
)
def test_field_validation(container, scope_of, leave_type, reason, field):
    with pytest.raises(ValidationError) as exc:
        _submit(container, scope_of("usr-s1"), date(2024, 6, 1), date(2024, 6, 2), leave_type, reason)

    assert exc.value.fields == [field]


def test_reversed_range_is_rejected_on_to_date(container, scope_of, leaves):
    with pytest.raises(ValidationError) as exc:
        _submit(container, scope_of("usr-s1"), date(2024, 6, 5), date(2024, 6, 1))

    assert exc.value.fields == ["toDate"]
    assert leaves.rows == {}


def test_fourth_pending_hits_quota_until_one_is_decided(container, scope_of):
    student = scope_of("usr-s1")
    first = _submit(container, student, date(2024, 6, 1), date(2024, 6, 1))
    _submit(container, student, date(2024, 6, 3), date(2024, 6, 3))
    _submit(container, student, date(2024, 6, 5), date(2024, 6, 5))

    with pytest.raises(QuotaExceededError):
        _submit(container, student, date(2024, 6, 7), date(2024, 6, 7))

    container.leave_service.decide(scope_of("usr-admin"), leave_id=first.leave_id, new_status=LeaveStatus.APPROVED)

    assert _submit(container, student, date(2024, 6, 7), date(2024, 6, 7)).status == LeaveStatus.PENDING


def test_overlap_with_approved_conflicts_but_adjacent_succeeds(container, scope_of):
    student = scope_of("usr-s1")
    approved = _submit(container, student, date(2024, 6, 1), date(2024, 6, 5))
    container.leave_service.decide(scope_of("usr-admin"), leave_id=approved.leave_id, new_status=LeaveStatus.APPROVED)

    with pytest.raises(ConflictError):
        _submit(container, student, date(2024, 6, 3), date(2024, 6, 10))

    assert _submit(container, student, date(2024, 6, 6), date(2024, 6, 10))


def test_rejected_leave_does_not_block_dates(container, scope_of):
    student = scope_of("usr-s1")
    rejected = _submit(container, student, date(2024, 6, 1), date(2024, 6, 5))
    container.leave_service.decide(scope_of("usr-admin"), leave_id=rejected.leave_id, new_status=LeaveStatus.REJECTED)

    assert _submit(container, student, date(2024, 6, 1), date(2024, 6, 5))


def test_decide_sets_approver_and_remarks(container, scope_of, published):
    leave = _submit(container, scope_of("usr-s1"), date(2024, 6, 1), date(2024, 6, 2))

    decided = container.leave_service.decide(
        scope_of("usr-t1"), leave_id=leave.leave_id, new_status=LeaveStatus.APPROVED, remarks="Get well"
    )

    assert decided.status == LeaveStatus.APPROVED
    assert decided.approver_id == "usr-t1"
    assert decided.remarks == "Get well"
    assert published[-1] == LeaveDecided(leave=decided, actor_id="usr-t1", remarks="Get well")


def test_approved_cannot_become_rejected(container, scope_of, leaves):
    leave = _submit(container, scope_of("usr-s1"), date(2024, 6, 1), date(2024, 6, 2))
    admin = scope_of("usr-admin")
    container.leave_service.decide(admin, leave_id=leave.leave_id, new_status=LeaveStatus.APPROVED)

    with pytest.raises(InvalidTransitionError):
        container.leave_service.decide(admin, leave_id=leave.leave_id, new_status=LeaveStatus.REJECTED)

    assert leaves.get_by_id(leave.leave_id).status == LeaveStatus.APPROVED


def test_repeating_a_terminal_decision_is_a_quiet_noop(container, scope_of, published):
    leave = _submit(container, scope_of("usr-s1"), date(2024, 6, 1), date(2024, 6, 2))
    admin = scope_of("usr-admin")
    container.leave_service.decide(admin, leave_id=leave.leave_id, new_status=LeaveStatus.REJECTED)
    events_before = len(published)

    again = container.leave_service.decide(admin, leave_id=leave.leave_id, new_status=LeaveStatus.REJECTED)

    assert again.status == LeaveStatus.REJECTED
    assert len(published) == events_before


def test_pending_to_pending_clears_approver_without_event(container, scope_of, published):
    leave = _submit(container, scope_of("usr-s1"), date(2024, 6, 1), date(2024, 6, 2))

    same = container.leave_service.decide(scope_of("usr-admin"), leave_id=leave.leave_id, new_status=LeaveStatus.PENDING)

    assert same.status == LeaveStatus.PENDING
    assert same.approver_id is None
    assert not any(isinstance(e, LeaveDecided) for e in published)


def test_decide_authorization(container, scope_of):
    leave = _submit(container, scope_of("usr-s2"), date(2024, 6, 1), date(2024, 6, 2))

    with pytest.raises(AuthorizationError):
        container.leave_service.decide(scope_of("usr-t1"), leave_id=leave.leave_id, new_status=LeaveStatus.APPROVED)
    with pytest.raises(AuthorizationError):
        container.leave_service.decide(scope_of("usr-s2"), leave_id=leave.leave_id, new_status=LeaveStatus.APPROVED)

    decided = container.leave_service.decide(
        scope_of("usr-t2"), leave_id=leave.leave_id, new_status=LeaveStatus.REJECTED
    )
    assert decided.status == LeaveStatus.REJECTED


def test_decide_missing_leave(container, scope_of):
    with pytest.raises(NotFoundError):
        container.leave_service.decide(scope_of("usr-admin"), leave_id="lv-missing", new_status=LeaveStatus.APPROVED)


def test_delete_rules(container, scope_of, leaves):
    mine = _submit(container, scope_of("usr-s1"), date(2024, 6, 1), date(2024, 6, 2))
    decided = _submit(container, scope_of("usr-s1"), date(2024, 7, 1), date(2024, 7, 2))
    container.leave_service.decide(scope_of("usr-admin"), leave_id=decided.leave_id, new_status=LeaveStatus.APPROVED)

    with pytest.raises(AuthorizationError):
        container.leave_service.delete(scope_of("usr-s2"), leave_id=mine.leave_id)
    with pytest.raises(InvalidStateError):
        container.leave_service.delete(scope_of("usr-s1"), leave_id=decided.leave_id)
    with pytest.raises(NotFoundError):
        container.leave_service.delete(scope_of("usr-s1"), leave_id="lv-missing")

    container.leave_service.delete(scope_of("usr-s1"), leave_id=mine.leave_id)
    assert leaves.get_by_id(mine.leave_id) is None


def test_list_and_get_are_scoped(container, scope_of):
    s1 = _submit(container, scope_of("usr-s1"), date(2024, 6, 1), date(2024, 6, 2))
    s2 = _submit(container, scope_of("usr-s2"), date(2024, 6, 1), date(2024, 6, 2))
    t1 = _submit(container, scope_of("usr-t1"), date(2024, 6, 1), date(2024, 6, 2))
    service = container.leave_service

    assert {l.leave_id for l in service.list_leaves(scope_of("usr-admin"))} == {s1.leave_id, s2.leave_id, t1.leave_id}
    assert {l.leave_id for l in service.list_leaves(scope_of("usr-t1"))} == {s1.leave_id, t1.leave_id}
    assert [l.leave_id for l in service.list_leaves(scope_of("usr-s2"))] == [s2.leave_id]
    assert service.list_leaves(scope_of("usr-s1"), requester_id="usr-s2") == []
    assert service.list_leaves(scope_of("usr-admin"), status=LeaveStatus.APPROVED) == []

    with pytest.raises(AuthorizationError):
        service.get_leave(scope_of("usr-t1"), leave_id=s2.leave_id)
    assert service.get_leave(scope_of("usr-t1"), leave_id=s1.leave_id) == s1
