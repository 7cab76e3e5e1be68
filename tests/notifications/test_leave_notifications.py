from datetime import date

from academic_records.core.enums import LeaveStatus


def _submit(container, scope):
    return container.leave_service.submit(
        scope,
        leave_type="Medical",
        from_date=date(2024, 6, 1),
        to_date=date(2024, 6, 2),
        reason="Doctor appointment in town",
    )


def test_submission_notifies_every_admin_once(container, scope_of, notifications, mailer):
    leave = _submit(container, scope_of("usr-s1"))

    recipients = sorted(n.identity_id for n in notifications.rows.values())
    assert recipients == ["usr-admin", "usr-admin2"]

    note = notifications.for_identity("usr-admin")[0]
    assert note.title == "New Leave Request"
    assert note.body == "Sam Student has submitted a leave request (Medical)"
    assert note.link == f"/admin/leaves/{leave.leave_id}"
    assert note.category == "leave"
    assert note.payload == {"leaveRequestId": leave.leave_id, "requesterId": "usr-s1", "requesterName": "Sam Student"}
    assert {m.subject for m in mailer.sent} == {"Leave Request Submitted"}


def test_decision_notifies_only_the_requester(container, scope_of, notifications):
    leave = _submit(container, scope_of("usr-s1"))
    before = len(notifications.rows)

    container.leave_service.decide(
        scope_of("usr-admin"), leave_id=leave.leave_id, new_status=LeaveStatus.REJECTED, remarks="Exams week"
    )

    new = [n for n in notifications.rows.values()][before:]
    assert [n.identity_id for n in new] == ["usr-s1"]
    assert new[0].title == "Leave Request Rejected"
    assert new[0].body == "Your leave request (Medical) from 2024-06-01 to 2024-06-02 has been rejected."
    assert new[0].link == f"/student/leaves/{leave.leave_id}"
    assert new[0].payload["approverName"] == "Ada Admin"
    assert new[0].payload["remarks"] == "Exams week"


def test_teacher_requester_gets_teacher_link(container, scope_of, notifications):
    leave = _submit(container, scope_of("usr-t1"))

    container.leave_service.decide(scope_of("usr-admin"), leave_id=leave.leave_id, new_status=LeaveStatus.APPROVED)

    note = notifications.for_identity("usr-t1")[0]
    assert note.title == "Leave Request Approved"
    assert note.link == f"/teacher/leaves/{leave.leave_id}"


def test_notification_failure_does_not_fail_the_submission(container, scope_of, notifications, leaves):
    notifications.fail_for.add("usr-admin")

    leave = _submit(container, scope_of("usr-s1"))

    assert leaves.get_by_id(leave.leave_id) is not None
    assert [n.identity_id for n in notifications.rows.values()] == ["usr-admin2"]


def test_broken_handler_is_isolated_by_the_bus(container, scope_of, leaves):
    from academic_records.leaves.events import LeaveSubmitted

    def explode(event):
        raise RuntimeError("boom")

    container.events.subscribe(LeaveSubmitted, explode)

    leave = _submit(container, scope_of("usr-s1"))

    assert leaves.get_by_id(leave.leave_id).status == LeaveStatus.PENDING
