"""In-memory repositories shared by the service and HTTP tests."""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime, timedelta

import pytest

from academic_records.attendance.model import AttendanceRecord
from academic_records.container import assemble
from academic_records.core.enums import AttendanceStatus, LeaveStatus, Role
from academic_records.core.exceptions import ConflictError
from academic_records.courses.model import Course
from academic_records.grading.model import Submission
from academic_records.leaves.model import LeaveRequest
from academic_records.notifications.model import Notification
from academic_records.reports.model import Report
from academic_records.users.model import Identity, StudentProfile, TeacherProfile

BASE_TIME = datetime(2024, 5, 1, 9, 0, 0)


class FakeIdentityRepo:
    def __init__(self):
        self.identities: dict[str, Identity] = {}
        self.students: dict[str, StudentProfile] = {}
        self.teachers: dict[str, TeacherProfile] = {}

    def add(self, identity_id, name, role, *, email=None, profile_id=None):
        self.identities[identity_id] = Identity(identity_id, name, email or f"{identity_id}@school.test", role)
        if role == Role.STUDENT and profile_id:
            self.students[profile_id] = StudentProfile(profile_id, identity_id, f"ENR-{profile_id}", 1, "A")
        if role == Role.TEACHER and profile_id:
            self.teachers[profile_id] = TeacherProfile(profile_id, identity_id, "Math")

    def get_by_id(self, identity_id):
        return self.identities.get(identity_id)

    def list_by_role(self, role):
        return [i for i in self.identities.values() if i.role == role]

    def get_student_by_identity(self, identity_id):
        return next((s for s in self.students.values() if s.identity_id == identity_id), None)

    def get_teacher_by_identity(self, identity_id):
        return next((t for t in self.teachers.values() if t.identity_id == identity_id), None)

    def get_students(self, student_ids):
        return [self.students[s] for s in student_ids if s in self.students]

    def list_student_ids(self):
        return sorted(self.students)


class FakeCourseRepo:
    def __init__(self):
        self.courses: dict[str, Course] = {}

    def add(self, course_id, teacher_id=None):
        self.courses[course_id] = Course(course_id, f"Course {course_id}", course_id.upper(), None, teacher_id)

    def get_by_id(self, course_id):
        return self.courses.get(course_id)

    def list_ids_for_teacher(self, teacher_id):
        return sorted(c.course_id for c in self.courses.values() if c.teacher_id == teacher_id)

    def list_ids(self):
        return sorted(self.courses)

    def get_many(self, course_ids):
        return [self.courses[c] for c in course_ids if c in self.courses]


class FakeAttendanceRepo:
    def __init__(self):
        self.rows: dict[str, AttendanceRecord] = {}
        self._seq = 0

    def add(self, student_id, course_id, day, status=AttendanceStatus.PRESENT):
        return self.create(student_id=student_id, course_id=course_id, day=day, status=status)

    def get_by_id(self, attendance_id):
        return self.rows.get(attendance_id)

    def get_for_student_course_day(self, student_id, course_id, day):
        return self._find(student_id, course_id, day)

    def _find(self, student_id, course_id, day):
        return next(
            (
                r
                for r in self.rows.values()
                if r.student_id == student_id and r.course_id == course_id and r.attended_on == day
            ),
            None,
        )

    def create(self, *, student_id, course_id, day, status):
        if self._find(student_id, course_id, day):
            raise ConflictError("Duplicate attendance record")
        self._seq += 1
        record = AttendanceRecord(f"att-{self._seq}", student_id, course_id, day, status)
        self.rows[record.attendance_id] = record
        return record

    def update(self, *, attendance_id, day, status):
        record = self.rows.get(attendance_id)
        if not record:
            return None
        self.rows[attendance_id] = replace(record, attended_on=day, status=status)
        return self.rows[attendance_id]

    def delete(self, attendance_id):
        return self.rows.pop(attendance_id, None) is not None

    def list_records(self, *, course_ids=None, student_ids=None):
        rows = list(self.rows.values())
        if course_ids is not None:
            rows = [r for r in rows if r.course_id in set(course_ids)]
        if student_ids is not None:
            rows = [r for r in rows if r.student_id in set(student_ids)]
        return sorted(rows, key=lambda r: r.attended_on, reverse=True)

    def list_student_ids_for_courses(self, course_ids):
        ids = set(course_ids)
        return {r.student_id for r in self.rows.values() if r.course_id in ids}


class FakeSubmissionRepo:
    def __init__(self):
        self.rows: list[Submission] = []

    def add(self, student_id, course_id, grade):
        n = len(self.rows) + 1
        self.rows.append(Submission(f"sub-{n}", f"asg-{n}", student_id, grade, BASE_TIME, course_id))

    def list_for_student(self, student_id, course_id=None):
        return [
            s for s in self.rows if s.student_id == student_id and (course_id is None or s.course_id == course_id)
        ]

    def list_graded(self, course_ids=None):
        rows = [s for s in self.rows if s.grade is not None]
        if course_ids is not None:
            rows = [s for s in rows if s.course_id in set(course_ids)]
        return rows


class FakeReportRepo:
    def __init__(self):
        self.rows: dict[str, Report] = {}
        self._seq = 0

    def get_by_id(self, report_id):
        return self.rows.get(report_id)

    def get_for_student_semester(self, student_id, semester):
        return next((r for r in self.rows.values() if r.student_id == student_id and r.semester == semester), None)

    def create(self, *, student_id, semester, gpa, remarks):
        if self.get_for_student_semester(student_id, semester):
            raise ConflictError("Report already exists for this semester")
        self._seq += 1
        stamp = BASE_TIME + timedelta(minutes=self._seq)
        report = Report(f"rep-{self._seq}", student_id, semester, gpa, remarks, stamp, stamp)
        self.rows[report.report_id] = report
        return report

    def update(self, *, report_id, gpa, remarks, semester=None):
        report = self.rows.get(report_id)
        if not report:
            return None
        if semester is not None and semester != report.semester:
            if self.get_for_student_semester(report.student_id, semester):
                raise ConflictError("Report already exists for this semester")
            report = replace(report, semester=semester)
        self._seq += 1
        self.rows[report_id] = replace(
            report, gpa=gpa, remarks=remarks, updated_at=BASE_TIME + timedelta(minutes=self._seq)
        )
        return self.rows[report_id]

    def list_reports(self, *, student_ids=None, semester=None):
        rows = list(self.rows.values())
        if student_ids is not None:
            rows = [r for r in rows if r.student_id in set(student_ids)]
        if semester is not None:
            rows = [r for r in rows if r.semester == semester]
        return rows

    def latest_for_students(self, student_ids):
        latest = {}
        for report in sorted(self.rows.values(), key=lambda r: r.updated_at):
            if report.student_id in set(student_ids):
                latest[report.student_id] = report
        return latest


class FakeLeaveRepo:
    def __init__(self):
        self.rows: dict[str, LeaveRequest] = {}
        self._seq = 0

    def create(self, *, requester_id, student_id, leave_type, from_date, to_date, reason):
        self._seq += 1
        leave = LeaveRequest(
            leave_id=f"lv-{self._seq}",
            requester_id=requester_id,
            student_id=student_id,
            leave_type=leave_type,
            from_date=from_date,
            to_date=to_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            created_at=BASE_TIME + timedelta(minutes=self._seq),
        )
        self.rows[leave.leave_id] = leave
        return leave

    def get_by_id(self, leave_id):
        return self.rows.get(leave_id)

    def count_by_status(self, *, requester_id, status):
        return sum(1 for r in self.rows.values() if r.requester_id == requester_id and r.status == status)

    def find_overlapping(self, *, requester_id, from_date, to_date, statuses):
        statuses = set(statuses)
        return next(
            (
                r
                for r in self.rows.values()
                if r.requester_id == requester_id and r.status in statuses and r.overlaps(from_date, to_date)
            ),
            None,
        )

    def set_status(self, *, leave_id, expected, status, approver_id, remarks=None):
        leave = self.rows.get(leave_id)
        if not leave or leave.status != expected:
            return None
        self.rows[leave_id] = replace(
            leave,
            status=status,
            approver_id=approver_id,
            remarks=remarks if remarks is not None else leave.remarks,
        )
        return self.rows[leave_id]

    def delete(self, *, leave_id, expected):
        leave = self.rows.get(leave_id)
        if not leave or leave.status != expected:
            return False
        del self.rows[leave_id]
        return True

    def list_leaves(self, *, requester_ids=None, status=None, limit=200):
        rows = list(self.rows.values())
        if requester_ids is not None:
            rows = [r for r in rows if r.requester_id in set(requester_ids)]
        if status is not None:
            rows = [r for r in rows if r.status == status]
        return sorted(rows, key=lambda r: r.created_at, reverse=True)[:limit]


class FakeNotificationRepo:
    def __init__(self):
        self.rows: dict[str, Notification] = {}
        self.fail_for: set[str] = set()
        self._seq = 0
        self._lock = threading.Lock()

    def create(self, *, identity_id, title, body, link, category, payload):
        if identity_id in self.fail_for:
            raise RuntimeError("insert failed")
        with self._lock:
            self._seq += 1
            seq = self._seq
        n = Notification(
            f"ntf-{seq}",
            identity_id,
            title,
            body,
            link,
            category,
            False,
            dict(payload),
            BASE_TIME + timedelta(minutes=seq),
        )
        self.rows[n.notification_id] = n
        return n

    def for_identity(self, identity_id):
        return [n for n in self.rows.values() if n.identity_id == identity_id]

    def get_by_id(self, notification_id):
        return self.rows.get(notification_id)

    def list_for_identity(self, identity_id, *, unread_only=False, category=None, limit=20):
        rows = self.for_identity(identity_id)
        if unread_only:
            rows = [n for n in rows if not n.is_read]
        if category:
            rows = [n for n in rows if n.category == category]
        return sorted(rows, key=lambda n: n.created_at, reverse=True)[:limit]

    def count_unread(self, identity_id, *, category=None):
        return len(self.list_for_identity(identity_id, unread_only=True, category=category, limit=10_000))

    def mark_read(self, notification_id):
        n = self.rows.get(notification_id)
        if not n:
            return False
        self.rows[notification_id] = replace(n, is_read=True)
        return True

    def mark_all_read(self, identity_id):
        count = 0
        for n in self.for_identity(identity_id):
            if not n.is_read:
                self.rows[n.notification_id] = replace(n, is_read=True)
                count += 1
        return count


class FakeMailer:
    def __init__(self, *, fail=False):
        self.fail = fail
        self.sent = []

    def send(self, message):
        if self.fail:
            raise OSError("smtp down")
        self.sent.append(message)
        return True


@pytest.fixture
def identities():
    repo = FakeIdentityRepo()
    repo.add("usr-admin", "Ada Admin", Role.ADMIN)
    repo.add("usr-admin2", "Alan Admin", Role.ADMIN)
    repo.add("usr-t1", "Tina Teacher", Role.TEACHER, profile_id="tch-1")
    repo.add("usr-t2", "Tom Teacher", Role.TEACHER, profile_id="tch-2")
    repo.add("usr-s1", "Sam Student", Role.STUDENT, profile_id="stu-1")
    repo.add("usr-s2", "Sue Student", Role.STUDENT, profile_id="stu-2")
    repo.add("usr-s3", "Sid Student", Role.STUDENT, profile_id="stu-3")
    return repo


@pytest.fixture
def courses():
    repo = FakeCourseRepo()
    repo.add("crs-a", "tch-1")
    repo.add("crs-b", "tch-2")
    repo.add("crs-c")
    return repo


@pytest.fixture
def attendance():
    """stu-1 attends crs-a (tch-1), stu-2 attends crs-b (tch-2), stu-3 attends the unassigned crs-c."""
    repo = FakeAttendanceRepo()
    repo.add("stu-1", "crs-a", date(2024, 3, 1))
    repo.add("stu-1", "crs-a", date(2024, 3, 2), AttendanceStatus.ABSENT)
    repo.add("stu-2", "crs-b", date(2024, 3, 1), AttendanceStatus.LATE)
    repo.add("stu-3", "crs-c", date(2024, 3, 1))
    return repo


@pytest.fixture
def submissions():
    return FakeSubmissionRepo()


@pytest.fixture
def reports():
    return FakeReportRepo()


@pytest.fixture
def leaves():
    return FakeLeaveRepo()


@pytest.fixture
def notifications():
    return FakeNotificationRepo()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def failing_mailer():
    return FakeMailer(fail=True)


@pytest.fixture
def container(identities, courses, attendance, submissions, reports, leaves, notifications, mailer):
    return assemble(
        identities_repo=identities,
        courses_repo=courses,
        attendance_repo=attendance,
        submissions_repo=submissions,
        reports_repo=reports,
        leaves_repo=leaves,
        notifications_repo=notifications,
        mailer=mailer,
    )


@pytest.fixture
def scope_of(container):
    def resolve(identity_id):
        return container.scope_resolver.resolve(identity_id, container.identities_repo.get_by_id(identity_id).role)

    return resolve


@pytest.fixture
def app(container, monkeypatch):
    from academic_records.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client, identities):
    def as_identity(identity_id):
        with client.session_transaction() as sess:
            sess["user_id"] = identity_id
            sess["role"] = identities.get_by_id(identity_id).role.value
        return client

    return as_identity
