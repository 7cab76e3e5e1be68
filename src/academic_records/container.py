from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.events import EventBus
from .courses.mysql_course_repository import MySQLCourseRepository
from .courses.repository import CourseRepository
from .database.connection import DBConfig, DatabaseConnection
from .grading.mysql_submission_repository import MySQLSubmissionRepository
from .grading.repository import SubmissionRepository
from .grading.service import GpaService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .notifications.fanout import NotificationFanout
from .notifications.handlers import LeaveNotificationHandler
from .notifications.mailer import EmailSender, Mailer
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService
from .reports.builder import ReportBuilder
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportService
from .scope.resolver import ScopeResolver
from .users.mysql_user_repository import MySQLIdentityRepository
from .users.repository import IdentityRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    identities_repo: IdentityRepository
    courses_repo: CourseRepository
    attendance_repo: AttendanceRepository
    submissions_repo: SubmissionRepository
    reports_repo: ReportRepository
    leaves_repo: LeaveRepository
    notifications_repo: NotificationRepository

    events: EventBus
    scope_resolver: ScopeResolver
    attendance_service: AttendanceService
    gpa_service: GpaService
    report_service: ReportService
    report_builder: ReportBuilder
    leave_service: LeaveService
    notification_service: NotificationService
    fanout: NotificationFanout


def assemble(
    *,
    identities_repo: IdentityRepository,
    courses_repo: CourseRepository,
    attendance_repo: AttendanceRepository,
    submissions_repo: SubmissionRepository,
    reports_repo: ReportRepository,
    leaves_repo: LeaveRepository,
    notifications_repo: NotificationRepository,
    mailer: Optional[Mailer] = None,
    notification_workers: int = 1,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services around the given repositories."""
    events = EventBus()
    fanout = NotificationFanout(notifications_repo, mailer, max_workers=notification_workers)
    LeaveNotificationHandler(fanout, identities_repo).register(events)

    gpa_service = GpaService(submissions_repo, attendance_repo)

    return Container(
        conn=conn,
        identities_repo=identities_repo,
        courses_repo=courses_repo,
        attendance_repo=attendance_repo,
        submissions_repo=submissions_repo,
        reports_repo=reports_repo,
        leaves_repo=leaves_repo,
        notifications_repo=notifications_repo,
        events=events,
        scope_resolver=ScopeResolver(identities_repo, courses_repo, attendance_repo),
        attendance_service=AttendanceService(attendance_repo, courses_repo, identities_repo),
        gpa_service=gpa_service,
        report_service=ReportService(reports_repo, identities_repo, gpa_service),
        report_builder=ReportBuilder(
            attendance_repo, courses_repo, identities_repo, reports_repo, submissions_repo, gpa_service
        ),
        leave_service=LeaveService(leaves_repo, events),
        notification_service=NotificationService(notifications_repo),
        fanout=fanout,
    )


def build_container(*, db_config: dict, smtp_config: Optional[dict] = None, notification_workers: int = 1) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return assemble(
        conn=conn,
        identities_repo=MySQLIdentityRepository(conn),
        courses_repo=MySQLCourseRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        submissions_repo=MySQLSubmissionRepository(conn),
        reports_repo=MySQLReportRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        mailer=EmailSender(smtp_config),
        notification_workers=notification_workers,
    )
