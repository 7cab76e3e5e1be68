from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import to_day
from ..core.enums import AttendanceStatus
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError
from ..courses.repository import CourseRepository
from ..scope.model import Scope
from ..users.repository import IdentityRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, courses: CourseRepository, identities: IdentityRepository):
        self._attendance = attendance
        self._courses = courses
        self._identities = identities

    def _require_course_in_scope(self, scope: Scope, course_id: str) -> None:
        if not self._courses.get_by_id(course_id):
            raise NotFoundError("Course not found")
        if not scope.can_mutate_course(course_id):
            raise AuthorizationError("You can only mark attendance for your own courses")

    def _get_visible(self, scope: Scope, attendance_id: str) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")
        if not scope.can_view_attendance(record.course_id, record.student_id):
            raise AuthorizationError("Forbidden")
        return record

    def record_attendance(
        self,
        scope: Scope,
        *,
        student_id: str,
        course_id: str,
        status: AttendanceStatus,
        on_date: Optional[date] = None,
    ) -> AttendanceRecord:
        self._require_course_in_scope(scope, course_id)
        if not self._identities.get_students([student_id]):
            raise NotFoundError("Student not found")
        day = to_day(on_date)

        if self._attendance.get_for_student_course_day(student_id, course_id, day):
            raise ConflictError("Attendance already marked for this student on this date")

        record = self._attendance.create(student_id=student_id, course_id=course_id, day=day, status=status)
        logger.info(
            "Attendance %s marked %s for student=%s course=%s day=%s",
            record.attendance_id,
            status.value,
            student_id,
            course_id,
            day,
        )
        return record

    def update_attendance(
        self,
        scope: Scope,
        *,
        attendance_id: str,
        status: Optional[AttendanceStatus] = None,
        on_date: Optional[date] = None,
    ) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")
        if not scope.can_mutate_course(record.course_id):
            raise AuthorizationError("You can only update attendance for your own courses")

        day = to_day(on_date) if on_date else record.attended_on
        if day != record.attended_on:
            clash = self._attendance.get_for_student_course_day(record.student_id, record.course_id, day)
            if clash and clash.attendance_id != record.attendance_id:
                raise ConflictError("Attendance already marked for this student on this date")

        updated = self._attendance.update(attendance_id=attendance_id, day=day, status=status or record.status)
        if not updated:
            raise NotFoundError("Attendance record not found")
        return updated

    def delete_attendance(self, scope: Scope, *, attendance_id: str) -> None:
        if not scope.is_admin:
            raise AuthorizationError("Only admins can delete attendance")
        if not self._attendance.delete(attendance_id):
            raise NotFoundError("Attendance record not found")
        logger.info("Attendance %s deleted by %s", attendance_id, scope.identity_id)

    def get_attendance(self, scope: Scope, *, attendance_id: str) -> AttendanceRecord:
        return self._get_visible(scope, attendance_id)

    def list_attendance(
        self,
        scope: Scope,
        *,
        course_id: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        course_ids, student_ids = scope.attendance_filter()
        if course_id:
            course_ids = frozenset({course_id}) if course_ids is None else course_ids & {course_id}
        if student_id:
            student_ids = frozenset({student_id}) if student_ids is None else student_ids & {student_id}

        rows = self._attendance.list_records(course_ids=course_ids, student_ids=student_ids)
        return [r for r in rows if scope.can_view_attendance(r.course_id, r.student_id)]
