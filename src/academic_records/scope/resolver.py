from __future__ import annotations

import logging

from ..attendance.repository import AttendanceRepository
from ..core.enums import Role
from ..courses.repository import CourseRepository
from ..users.repository import IdentityRepository
from .model import Scope

logger = logging.getLogger(__name__)


class ScopeResolver:
    """Computes the per-request Scope for an authenticated identity.

    Teacher: owned courses, plus students holding at least one attendance
    row in them. Student: itself only. A non-admin without a profile gets an
    empty scope.
    """

    def __init__(self, identities: IdentityRepository, courses: CourseRepository, attendance: AttendanceRepository):
        self._identities = identities
        self._courses = courses
        self._attendance = attendance

    def resolve(self, identity_id: str, role: Role) -> Scope:
        if role == Role.ADMIN:
            return Scope(identity_id=identity_id, role=role)
        if role == Role.TEACHER:
            return self._resolve_teacher(identity_id)
        return self._resolve_student(identity_id)

    def _resolve_teacher(self, identity_id: str) -> Scope:
        teacher = self._identities.get_teacher_by_identity(identity_id)
        if not teacher:
            logger.warning("No teacher profile for identity %s; scope is empty", identity_id)
            return Scope.empty(identity_id, Role.TEACHER)

        course_ids = frozenset(self._courses.list_ids_for_teacher(teacher.teacher_id))
        student_ids: frozenset[str] = frozenset()
        student_identity_ids: frozenset[str] = frozenset()
        if course_ids:
            student_ids = frozenset(self._attendance.list_student_ids_for_courses(course_ids))
            student_identity_ids = frozenset(s.identity_id for s in self._identities.get_students(student_ids))

        return Scope(
            identity_id=identity_id,
            role=Role.TEACHER,
            course_ids=course_ids,
            student_ids=student_ids,
            student_identity_ids=student_identity_ids,
            own_teacher_id=teacher.teacher_id,
        )

    def _resolve_student(self, identity_id: str) -> Scope:
        student = self._identities.get_student_by_identity(identity_id)
        if not student:
            logger.warning("No student profile for identity %s; scope is empty", identity_id)
            return Scope.empty(identity_id, Role.STUDENT)
        return Scope(
            identity_id=identity_id,
            role=Role.STUDENT,
            student_ids=frozenset({student.student_id}),
            own_student_id=student.student_id,
        )
