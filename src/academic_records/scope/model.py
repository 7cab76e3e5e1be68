from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Scope:
    """What one identity may read or mutate during a single request.

    Admin scope is unbounded: ``is_admin`` stands for "every course and
    every student", so the id sets stay empty. Role-dependent filtering is
    answered here and nowhere else.
    """

    identity_id: str
    role: Role
    course_ids: FrozenSet[str] = field(default_factory=frozenset)
    student_ids: FrozenSet[str] = field(default_factory=frozenset)
    student_identity_ids: FrozenSet[str] = field(default_factory=frozenset)
    own_student_id: Optional[str] = None
    own_teacher_id: Optional[str] = None

    @classmethod
    def empty(cls, identity_id: str, role: Role) -> "Scope":
        return cls(identity_id=identity_id, role=role)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_teacher(self) -> bool:
        return self.role == Role.TEACHER

    @property
    def is_student(self) -> bool:
        return self.role == Role.STUDENT

    def can_mutate_course(self, course_id: str) -> bool:
        return self.is_admin or course_id in self.course_ids

    def can_view_student(self, student_id: str) -> bool:
        return self.is_admin or student_id in self.student_ids

    def can_view_identity(self, identity_id: str) -> bool:
        return self.is_admin or identity_id == self.identity_id or identity_id in self.student_identity_ids

    def can_view_attendance(self, course_id: str, student_id: str) -> bool:
        if self.is_admin:
            return True
        if self.is_teacher:
            return course_id in self.course_ids
        return student_id in self.student_ids

    def can_view_grade(self, course_id: Optional[str], student_id: str) -> bool:
        if self.is_teacher:
            return course_id in self.course_ids
        return self.is_admin or student_id in self.student_ids

    def attendance_filter(self) -> tuple[Optional[FrozenSet[str]], Optional[FrozenSet[str]]]:
        """(course_ids, student_ids) restriction for attendance queries."""
        if self.is_admin:
            return None, None
        if self.is_teacher:
            return self.course_ids, None
        return None, self.student_ids

    def student_filter(self) -> Optional[FrozenSet[str]]:
        return None if self.is_admin else self.student_ids

    def course_filter(self) -> Optional[FrozenSet[str]]:
        return None if self.is_admin else self.course_ids

    def requester_filter(self) -> Optional[FrozenSet[str]]:
        if self.is_admin:
            return None
        return self.student_identity_ids | {self.identity_id}

    def filter_students(self, student_ids: Iterable[str]) -> list[str]:
        return [s for s in student_ids if self.can_view_student(s)]

    def filter_courses(self, course_ids: Iterable[str]) -> list[str]:
        return [c for c in course_ids if self.can_mutate_course(c)]
