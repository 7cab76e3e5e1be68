from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Identity, StudentProfile, TeacherProfile


class IdentityRepository(Protocol):
    """Repository interface for identities and their profiles.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, identity_id: str) -> Optional[Identity]:
        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[Identity]:
        raise NotImplementedError

    def get_student_by_identity(self, identity_id: str) -> Optional[StudentProfile]:
        raise NotImplementedError

    def get_teacher_by_identity(self, identity_id: str) -> Optional[TeacherProfile]:
        raise NotImplementedError

    def get_students(self, student_ids: Iterable[str]) -> Sequence[StudentProfile]:
        raise NotImplementedError

    def list_student_ids(self) -> Sequence[str]:
        raise NotImplementedError
