from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Identity:
    """Domain entity: an authenticated actor.

    Note: Plain data object (no DB access code). Credentials live with the
    external auth layer.
    """

    identity_id: str
    name: str
    email: Optional[str]
    role: Role


@dataclass(frozen=True)
class StudentProfile:
    student_id: str
    identity_id: str
    enrollment_no: str
    semester: int
    section: Optional[str] = None


@dataclass(frozen=True)
class TeacherProfile:
    teacher_id: str
    identity_id: str
    specialization: Optional[str] = None
    contact: Optional[str] = None
