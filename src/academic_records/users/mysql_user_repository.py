from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Identity, StudentProfile, TeacherProfile
from .repository import IdentityRepository


def _to_identity(row: dict) -> Identity:
    return Identity(
        identity_id=str(row["identity_id"]),
        name=row["name"],
        email=row.get("email"),
        role=Role(row["role"]),
    )


def _to_student(row: dict) -> StudentProfile:
    return StudentProfile(
        student_id=str(row["student_id"]),
        identity_id=str(row["identity_id"]),
        enrollment_no=row["enrollment_no"],
        semester=int(row["semester"]),
        section=row.get("section"),
    )


class MySQLIdentityRepository(IdentityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, identity_id: str) -> Optional[Identity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT identity_id, name, email, role FROM identities WHERE identity_id=%s",
                (identity_id,),
            )
            row = fetchone(cur)
            return _to_identity(row) if row else None

    def list_by_role(self, role: Role) -> Sequence[Identity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT identity_id, name, email, role FROM identities WHERE role=%s ORDER BY created_at",
                (role.value,),
            )
            return [_to_identity(r) for r in fetchall(cur)]

    def get_student_by_identity(self, identity_id: str) -> Optional[StudentProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, identity_id, enrollment_no, semester, section
                FROM students
                WHERE identity_id=%s
                """,
                (identity_id,),
            )
            row = fetchone(cur)
            return _to_student(row) if row else None

    def get_teacher_by_identity(self, identity_id: str) -> Optional[TeacherProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT teacher_id, identity_id, specialization, contact FROM teachers WHERE identity_id=%s",
                (identity_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return TeacherProfile(
                teacher_id=str(row["teacher_id"]),
                identity_id=str(row["identity_id"]),
                specialization=row.get("specialization"),
                contact=row.get("contact"),
            )

    def get_students(self, student_ids: Iterable[str]) -> Sequence[StudentProfile]:
        ids = list(student_ids)
        if not ids:
            return []
        placeholders, params = in_clause(ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT student_id, identity_id, enrollment_no, semester, section
                FROM students
                WHERE student_id IN ({placeholders})
                """,
                params,
            )
            return [_to_student(r) for r in fetchall(cur)]

    def list_student_ids(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT student_id FROM students")
            return [str(r["student_id"]) for r in fetchall(cur)]
