from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Course
from .repository import CourseRepository


def _to_course(row: dict) -> Course:
    return Course(
        course_id=str(row["course_id"]),
        title=row["title"],
        code=row["code"],
        description=row.get("description"),
        teacher_id=row.get("teacher_id"),
    )


class MySQLCourseRepository(CourseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, course_id: str) -> Optional[Course]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT course_id, title, code, description, teacher_id FROM courses WHERE course_id=%s",
                (course_id,),
            )
            row = fetchone(cur)
            return _to_course(row) if row else None

    def list_ids_for_teacher(self, teacher_id: str) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT course_id FROM courses WHERE teacher_id=%s", (teacher_id,))
            return [str(r["course_id"]) for r in fetchall(cur)]

    def list_ids(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT course_id FROM courses")
            return [str(r["course_id"]) for r in fetchall(cur)]

    def get_many(self, course_ids: Iterable[str]) -> Sequence[Course]:
        ids = list(course_ids)
        if not ids:
            return []
        placeholders, params = in_clause(ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT course_id, title, code, description, teacher_id
                FROM courses
                WHERE course_id IN ({placeholders})
                ORDER BY code
                """,
                params,
            )
            return [_to_course(r) for r in fetchall(cur)]
