from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .model import Submission
from .repository import SubmissionRepository

_SELECT = """
    SELECT s.submission_id, s.assignment_id, s.student_id, s.grade, s.submitted_at, a.course_id
    FROM submissions s
    JOIN assignments a ON a.assignment_id = s.assignment_id
"""


def _to_submission(r: dict) -> Submission:
    return Submission(
        submission_id=str(r["submission_id"]),
        assignment_id=str(r["assignment_id"]),
        student_id=str(r["student_id"]),
        grade=float(r["grade"]) if r.get("grade") is not None else None,
        submitted_at=r["submitted_at"],
        course_id=r.get("course_id"),
    )


class MySQLSubmissionRepository(SubmissionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, clauses: list[str], params: list[object]) -> Sequence[Submission]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {' AND '.join(clauses)}", tuple(params))
            return [_to_submission(r) for r in fetchall(cur)]

    def list_for_student(self, student_id: str, course_id: Optional[str] = None) -> Sequence[Submission]:
        clauses = ["s.student_id=%s"]
        params: list[object] = [student_id]
        if course_id is not None:
            clauses.append("a.course_id=%s")
            params.append(course_id)
        return self._select(clauses, params)

    def list_graded(self, course_ids: Optional[Iterable[str]] = None) -> Sequence[Submission]:
        clauses = ["s.grade IS NOT NULL"]
        params: list[object] = []
        if course_ids is not None:
            ids = list(course_ids)
            if not ids:
                return []
            placeholders, items = in_clause(ids)
            clauses.append(f"a.course_id IN ({placeholders})")
            params.extend(items)
        return self._select(clauses, params)
