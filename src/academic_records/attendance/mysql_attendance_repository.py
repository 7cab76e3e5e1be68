from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, is_duplicate_key, new_id
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, student_id, course_id, attended_on, status, created_at"


def _to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=str(row["attendance_id"]),
        student_id=str(row["student_id"]),
        course_id=str(row["course_id"]),
        attended_on=row["attended_on"],
        status=AttendanceStatus(row["status"]),
        created_at=row.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE attendance_id=%s", (attendance_id,))
            row = fetchone(cur)
            return _to_record(row) if row else None

    def get_for_student_course_day(self, student_id: str, course_id: str, day: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE student_id=%s AND course_id=%s AND attended_on=%s
                """,
                (student_id, course_id, day),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def create(
        self,
        *,
        student_id: str,
        course_id: str,
        day: date,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        attendance_id = new_id()
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(attendance_id, student_id, course_id, attended_on, status)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (attendance_id, student_id, course_id, day, status.value),
                )
        except Exception as e:
            # A concurrent insert for the same (student, course, day) lost the race.
            if is_duplicate_key(e):
                raise ConflictError("Duplicate attendance record") from e
            raise
        return AttendanceRecord(
            attendance_id=attendance_id,
            student_id=student_id,
            course_id=course_id,
            attended_on=day,
            status=status,
        )

    def update(self, *, attendance_id: str, day: date, status: AttendanceStatus) -> Optional[AttendanceRecord]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "UPDATE attendance SET attended_on=%s, status=%s WHERE attendance_id=%s",
                    (day, status.value, attendance_id),
                )
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("Attendance already marked for this student on this date") from e
            raise
        return self.get_by_id(attendance_id)

    def delete(self, attendance_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE attendance_id=%s", (attendance_id,))
            return cur.rowcount > 0

    def list_records(
        self,
        *,
        course_ids: Optional[Iterable[str]] = None,
        student_ids: Optional[Iterable[str]] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["1=1"]
        params: list[object] = []

        for column, values in (("course_id", course_ids), ("student_id", student_ids)):
            if values is None:
                continue
            values = list(values)
            if not values:
                return []
            placeholders, items = in_clause(values)
            clauses.append(f"{column} IN ({placeholders})")
            params.extend(items)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE {where} ORDER BY attended_on DESC",
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_student_ids_for_courses(self, course_ids: Iterable[str]) -> set[str]:
        ids = list(course_ids)
        if not ids:
            return set()
        placeholders, params = in_clause(ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT DISTINCT student_id FROM attendance WHERE course_id IN ({placeholders})",
                params,
            )
            return {str(r["student_id"]) for r in fetchall(cur)}
