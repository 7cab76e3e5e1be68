from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, is_duplicate_key, new_id
from .model import Report
from .repository import ReportRepository

_COLUMNS = "report_id, student_id, semester, gpa, remarks, created_at, updated_at"


def _to_report(row: dict) -> Report:
    return Report(
        report_id=str(row["report_id"]),
        student_id=str(row["student_id"]),
        semester=int(row["semester"]),
        gpa=float(row["gpa"]),
        remarks=row.get("remarks"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, report_id: str) -> Optional[Report]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM reports WHERE report_id=%s", (report_id,))
            row = fetchone(cur)
            return _to_report(row) if row else None

    def get_for_student_semester(self, student_id: str, semester: int) -> Optional[Report]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM reports WHERE student_id=%s AND semester=%s",
                (student_id, int(semester)),
            )
            row = fetchone(cur)
            return _to_report(row) if row else None

    def create(self, *, student_id: str, semester: int, gpa: float, remarks: Optional[str]) -> Report:
        report_id = new_id()
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO reports(report_id, student_id, semester, gpa, remarks) VALUES(%s,%s,%s,%s,%s)",
                    (report_id, student_id, int(semester), gpa, remarks),
                )
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("Report already exists for this semester") from e
            raise
        return self.get_by_id(report_id) or Report(
            report_id=report_id, student_id=student_id, semester=int(semester), gpa=gpa, remarks=remarks
        )

    def update(
        self,
        *,
        report_id: str,
        gpa: float,
        remarks: Optional[str],
        semester: Optional[int] = None,
    ) -> Optional[Report]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE reports
                    SET gpa=%s, remarks=%s, semester=COALESCE(%s, semester), updated_at=CURRENT_TIMESTAMP
                    WHERE report_id=%s
                    """,
                    (gpa, remarks, semester, report_id),
                )
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("Report already exists for this semester") from e
            raise
        return self.get_by_id(report_id)

    def list_reports(
        self,
        *,
        student_ids: Optional[Iterable[str]] = None,
        semester: Optional[int] = None,
    ) -> Sequence[Report]:
        clauses = ["1=1"]
        params: list[object] = []
        if student_ids is not None:
            ids = list(student_ids)
            if not ids:
                return []
            placeholders, items = in_clause(ids)
            clauses.append(f"student_id IN ({placeholders})")
            params.extend(items)
        if semester is not None:
            clauses.append("semester=%s")
            params.append(int(semester))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM reports WHERE {' AND '.join(clauses)} ORDER BY semester DESC, student_id",
                tuple(params),
            )
            return [_to_report(r) for r in fetchall(cur)]

    def latest_for_students(self, student_ids: Iterable[str]) -> dict[str, Report]:
        ids = list(student_ids)
        if not ids:
            return {}
        placeholders, params = in_clause(ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM reports WHERE student_id IN ({placeholders}) ORDER BY updated_at ASC",
                params,
            )
            latest: dict[str, Report] = {}
            for row in fetchall(cur):
                report = _to_report(row)
                latest[report.student_id] = report
            return latest
