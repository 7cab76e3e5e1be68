from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, new_id
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = (
    "leave_id, requester_id, student_id, leave_type, from_date, to_date, reason, "
    "status, approver_id, remarks, created_at, updated_at"
)


def _to_leave(row: dict) -> LeaveRequest:
    return LeaveRequest(
        leave_id=str(row["leave_id"]),
        requester_id=str(row["requester_id"]),
        student_id=row.get("student_id"),
        leave_type=row["leave_type"],
        from_date=row["from_date"],
        to_date=row["to_date"],
        reason=row["reason"],
        status=LeaveStatus(row["status"]),
        approver_id=row.get("approver_id"),
        remarks=row.get("remarks"),
        created_at=row["created_at"],
        updated_at=row.get("updated_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        requester_id: str,
        student_id: Optional[str],
        leave_type: str,
        from_date: date,
        to_date: date,
        reason: str,
    ) -> LeaveRequest:
        leave_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(leave_id, requester_id, student_id, leave_type, from_date, to_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (leave_id, requester_id, student_id, leave_type, from_date, to_date, reason, LeaveStatus.PENDING.value),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE leave_id=%s", (leave_id,))
            return _to_leave(fetchone(cur))

    def get_by_id(self, leave_id: str) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE leave_id=%s", (leave_id,))
            row = fetchone(cur)
            return _to_leave(row) if row else None

    def count_by_status(self, *, requester_id: str, status: LeaveStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM leave_requests WHERE requester_id=%s AND status=%s",
                (requester_id, status.value),
            )
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def find_overlapping(
        self,
        *,
        requester_id: str,
        from_date: date,
        to_date: date,
        statuses: Iterable[LeaveStatus],
    ) -> Optional[LeaveRequest]:
        placeholders, status_values = in_clause(s.value for s in statuses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE requester_id=%s
                  AND status IN ({placeholders})
                  AND from_date <= %s AND to_date >= %s
                LIMIT 1
                """,
                (requester_id, *status_values, to_date, from_date),
            )
            row = fetchone(cur)
            return _to_leave(row) if row else None

    def set_status(
        self,
        *,
        leave_id: str,
        expected: LeaveStatus,
        status: LeaveStatus,
        approver_id: Optional[str],
        remarks: Optional[str] = None,
    ) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approver_id=%s, remarks=COALESCE(%s, remarks)
                WHERE leave_id=%s AND status=%s
                """,
                (status.value, approver_id, remarks, leave_id, expected.value),
            )
            # rowcount is 0 for a PENDING -> PENDING write that changes nothing
            if cur.rowcount <= 0 and status != expected:
                return None
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE leave_id=%s", (leave_id,))
            row = fetchone(cur)
            if not row or row["status"] != status.value:
                return None
            return _to_leave(row)

    def delete(self, *, leave_id: str, expected: LeaveStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM leave_requests WHERE leave_id=%s AND status=%s",
                (leave_id, expected.value),
            )
            return cur.rowcount > 0

    def list_leaves(
        self,
        *,
        requester_ids: Optional[Iterable[str]] = None,
        status: Optional[LeaveStatus] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if requester_ids is not None:
            ids = list(requester_ids)
            if not ids:
                return []
            placeholders, items = in_clause(ids)
            clauses.append(f"requester_id IN ({placeholders})")
            params.extend(items)
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {where}
                ORDER BY created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_leave(r) for r in fetchall(cur)]
