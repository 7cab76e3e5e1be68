from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_local
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json, new_id
from .model import Notification
from .repository import NotificationRepository

_COLUMNS = "notification_id, identity_id, title, body, link, category, is_read, payload, created_at"


def _to_notification(row: dict) -> Notification:
    return Notification(
        notification_id=str(row["notification_id"]),
        identity_id=str(row["identity_id"]),
        title=row["title"],
        body=row["body"],
        link=row.get("link"),
        category=row.get("category"),
        is_read=bool(row.get("is_read")),
        payload=load_json(row.get("payload")),
        created_at=row["created_at"],
    )


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        identity_id: str,
        title: str,
        body: str,
        link: Optional[str],
        category: Optional[str],
        payload: dict[str, Any],
    ) -> Notification:
        notification_id = new_id()
        created_at = now_local().replace(microsecond=0)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(notification_id, identity_id, title, body, link, category, is_read, payload, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,0,%s,%s)
                """,
                (notification_id, identity_id, title, body, link, category, json.dumps(payload, default=str), created_at),
            )
        return Notification(
            notification_id=notification_id,
            identity_id=identity_id,
            title=title,
            body=body,
            link=link,
            category=category,
            is_read=False,
            payload=dict(payload),
            created_at=created_at,
        )

    def get_by_id(self, notification_id: str) -> Optional[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM notifications WHERE notification_id=%s", (notification_id,))
            row = fetchone(cur)
            return _to_notification(row) if row else None

    def list_for_identity(
        self,
        identity_id: str,
        *,
        unread_only: bool = False,
        category: Optional[str] = None,
        limit: int = 20,
    ) -> Sequence[Notification]:
        clauses = ["identity_id=%s"]
        params: list[object] = [identity_id]
        if unread_only:
            clauses.append("is_read=0")
        if category:
            clauses.append("category=%s")
            params.append(category)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM notifications
                WHERE {" AND ".join(clauses)}
                ORDER BY created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_notification(r) for r in fetchall(cur)]

    def count_unread(self, identity_id: str, *, category: Optional[str] = None) -> int:
        sql = "SELECT COUNT(*) AS n FROM notifications WHERE identity_id=%s AND is_read=0"
        params: list[object] = [identity_id]
        if category:
            sql += " AND category=%s"
            params.append(category)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def mark_read(self, notification_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE notifications SET is_read=1 WHERE notification_id=%s", (notification_id,))
            return cur.rowcount > 0

    def mark_all_read(self, identity_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE notifications SET is_read=1 WHERE identity_id=%s AND is_read=0", (identity_id,))
            return int(cur.rowcount)
