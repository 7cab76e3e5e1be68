from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import Notification


class NotificationRepository(Protocol):
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
        raise NotImplementedError

    def get_by_id(self, notification_id: str) -> Optional[Notification]:
        raise NotImplementedError

    def list_for_identity(
        self,
        identity_id: str,
        *,
        unread_only: bool = False,
        category: Optional[str] = None,
        limit: int = 20,
    ) -> Sequence[Notification]:
        raise NotImplementedError

    def count_unread(self, identity_id: str, *, category: Optional[str] = None) -> int:
        raise NotImplementedError

    def mark_read(self, notification_id: str) -> bool:
        raise NotImplementedError

    def mark_all_read(self, identity_id: str) -> int:
        raise NotImplementedError
