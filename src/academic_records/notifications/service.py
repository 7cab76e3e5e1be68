from __future__ import annotations

import logging
from typing import Optional

from ..core.constants import DEFAULT_NOTIFICATION_LIMIT, MAX_NOTIFICATION_LIMIT
from ..core.exceptions import AuthorizationError, NotFoundError
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


def clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_NOTIFICATION_LIMIT
    return max(1, min(int(limit), MAX_NOTIFICATION_LIMIT))


class NotificationService:
    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def list_for(
        self,
        identity_id: str,
        *,
        unread_only: bool = False,
        category: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> dict:
        items = self._notifications.list_for_identity(
            identity_id,
            unread_only=unread_only,
            category=category,
            limit=clamp_limit(limit),
        )
        return {
            "notifications": [n.to_dict() for n in items],
            "unreadCount": self._notifications.count_unread(identity_id, category=category),
        }

    def mark_read(self, identity_id: str, notification_id: str) -> Notification:
        notification = self._notifications.get_by_id(notification_id)
        if not notification:
            raise NotFoundError("Notification not found")
        if notification.identity_id != identity_id:
            raise AuthorizationError("Forbidden")
        if not notification.is_read:
            self._notifications.mark_read(notification_id)
        return self._notifications.get_by_id(notification_id) or notification

    def mark_all_read(self, identity_id: str) -> int:
        count = self._notifications.mark_all_read(identity_id)
        logger.debug("Marked %d notifications read for %s", count, identity_id)
        return count
