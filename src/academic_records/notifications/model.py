from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class Notification:
    """In-app notification targeted at one identity."""

    notification_id: str
    identity_id: str
    title: str
    body: str
    link: Optional[str]
    category: Optional[str]
    is_read: bool
    payload: dict[str, Any]
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.notification_id,
            "userId": self.identity_id,
            "title": self.title,
            "body": self.body,
            "link": self.link,
            "category": self.category,
            "isRead": self.is_read,
            "data": self.payload,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class OutboundMessage:
    to: str
    subject: str
    text: str
    html: Optional[str] = None


@dataclass
class FanoutResult:
    delivered: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed
