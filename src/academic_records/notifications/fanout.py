from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional, Sequence

from ..users.model import Identity
from .mailer import Mailer
from .model import FanoutResult, OutboundMessage
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationFanout:
    """Creates one in-app notification per recipient, then tries an email.

    Recipients are handled independently: a failed insert is recorded in the
    result and the remaining recipients still get theirs. Email failures are
    logged and otherwise ignored.
    """

    def __init__(self, notifications: NotificationRepository, mailer: Optional[Mailer] = None, *, max_workers: int = 1):
        self._notifications = notifications
        self._mailer = mailer
        self._max_workers = max(1, int(max_workers))

    def notify(
        self,
        recipients: Sequence[Identity],
        *,
        title: str,
        body: str,
        link: Optional[str] = None,
        category: Optional[str] = None,
        payload: Optional[dict[str, Any]] = None,
        subject: Optional[str] = None,
        html: Optional[str] = None,
    ) -> FanoutResult:
        payload = dict(payload or {})

        def deliver(recipient: Identity) -> tuple[str, Optional[str]]:
            error = None
            try:
                self._notifications.create(
                    identity_id=recipient.identity_id,
                    title=title,
                    body=body,
                    link=link,
                    category=category,
                    payload=payload,
                )
            except Exception as e:
                logger.warning("Notification for %s failed: %s", recipient.identity_id, e)
                error = str(e) or type(e).__name__
            self._send_email(recipient, subject or title, body, html)
            return recipient.identity_id, error

        if self._max_workers > 1 and len(recipients) > 1:
            with ThreadPoolExecutor(max_workers=min(self._max_workers, len(recipients))) as pool:
                outcomes = list(pool.map(deliver, recipients))
        else:
            outcomes = [deliver(r) for r in recipients]

        result = FanoutResult()
        for identity_id, error in outcomes:
            if error is None:
                result.delivered.append(identity_id)
            else:
                result.failed[identity_id] = error

        logger.info(
            "Fan-out '%s': %d delivered, %d failed",
            title,
            len(result.delivered),
            len(result.failed),
        )
        return result

    def _send_email(self, recipient: Identity, subject: str, text: str, html: Optional[str]) -> None:
        if not self._mailer or not recipient.email:
            return
        try:
            sent = self._mailer.send(OutboundMessage(to=recipient.email, subject=subject, text=text, html=html))
            if not sent:
                logger.warning("Email to %s was not sent", recipient.email)
        except Exception as e:
            logger.warning("Email to %s failed: %s", recipient.email, e)
