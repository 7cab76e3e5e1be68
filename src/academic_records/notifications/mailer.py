from __future__ import annotations

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional, Protocol

from .model import OutboundMessage

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    def send(self, message: OutboundMessage) -> bool:
        raise NotImplementedError


class EmailSender(Mailer):
    """SMTP mailer. When SMTP is not configured, messages are logged instead of sent."""

    def __init__(self, smtp_config: Optional[dict] = None):
        cfg = dict(smtp_config or {})
        self._enabled = bool(cfg.get("enabled", False))
        self._host = cfg.get("host", "")
        self._port = int(cfg.get("port", 587) or 587)
        self._username = cfg.get("username", "")
        self._password = cfg.get("password", "")
        self._sender = cfg.get("sender") or self._username or "noreply@academic-records.local"

    @property
    def configured(self) -> bool:
        return self._enabled and all([self._host, self._port, self._username, self._password])

    def send(self, message: OutboundMessage) -> bool:
        if not self.configured:
            logger.info("SMTP not configured; email to %s (%s) logged only", message.to, message.subject)
            logger.debug("Email body: %s", message.text)
            return True

        msg = MIMEMultipart("alternative")
        msg["From"] = f'"Academic Records" <{self._sender}>'
        msg["To"] = message.to
        msg["Subject"] = message.subject
        msg.attach(MIMEText(message.text, "plain"))
        if message.html:
            msg.attach(MIMEText(message.html, "html"))

        # Port 465 is implicit TLS, everything else upgrades with STARTTLS.
        if self._port == 465:
            with smtplib.SMTP_SSL(self._host, self._port, timeout=10) as server:
                server.login(self._username, self._password)
                server.send_message(msg)
        else:
            with smtplib.SMTP(self._host, self._port, timeout=10) as server:
                server.starttls()
                server.login(self._username, self._password)
                server.send_message(msg)

        logger.info("Email sent to %s", message.to)
        return True
