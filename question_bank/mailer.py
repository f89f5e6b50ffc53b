"""
Outgoing mail for account notifications (temporary passwords).
"""

from __future__ import annotations

import asyncio
import logging
import smtplib
from abc import ABC, abstractmethod
from email.message import EmailMessage
from typing import Optional

logger = logging.getLogger(__name__)


class Mailer(ABC):
    @abstractmethod
    async def send(self, to: str, subject: str, message: str) -> None:
        raise NotImplementedError


class LoggingMailer(Mailer):
    """Development mailer: writes the message to the log instead of sending it."""

    async def send(self, to: str, subject: str, message: str) -> None:
        logger.info(f"Mail to {to} | {subject}\n{message}")


class SmtpMailer(Mailer):
    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _deliver(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password or "")
            smtp.send_message(msg)

    async def send(self, to: str, subject: str, message: str) -> None:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(message)

        # smtplib blocks; keep it off the event loop
        await asyncio.to_thread(self._deliver, msg)
        logger.info(f"Mail sent to {to}: {subject}")
