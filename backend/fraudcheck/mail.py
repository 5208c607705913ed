"""Outgoing mail over SMTP with rotating sender accounts."""

import itertools
import logging
import threading
from email.mime.text import MIMEText
from typing import Optional, Sequence

import aiosmtplib

from . import config
from .exceptions import DeliveryError

logger = logging.getLogger(__name__)


class Mailer:
    """Async SMTP mailer.

    Each message is sent from the next configured sender account in turn,
    so the daily quota of a single mailbox is spread across all of them.

    Args:
        accounts: (user, password) pairs used to authenticate with the server.
        host: SMTP server host name.
        port: SMTP server port; STARTTLS is always negotiated.
        timeout: Seconds to wait on the server before giving up.
    """

    def __init__(
        self,
        accounts: Sequence[tuple[str, str]],
        host: str = "smtp.gmail.com",
        port: int = 587,
        timeout: float = 30,
    ):
        self.accounts = list(accounts)
        self.host = host
        self.port = port
        self.timeout = timeout
        self._rotation = itertools.cycle(self.accounts) if self.accounts else None
        self._lock = threading.Lock()

    @property
    def is_configured(self) -> bool:
        return bool(self.accounts)

    def _next_account(self) -> tuple[str, str]:
        with self._lock:
            return next(self._rotation)

    async def send(self, to_email: str, subject: str, text_content: str) -> str:
        """Send a plain-text message and return the sender it went out from.

        Raises:
            DeliveryError: If no sender is configured or the server refuses.
        """
        if not self.is_configured:
            logger.error("Mail transport is not configured, cannot send email")
            raise DeliveryError("Failed to send email: mail transport is not configured")

        user, password = self._next_account()
        message = MIMEText(text_content, "plain")
        message["From"] = user
        message["To"] = to_email
        message["Subject"] = subject

        try:
            await aiosmtplib.send(
                message,
                hostname=self.host,
                port=self.port,
                username=user,
                password=password,
                start_tls=True,
                timeout=self.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"Error sending email to {to_email} from {user}: {e}")
            raise DeliveryError(f"Failed to send email: {e}") from e

        logger.info(f"Email sent to {to_email} from {user}: {subject}")
        return user


_mailer: Optional[Mailer] = None


def get_mailer() -> Mailer:
    """Dependency returning the process-wide mailer."""
    global _mailer
    if _mailer is None:
        _mailer = Mailer(
            config.mail_accounts(),
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            timeout=config.SMTP_TIMEOUT,
        )
    return _mailer
