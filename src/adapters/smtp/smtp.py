"""
SMTP email sender adapter - Implements EmailSender protocol.

Sends the confirmation code as a plain-text message through an SMTP
relay. Connection and protocol failures are reported as DependencyError
so the domain can fall back to showing the code in-band.
"""

import logging
import smtplib
from email.message import EmailMessage

from src.domain.exceptions import DependencyError

logger = logging.getLogger(__name__)

SUBJECT = "Your account confirmation code"


class SmtpEmailSender:
    """
    Implements EmailSender protocol via smtplib.

    A new SMTP session is opened per message; nothing is shared between
    requests.
    """

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        sender: str = "no-reply@localhost",
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._sender = sender
        self._timeout = timeout

    def send_confirmation_code(self, email: str, code: str) -> None:
        """
        Mail the confirmation code to the user.

        Raises:
            DependencyError: If the relay is unreachable or rejects the message
        """
        message = self._build_message(email, code)
        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
                if self._use_tls:
                    server.starttls()
                if self._username and self._password:
                    server.login(self._username, self._password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise DependencyError("Mail delivery failed") from e

        logger.info("Confirmation code mailed to %s", email)

    def _build_message(self, email: str, code: str) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = SUBJECT
        message["From"] = self._sender
        message["To"] = email
        message.set_content(
            f"Welcome!\n\nYour confirmation code is {code}.\n"
            "Enter it on the confirmation page to activate your account.\n"
        )
        return message
