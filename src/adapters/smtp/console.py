"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging confirmation codes instead of mailing them.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For local development - the code shows up in the server log.
    """

    def send_confirmation_code(self, email: str, code: str) -> None:
        """
        Log confirmation code to console (simulates email delivery).

        Args:
            email: Recipient email address
            code: 6-digit confirmation code
        """
        logger.info("[CONFIRMATION] Email: %s Code: %s", email, code)
