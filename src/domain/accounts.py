"""
Account lifecycle service - registration, confirmation and login.

Account states
==============

- Unconfirmed: created by register(), holds a 6-digit confirmation code
- Confirmed: terminal, reached once via confirm() with the matching code

Transitions:
    Unconfirmed -> Confirmed   (confirm with matching email and code)

There is no way back to Unconfirmed, no code re-issue and no code expiry.
Only confirmed accounts can log in.
"""

import logging
from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

from .credentials import (
    DEFAULT_BCRYPT_COST,
    generate_confirmation_code,
    hash_password,
    verify_password,
)
from .exceptions import AuthError, ConflictError, DependencyError, NotFoundError, ValidationError
from .ports import AccountRepository, CreateResult, EmailSender

logger = logging.getLogger(__name__)

DEFAULT_CAPTCHA_ANSWER = "7"


@dataclass(frozen=True)
class RegistrationOutcome:
    """
    Result of a successful registration.

    ``confirm_code`` is only set when out-of-band delivery failed and the
    code has to be shown to the user directly.
    """

    email: str
    code_delivered: bool
    confirm_code: str | None = None


@dataclass
class AccountService:
    """
    Domain service for the account lifecycle.

    Orchestrates input checks, password hashing, code generation,
    persistence and confirmation code delivery.
    """

    repository: AccountRepository
    email_sender: EmailSender
    captcha_answer: str = DEFAULT_CAPTCHA_ANSWER
    bcrypt_cost: int = DEFAULT_BCRYPT_COST
    login_requires_email: bool = False

    def register(
        self, email: str, username: str, password: str, captcha: str
    ) -> RegistrationOutcome:
        """
        Register a new unconfirmed account and dispatch its confirmation code.

        Args:
            email: Email address (stored exactly as given)
            username: Desired username
            password: Plaintext password (will be hashed)
            captcha: Answer to the anti-automation question

        Returns:
            RegistrationOutcome describing how the code reached the user

        Raises:
            ValidationError: Missing fields, wrong captcha or malformed email
            ConflictError: Email or username already registered
            DependencyError: Account store unavailable
        """
        if not email or not username or not password or not captcha:
            raise ValidationError("Missing fields")

        if captcha != self.captcha_answer:
            raise ValidationError("Captcha failed")

        self._check_email_syntax(email)

        password_hash = hash_password(password, self.bcrypt_cost)
        code = generate_confirmation_code()

        result = self.repository.create_user(email, username, password_hash, code)
        if result == CreateResult.EMAIL_TAKEN:
            raise ConflictError("Email already exists")
        if result == CreateResult.USERNAME_TAKEN:
            raise ConflictError("Username already exists")

        logger.info("Account created for username %s", username)

        try:
            self.email_sender.send_confirmation_code(email, code)
        except DependencyError as e:
            # Undelivered code is returned for in-band display.
            logger.warning("Confirmation code delivery failed for %s: %s", email, e)
            return RegistrationOutcome(email=email, code_delivered=False, confirm_code=code)

        return RegistrationOutcome(email=email, code_delivered=True)

    def confirm(self, email: str, code: str) -> None:
        """
        Confirm the account matching email and code.

        Wrong email and wrong code are reported identically.

        Raises:
            NotFoundError: No unconfirmed account matches
        """
        if not email or not code or not self.repository.confirm_user(email, code):
            logger.info("Confirmation rejected for %s", email)
            raise NotFoundError("Invalid confirmation code")

        logger.info("Account confirmed for %s", email)

    def login(self, username: str, password: str, email: str | None = None) -> None:
        """
        Authenticate a confirmed account.

        With ``login_requires_email`` the email must be supplied and must
        belong to the same account as the username.

        Raises:
            ValidationError: Missing fields
            AuthError: Unknown/unconfirmed username or wrong password
        """
        if not username or not password:
            raise ValidationError("Missing fields")
        if self.login_requires_email and not email:
            raise ValidationError("Missing fields")

        lookup_email = email if self.login_requires_email else None
        user = self.repository.find_confirmed_user(username, lookup_email)
        if user is None:
            logger.warning("Login failed: no confirmed account for %s", username)
            raise AuthError("Invalid username")

        if not verify_password(password, user.password_hash):
            logger.warning("Login failed: wrong password for %s", username)
            raise AuthError("Wrong password")

        logger.info("Login succeeded for %s", username)

    def _check_email_syntax(self, email: str) -> None:
        """Reject strings that are not email addresses (no DNS lookups)."""
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            raise ValidationError("Invalid email") from None
