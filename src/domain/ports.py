"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


@dataclass(frozen=True)
class User:
    """
    Stored account record.

    Invariant: ``confirmed`` is False exactly when ``confirm_code`` is set.
    """

    email: str
    username: str
    password_hash: str
    confirm_code: str | None
    confirmed: bool


class CreateResult(Enum):
    """
    Result of an account creation attempt.

    The repository derives the conflict kind from the unique constraint
    that rejected the insert.
    """

    CREATED = "created"
    EMAIL_TAKEN = "email_taken"
    USERNAME_TAKEN = "username_taken"


class AccountRepository(Protocol):
    """Port interface for account persistence."""

    def create_user(
        self, email: str, username: str, password_hash: str, confirm_code: str
    ) -> CreateResult:
        """
        Insert a new unconfirmed account.

        Uniqueness of email and username is enforced by the store itself,
        so concurrent registrations cannot both succeed.

        Args:
            email: Email address exactly as submitted
            username: Username exactly as submitted
            password_hash: bcrypt hashed password
            confirm_code: 6-digit confirmation code

        Returns:
            CREATED on success, EMAIL_TAKEN or USERNAME_TAKEN on conflict
            (EMAIL_TAKEN wins when both collide)

        Raises:
            DependencyError: If the store is unavailable
        """
        ...

    def confirm_user(self, email: str, code: str) -> bool:
        """
        Mark the unconfirmed account matching email and code as confirmed.

        Atomically sets confirmed = true and clears the stored code.

        Returns:
            True if exactly one account was confirmed, False otherwise
        """
        ...

    def find_confirmed_user(self, username: str, email: str | None = None) -> User | None:
        """
        Look up a confirmed account by username (and email, when given).

        Returns:
            The matching User or None. Unconfirmed accounts never match.
        """
        ...


class EmailSender(Protocol):
    """Port interface for confirmation code delivery."""

    def send_confirmation_code(self, email: str, code: str) -> None:
        """
        Send confirmation code to email address.

        Args:
            email: Recipient email address
            code: 6-digit confirmation code

        Raises:
            DependencyError: If the code could not be delivered
        """
        ...
