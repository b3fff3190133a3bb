"""
Shared test fixtures and configuration.

This module provides:
- In-memory fakes for the account repository and email sender ports
- A service fixture wired with those fakes and a cheap bcrypt cost
"""

from dataclasses import replace

import pytest

from src.domain.accounts import AccountService
from src.domain.exceptions import DependencyError
from src.domain.ports import CreateResult, User

# Lowest work factor bcrypt accepts; keeps hashing fast in tests
FAST_BCRYPT_COST = 4


class InMemoryAccountRepository:
    """Dict-backed AccountRepository with the same uniqueness rules as the users table."""

    def __init__(self) -> None:
        self.users: dict[str, User] = {}

    def create_user(
        self, email: str, username: str, password_hash: str, confirm_code: str
    ) -> CreateResult:
        if email in self.users:
            return CreateResult.EMAIL_TAKEN
        if any(user.username == username for user in self.users.values()):
            return CreateResult.USERNAME_TAKEN
        self.users[email] = User(
            email=email,
            username=username,
            password_hash=password_hash,
            confirm_code=confirm_code,
            confirmed=False,
        )
        return CreateResult.CREATED

    def confirm_user(self, email: str, code: str) -> bool:
        user = self.users.get(email)
        if user is None or user.confirmed or user.confirm_code != code:
            return False
        self.users[email] = replace(user, confirmed=True, confirm_code=None)
        return True

    def find_confirmed_user(self, username: str, email: str | None = None) -> User | None:
        for user in self.users.values():
            if user.username != username or not user.confirmed:
                continue
            if email is not None and user.email != email:
                continue
            return user
        return None


class RecordingEmailSender:
    """EmailSender that remembers every (email, code) it was asked to deliver."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def send_confirmation_code(self, email: str, code: str) -> None:
        self.sent.append((email, code))


class FailingEmailSender:
    """EmailSender whose provider is always down."""

    def send_confirmation_code(self, email: str, code: str) -> None:
        raise DependencyError("Mail delivery failed")


@pytest.fixture
def repository() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def service(repository: InMemoryAccountRepository, sender: RecordingEmailSender) -> AccountService:
    """AccountService wired with in-memory fakes."""
    return AccountService(
        repository=repository, email_sender=sender, bcrypt_cost=FAST_BCRYPT_COST
    )


@pytest.fixture
def failing_sender() -> FailingEmailSender:
    return FailingEmailSender()
