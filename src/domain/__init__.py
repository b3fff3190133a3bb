"""
Domain layer - Pure business logic with zero framework imports.

This package contains the account lifecycle logic for the game's
companion site. It defines its own port interfaces for infrastructure
abstraction, so storage and mail delivery can be swapped freely.
"""

from .accounts import AccountService, RegistrationOutcome
from .exceptions import (
    AccountError,
    AuthError,
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
)
from .ports import AccountRepository, CreateResult, EmailSender, User

__all__ = [
    "AccountError",
    "AccountRepository",
    "AccountService",
    "AuthError",
    "ConflictError",
    "CreateResult",
    "DependencyError",
    "EmailSender",
    "NotFoundError",
    "RegistrationOutcome",
    "User",
    "ValidationError",
]
