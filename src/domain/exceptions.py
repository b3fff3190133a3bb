"""
Domain exceptions - Semantic error types for the account lifecycle.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
The message of each exception is safe to show to the client.
"""


class AccountError(Exception):
    """Base class for account domain errors."""

    pass


class ValidationError(AccountError):
    """Missing or malformed input (user-correctable)."""

    pass


class ConflictError(AccountError):
    """Email or username is already registered."""

    pass


class AuthError(AccountError):
    """Login credentials were rejected."""

    pass


class NotFoundError(AccountError):
    """No unconfirmed account matches the email/code pair."""

    pass


class DependencyError(AccountError):
    """Account store or mail provider is unavailable."""

    pass
