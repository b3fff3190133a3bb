"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresAccountRepository
from src.adapters.smtp.console import ConsoleEmailSender
from src.adapters.smtp.smtp import SmtpEmailSender
from src.config.settings import Settings, get_settings
from src.domain.accounts import AccountService
from src.domain.ports import EmailSender


def build_email_sender(settings: Settings) -> EmailSender:
    """
    Create the email sender selected by MAIL_BACKEND.

    Raises:
        RuntimeError: If the SMTP backend is selected without SMTP_HOST
    """
    if settings.mail_backend == "smtp":
        if not settings.smtp_host:
            raise RuntimeError("SMTP_HOST must be set when MAIL_BACKEND=smtp")
        return SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            sender=settings.mail_from,
            timeout=settings.smtp_timeout_seconds,
        )
    return ConsoleEmailSender()


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PostgresAccountRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresAccountRepository(pool)


def get_email_sender(request: Request) -> EmailSender:
    """Get the email sender built at startup."""
    return request.app.state.email_sender


def get_account_service(
    request: Request, settings: Settings = Depends(get_settings)
) -> AccountService:
    """
    Create account service with injected dependencies.

    Wires together the repository, email sender and account policy settings.
    """
    return AccountService(
        repository=get_repository(request),
        email_sender=get_email_sender(request),
        captcha_answer=settings.captcha_answer,
        bcrypt_cost=settings.bcrypt_cost,
        login_requires_email=settings.login_requires_email,
    )
