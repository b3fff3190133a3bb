"""
API routes - Registration, confirmation and login endpoints.

This module defines the HTTP endpoints:
- POST /register - Create an unconfirmed account and send its code
- POST /confirm - Confirm an account with the emailed code
- POST /login - Authenticate the game client

Register and confirm answer in plain text for the website forms;
login answers with a {success, message} JSON body for the game client.
Handlers are sync so bcrypt and database calls run in the threadpool.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from src.api.dependencies import get_account_service
from src.api.models import ConfirmRequest, LoginRequest, LoginResponse, RegisterRequest
from src.domain.accounts import AccountService
from src.domain.exceptions import (
    AuthError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

router = APIRouter(tags=["accounts"])

CONFIRMED_MESSAGE = "Account confirmed successfully!"


@router.post(
    "/register",
    response_class=PlainTextResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"description": "Email or username already exists"},
        400: {"description": "Missing fields, captcha failed or invalid email"},
    },
    summary="Register a new account",
    description="Submit email, username, password and the captcha answer. "
    "A 6-digit confirmation code is emailed, or shown in the response "
    "if the email could not be sent.",
)
def register(
    request_data: RegisterRequest,
    service: AccountService = Depends(get_account_service),
) -> PlainTextResponse:
    """Register a new account and dispatch its confirmation code."""
    try:
        outcome = service.register(
            request_data.email or "",
            request_data.username or "",
            request_data.password or "",
            request_data.captcha or "",
        )
    except ValidationError as e:
        return PlainTextResponse(str(e), status_code=status.HTTP_400_BAD_REQUEST)
    except ConflictError as e:
        return PlainTextResponse(str(e), status_code=status.HTTP_200_OK)

    if outcome.code_delivered:
        message = "Account created. Check your email for the confirmation code."
    else:
        message = f"Account created. Your confirmation code is {outcome.confirm_code}"
    return PlainTextResponse(message, status_code=status.HTTP_201_CREATED)


@router.post(
    "/confirm",
    response_class=PlainTextResponse,
    summary="Confirm an account",
    description="Submit the email and the 6-digit confirmation code to activate the account.",
)
def confirm(
    request_data: ConfirmRequest,
    service: AccountService = Depends(get_account_service),
) -> PlainTextResponse:
    """Confirm an account. Unknown email and wrong code get the same answer."""
    try:
        service.confirm(request_data.email or "", request_data.code or "")
    except NotFoundError as e:
        return PlainTextResponse(str(e))
    return PlainTextResponse(CONFIRMED_MESSAGE)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in from the game client",
    description="Only confirmed accounts can log in. Every authentication "
    "outcome is reported with HTTP 200 and a success flag.",
)
def login(
    request_data: LoginRequest,
    service: AccountService = Depends(get_account_service),
) -> LoginResponse:
    """Check game client credentials."""
    try:
        service.login(
            request_data.username or "",
            request_data.password or "",
            email=request_data.email,
        )
    except (ValidationError, AuthError) as e:
        return LoginResponse(success=False, message=str(e))
    return LoginResponse(success=True, message="Login successful")
