"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Request fields are optional at this layer: absent or null fields are
reported by the account service as "Missing fields" rather than as a 422.
"""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Request model for account registration."""

    email: str | None = None
    username: str | None = None
    password: str | None = None
    captcha: str | None = Field(default=None, description="Answer to the captcha question")


class ConfirmRequest(BaseModel):
    """Request model for account confirmation."""

    email: str | None = None
    code: str | None = Field(default=None, description="6-digit confirmation code")


class LoginRequest(BaseModel):
    """Request model for game client login."""

    username: str | None = None
    password: str | None = None
    email: str | None = Field(
        default=None, description="Only required when the server enforces email + username login"
    )


class LoginResponse(BaseModel):
    """Uniform login result, returned with HTTP 200 for every auth outcome."""

    success: bool
    message: str
