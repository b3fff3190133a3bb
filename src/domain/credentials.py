"""
Credential helpers - password hashing and confirmation codes.

Passwords are hashed with bcrypt; confirmation codes come from the
secrets module so they are not predictable from earlier codes.
"""

import secrets

import bcrypt

DEFAULT_BCRYPT_COST = 10
BCRYPT_MAX_BYTES = 72

CODE_MIN = 100000
CODE_MAX = 999999


def _password_bytes(password: str) -> bytes:
    """bcrypt only uses the first 72 bytes; longer input is cut to that."""
    return password.encode()[:BCRYPT_MAX_BYTES]


def hash_password(password: str, cost: int = DEFAULT_BCRYPT_COST) -> str:
    """Hash password using bcrypt with the given work factor."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=cost)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a plaintext password against a stored bcrypt hash.

    A malformed stored hash counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode())
    except ValueError:
        return False


def generate_confirmation_code() -> str:
    """
    Generate a 6-digit confirmation code.

    Uniform over [100000, 999999] inclusive, so the string form is
    always exactly six digits.
    """
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))
