"""
Core authentication logic.

This module handles validation of credentials.
Currently uses an in-memory user store, but can be
extended to check against a database or external provider.
"""

from fastapi import HTTPException, status
from .config import USERS
from .utils import verify_password


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Basic"},
    )


def authenticate_user(username: str, password: str) -> str:
    """
    Authenticate a user by validating their username and password.

    Args:
        username (str): The username provided by the client.
        password (str): The password provided by the client.

    Returns:
        str: The authenticated user's id.

    Raises:
        HTTPException: If authentication fails (401 Unauthorized).
    """
    account = USERS.get(username)

    if account is None:
        raise _unauthorized("User not found")

    # Allow both plain-text (demo) and hashed password comparison
    if verify_password(password, account["password"]):
        return account["user_id"]

    raise _unauthorized("Invalid password")
