"""
FastAPI dependency functions for authentication.

These can be used in routes with Depends() to protect endpoints.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from .service import authenticate_user

# HTTP Basic authentication schemes: one that challenges, one that lets the
# route decide what to do without credentials.
security = HTTPBasic()
optional_security = HTTPBasic(auto_error=False)


def get_current_user(credentials: HTTPBasicCredentials = Depends(security)) -> str:
    """
    Dependency that retrieves and validates the current user.

    Returns:
        str: The authenticated user id.
    """
    return authenticate_user(credentials.username, credentials.password)


def get_optional_user(
    credentials: Optional[HTTPBasicCredentials] = Depends(optional_security),
) -> Optional[str]:
    """
    Like get_current_user, but returns None when no credentials were sent.

    Wrong credentials still fail with 401.
    """
    if credentials is None:
        return None
    return authenticate_user(credentials.username, credentials.password)
