"""
Password helpers for the auth module.

Stored passwords may be plain text (demo accounts configured from env) or a
hex SHA-256 digest. Comparisons are constant-time.
"""

import hashlib
import secrets


def hash_password(password: str) -> str:
    """
    Return a SHA256 hex digest of the given password.

    Note:
        This is only for demo purposes.
        In production, use a strong hashing library such as passlib[bcrypt].
    """
    return hashlib.sha256(password.encode()).hexdigest()


def verify_password(password: str, stored: str) -> bool:
    """True if `password` matches `stored` either verbatim or by SHA-256 digest."""
    return secrets.compare_digest(stored.encode(), password.encode()) or secrets.compare_digest(
        stored.encode(), hash_password(password).encode()
    )
