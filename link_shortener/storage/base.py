"""
Base storage interface for the link shortener.

Purpose:
    Define a small, stable contract that multiple storage backends
    (in-memory, PostgreSQL) implement without requiring changes to the
    manager or API code.

The one capability the allocator depends on is `insert_link`: a single
atomic insert that either persists the row or raises `DuplicateCodeError`
when the short code is already taken. Backends must enforce this inside the
store (a UNIQUE constraint, or an equivalent atomic check), never by asking
callers to check first.

Testing & Coverage:
    These are abstract methods and are not executed directly in tests.
    We annotate them with `# pragma: no cover` so coverage tools don't
    penalize the project for un-runnable abstract declarations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional


class DuplicateCodeError(Exception):
    """Raised by a backend when an insert violates short-code uniqueness."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"short code already exists: {short_code}")


@dataclass(frozen=True)
class Link:
    """A persisted short link. Timestamps are timezone-aware (UTC)."""

    id: str
    user_id: str
    url: str
    short_code: str
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "url": self.url,
            "shortCode": self.short_code,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


class BaseStorage(ABC):
    """Abstract base class for storage backends."""

    @abstractmethod  # pragma: no cover
    def insert_link(self, link: Link) -> Link:
        """
        Atomically insert a new link.

        Returns:
            Link: The row as stored (store-assigned values take precedence).

        Raises:
            DuplicateCodeError: If `link.short_code` is already taken.
            StoreUnavailableError: For any other persistence failure.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def get_link_by_code(self, short_code: str) -> Optional[Link]:
        """Retrieve a link by its short code, or None."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def list_links_for_user(self, user_id: str) -> List[Link]:
        """Return the user's links, newest first."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def delete_link(self, link_id: str, user_id: str) -> bool:
        """
        Delete a link owned by `user_id`.

        Returns:
            bool: False if no such link exists for that owner.
        """
        raise NotImplementedError
