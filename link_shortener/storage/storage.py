"""
Storage module for the link shortener (in-memory implementation).

Responsibilities:
    - Persist links keyed by short code
    - Enforce short-code uniqueness atomically on insert
    - Provide lookup by short code and owner-scoped listing/deletion

Design:
    - Reference implementation of the BaseStorage contract, used by default
      and by the test suite.
    - The lock plays the role of the database's UNIQUE constraint: the
      existence check and the write happen under it, so two concurrent
      inserts of the same code produce exactly one row and one
      DuplicateCodeError. Nothing outside this class takes the lock.
    - For production, switch to the PostgreSQL backend (see db_storage.py).
"""

import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .base import BaseStorage, DuplicateCodeError, Link


class Storage(BaseStorage):
    def __init__(self):
        """
        Initialize empty storage.

        Internal schema:
            self.links = {short_code: Link}
        """
        self.links: Dict[str, Link] = {}
        self._lock = threading.Lock()

    def insert_link(self, link: Link) -> Link:
        """
        Insert a link, stamping both timestamps with the current UTC time.

        Raises:
            DuplicateCodeError: If the short code is already present.
        """
        now = datetime.now(timezone.utc)
        stored = replace(link, created_at=now, updated_at=now)
        with self._lock:
            if link.short_code in self.links:
                raise DuplicateCodeError(link.short_code)
            self.links[link.short_code] = stored
        return stored

    def get_link_by_code(self, short_code: str) -> Optional[Link]:
        return self.links.get(short_code)

    def list_links_for_user(self, user_id: str) -> List[Link]:
        # dict order is insertion order, so reversing gives newest first
        with self._lock:
            return [link for link in reversed(list(self.links.values())) if link.user_id == user_id]

    def delete_link(self, link_id: str, user_id: str) -> bool:
        with self._lock:
            for code, link in self.links.items():
                if link.id == link_id and link.user_id == user_id:
                    del self.links[code]
                    return True
        return False
