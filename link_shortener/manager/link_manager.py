"""
LinkManager module for the link shortener.

Responsibilities:
    - Allocate a unique short code for a submitted URL and persist the Link
    - Validate URLs and custom codes before touching storage
    - Classify storage conflicts into caller-facing errors
    - Owner-scoped reads and deletes for the dashboard

Design notes:
    - Uniqueness is the store's job. The manager never checks whether a code
      exists before inserting; it inserts and reads a `DuplicateCodeError`
      as the uniqueness signal. Check-then-insert would race under
      concurrent requests.
    - A conflict on a caller-chosen code is final (`CodeAlreadyExistsError`).
      A conflict on a generated code is expected and retried with a fresh
      random candidate, at most `max_attempts` inserts in total.
    - The owning user id is always an explicit argument.
    - Code generation is pluggable; storage is an injected dependency.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, List, Optional, Union

from link_shortener.config import settings
from link_shortener.errors import (
    AllocationCancelledError,
    AllocationExhaustedError,
    CodeAlreadyExistsError,
    InvalidCustomCodeError,
    InvalidURLError,
    LinkNotFoundError,
    UnauthorizedError,
)
from link_shortener.storage.base import BaseStorage, DuplicateCodeError, Link
from .strategies import BaseStrategy, generate_link_id, get_strategy_from_config
from .validators import is_valid_custom_code, is_valid_url

CodeStrategy = Callable[[Optional[int]], str]  # (length) -> code

log = logging.getLogger(__name__)


def _positive(name: str, value: Optional[int], default: int) -> int:
    if value is None:
        return default
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


class LinkManager:
    """Coordinates creation and lookup rules for links."""

    def __init__(
        self,
        storage: BaseStorage,
        code_strategy: Optional[Union[BaseStrategy, CodeStrategy]] = None,
        code_length: Optional[int] = None,
        max_attempts: Optional[int] = None,
        custom_code_max_length: Optional[int] = None,
    ):
        """
        Args:
            storage (BaseStorage): Backend storage instance.
            code_strategy: Candidate generator; a strategy or any callable
                (length) -> code. Resolved from config when omitted.
            code_length (int): Length of generated codes.
            max_attempts (int): Inserts to try for a generated code before giving up.
            custom_code_max_length (int): Upper bound on caller-chosen codes.

        Raises:
            ValueError: If a given length or attempt bound is below 1.
        """
        self.storage = storage
        self.code_strategy = code_strategy or get_strategy_from_config()
        self.code_length = _positive("code_length", code_length, settings.CODE_LENGTH)
        self.max_attempts = _positive("max_attempts", max_attempts, settings.MAX_ATTEMPTS)
        self.custom_code_max_length = _positive(
            "custom_code_max_length", custom_code_max_length, settings.CUSTOM_CODE_MAX_LENGTH
        )

    # ---------------------------------------------------------------------
    # Allocation
    # ---------------------------------------------------------------------
    def create_link(
        self,
        url: str,
        user_id: str,
        custom_code: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Link:
        """
        Create a link for `url` owned by `user_id`.

        Rules:
            - user_id must be non-empty.
            - URL must be absolute http/https with a host.
            - custom_code, when given, must be letters/digits/hyphens and
              within the length bound; it is inserted as-is or not at all.
            - Without custom_code, random candidates are inserted until one
              sticks or max_attempts is reached.
            - If cancel_event is set, no further insert is attempted.

        Returns:
            Link: The persisted link, with store-assigned timestamps.

        Raises:
            UnauthorizedError, InvalidURLError, InvalidCustomCodeError,
            CodeAlreadyExistsError, AllocationExhaustedError,
            AllocationCancelledError, StoreUnavailableError
        """
        if not user_id:
            raise UnauthorizedError()
        if not is_valid_url(url):
            raise InvalidURLError()

        if custom_code is not None:
            if not is_valid_custom_code(custom_code, self.custom_code_max_length):
                raise InvalidCustomCodeError(
                    "Custom code may only contain letters, numbers and hyphens "
                    f"(max {self.custom_code_max_length} characters)"
                )
            self._check_cancelled(cancel_event)
            try:
                link = self.storage.insert_link(self._new_link(url, user_id, custom_code))
            except DuplicateCodeError as exc:
                log.info("Custom short code %r already taken", custom_code)
                raise CodeAlreadyExistsError(custom_code) from exc
            log.info("Created link %s -> %s (custom)", link.short_code, link.url)
            return link

        for attempt in range(1, self.max_attempts + 1):
            self._check_cancelled(cancel_event)
            candidate = self.code_strategy(self.code_length)
            try:
                link = self.storage.insert_link(self._new_link(url, user_id, candidate))
            except DuplicateCodeError:
                log.debug("Generated code %r collided (attempt %d/%d)", candidate, attempt, self.max_attempts)
                continue
            log.info("Created link %s -> %s (attempt %d)", link.short_code, link.url, attempt)
            return link

        log.warning(
            "Short code space saturated: %d generated codes of length %d all collided",
            self.max_attempts,
            self.code_length,
        )
        raise AllocationExhaustedError(self.max_attempts)

    # ---------------------------------------------------------------------
    # Reads / deletes
    # ---------------------------------------------------------------------
    def get_link(self, short_code: str) -> Optional[Link]:
        return self.storage.get_link_by_code(short_code)

    def resolve(self, short_code: str) -> str:
        """Return the target URL for a short code.

        Raises:
            LinkNotFoundError: If no link uses this code.
        """
        link = self.storage.get_link_by_code(short_code)
        if link is None:
            raise LinkNotFoundError()
        return link.url

    def list_links(self, user_id: str) -> List[Link]:
        if not user_id:
            raise UnauthorizedError()
        return self.storage.list_links_for_user(user_id)

    def delete_link(self, link_id: str, user_id: str) -> None:
        """Delete one of the user's links.

        Raises:
            UnauthorizedError: If user_id is empty.
            LinkNotFoundError: If the link is missing or owned by someone else.
        """
        if not user_id:
            raise UnauthorizedError()
        if not self.storage.delete_link(link_id, user_id):
            raise LinkNotFoundError()
        log.info("Deleted link %s for user %s", link_id, user_id)

    # ---------------------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------------------
    @staticmethod
    def _new_link(url: str, user_id: str, short_code: str) -> Link:
        now = datetime.now(timezone.utc)
        return Link(
            id=generate_link_id(),
            user_id=user_id,
            url=url,
            short_code=short_code,
            created_at=now,
            updated_at=now,
        )

    @staticmethod
    def _check_cancelled(cancel_event: Optional[threading.Event]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise AllocationCancelledError()
