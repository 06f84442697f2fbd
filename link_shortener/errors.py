"""
Error taxonomy for the link shortener.

Every failure the allocator can report is a subclass of `LinkError` carrying a
stable `kind` (used by the API layer to pick a status code) and a
human-readable message (shown to the user as-is).

Storage backends never raise these for uniqueness conflicts; they raise
`DuplicateCodeError` (see `link_shortener.storage.base`) and the manager
decides what a conflict means for the caller.
"""

from typing import Optional


class LinkError(Exception):
    """Base class for classified link failures."""

    kind = "LinkError"
    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class UnauthorizedError(LinkError):
    kind = "Unauthorized"
    default_message = "Unauthorized"


class InvalidURLError(LinkError):
    kind = "InvalidURL"
    default_message = "Please enter a valid URL (http:// or https://)"


class InvalidCustomCodeError(LinkError):
    kind = "InvalidCustomCode"
    default_message = "Custom code may only contain letters, numbers and hyphens"


class CodeAlreadyExistsError(LinkError):
    kind = "CodeAlreadyExists"

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Short code '{short_code}' is already taken")


class AllocationExhaustedError(LinkError):
    kind = "AllocationExhausted"
    default_message = "Could not generate a unique short code, please try again"

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__()


class AllocationCancelledError(LinkError):
    kind = "AllocationCancelled"
    default_message = "Link creation was cancelled"


class StoreUnavailableError(LinkError):
    kind = "StoreUnavailable"
    default_message = "Link store is unavailable, please try again later"


class LinkNotFoundError(LinkError):
    kind = "LinkNotFound"
    default_message = "Link not found"
