"""Storage backends for links."""

from .base import BaseStorage, DuplicateCodeError, Link
from .storage import Storage
from .storage_factory import get_storage

__all__ = ["BaseStorage", "DuplicateCodeError", "Link", "Storage", "get_storage"]
