"""
Server-side mutation actions.

These are the seam between the HTTP/form boundary and the manager: they take
an already-resolved user id (or None) and already-parsed input, call the
manager, and turn every classified failure into a plain result dict.

    {"success": True, "shortCode": "...", "link": Link}
    {"success": False, "error": "...", "kind": "..."}

Both the JSON API and the dashboard form go through here, so they report
identical messages.
"""

import logging
from typing import Any, Dict, Optional

from link_shortener.errors import LinkError, StoreUnavailableError, UnauthorizedError
from link_shortener.manager.link_manager import LinkManager

log = logging.getLogger(__name__)

# HTTP status per error kind, shared by the JSON API and the dashboard forms
STATUS_BY_KIND: Dict[str, int] = {
    "Unauthorized": 401,
    "InvalidURL": 400,
    "InvalidCustomCode": 400,
    "CodeAlreadyExists": 409,
    "LinkNotFound": 404,
    "AllocationExhausted": 503,
    "AllocationCancelled": 503,
    "StoreUnavailable": 503,
}


def _failure(exc: LinkError) -> Dict[str, Any]:
    return {"success": False, "error": exc.message, "kind": exc.kind}


def create_link_action(
    manager: LinkManager,
    user_id: Optional[str],
    url: str,
    custom_code: Optional[str] = None,
) -> Dict[str, Any]:
    """Create a link for the signed-in user. Rejects before allocating when user_id is missing."""
    if not user_id:
        return _failure(UnauthorizedError())
    try:
        link = manager.create_link(url, user_id, custom_code=custom_code)
    except StoreUnavailableError as exc:
        log.error("Link creation failed for user %s: %s", user_id, exc.message)
        return _failure(StoreUnavailableError("Failed to create link"))
    except LinkError as exc:
        return _failure(exc)
    return {"success": True, "shortCode": link.short_code, "link": link}


def delete_link_action(manager: LinkManager, user_id: Optional[str], link_id: str) -> Dict[str, Any]:
    """Delete one of the signed-in user's links."""
    if not user_id:
        return _failure(UnauthorizedError())
    try:
        manager.delete_link(link_id, user_id)
    except LinkError as exc:
        return _failure(exc)
    return {"success": True}
