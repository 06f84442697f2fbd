"""
Configuration for the auth module.

This defines how users are loaded. For demo purposes, this uses an
in-memory dictionary keyed by username. Each account maps to an opaque
user id, which is what owns links.
In production, this can be extended to load users from a database or external service.
"""

from typing import Dict
import os

# Demo in-memory user store (username -> password and owning user id)
# Replace with DB-backed logic in production.
USERS: Dict[str, Dict[str, str]] = {
    "link_demo": {
        "password": os.getenv("LINK_DEMO_PASSWORD", "link_demo"),
        "user_id": "user_demo",
    },
    "link_admin": {
        "password": os.getenv("LINK_ADMIN_PASSWORD", "link_admin"),
        "user_id": "user_admin",
    },
}
