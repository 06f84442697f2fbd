"""Short-code allocation and link management."""

from .link_manager import LinkManager
from .strategies import RandomStrategy, get_strategy_from_config

__all__ = ["LinkManager", "RandomStrategy", "get_strategy_from_config"]
