"""
Strategies for short-code generation in link_shortener.

Provided strategies:
- RandomStrategy("base62"): random code over [0-9a-zA-Z], the default
- RandomStrategy("urlsafe"): random code over [0-9a-zA-Z-_] (nanoid alphabet)

Codes are never derived from the URL: the allocator relies on the store's
unique constraint and retries with a fresh, independent candidate on a
collision, so a strategy only needs to be uniformly random.

Common helpers:
- _safe_len: Resolve/normalize desired code length from argument/config (clamped to [4, 20])
- generate_link_id: 21-char URL-safe id for the Link primary key

Configuration (via link_shortener.config.settings):
- CODE_STRATEGY: "base62" (default) or "urlsafe"
- CODE_LENGTH: Default code length (default 8; clamped 4..20)

At 8 Base62 characters the space is 62**8 (about 2.2e14) codes, so a
collision needs billions of stored links before it becomes likely.
"""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

from link_shortener.config import SHORT_CODE_MAX_LENGTH, settings

BASE62_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
URLSAFE_ALPHABET = BASE62_ALPHABET + "-_"

LINK_ID_LENGTH = 21

_rng = random.SystemRandom()


def _safe_len(length: Optional[int]) -> int:
    """Resolve desired code length from arg or config, clamped to [4, 20]."""
    L = int(length) if length is not None else int(settings.CODE_LENGTH)
    return max(4, min(SHORT_CODE_MAX_LENGTH, L))


def generate_link_id() -> str:
    """Opaque primary key for a new Link (nanoid-style)."""
    return "".join(_rng.choice(URLSAFE_ALPHABET) for _ in range(LINK_ID_LENGTH))


class BaseStrategy(ABC):
    """Abstract base for code generation strategies."""

    @abstractmethod
    def generate(self, *, length: Optional[int] = None) -> str:
        """Draw a new candidate short code of the given (or configured) length."""
        raise NotImplementedError

    def __call__(self, length: Optional[int] = None) -> str:
        return self.generate(length=length)


@dataclass(frozen=True)
class RandomStrategy(BaseStrategy):
    """Random codes from `alphabet`, drawn with the OS CSPRNG."""

    alphabet: str = BASE62_ALPHABET

    def generate(self, *, length: Optional[int] = None) -> str:
        L = _safe_len(length)
        return "".join(_rng.choice(self.alphabet) for _ in range(L))


STRATEGY_REGISTRY: Dict[str, BaseStrategy] = {
    "base62": RandomStrategy(BASE62_ALPHABET),
    "random": RandomStrategy(BASE62_ALPHABET),
    "urlsafe": RandomStrategy(URLSAFE_ALPHABET),
    "nanoid": RandomStrategy(URLSAFE_ALPHABET),
}


def get_strategy_from_config(name: Optional[str] = None) -> BaseStrategy:
    """
    Resolve the active strategy from parameter or settings.CODE_STRATEGY.
    Unknown names fall back to base62.
    """
    key = (name or settings.CODE_STRATEGY or "base62").strip().lower()
    return STRATEGY_REGISTRY.get(key) or STRATEGY_REGISTRY["base62"]
