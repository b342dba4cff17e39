"""
URL seed channel.

The seed of a run travels in the ``s`` query parameter so that a copied URL
reproduces the exact pattern. When the parameter is missing, or a new pattern
is requested, a seed is derived from the wall clock and written back into the
URL with every other parameter left in place.
"""
from __future__ import annotations

import logging
import time
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

logger = logging.getLogger(__name__)

SEED_PARAM = "s"


def read_seed(url: str) -> Optional[str]:
    query = urlsplit(url).query
    for key, value in parse_qsl(query, keep_blank_values=True):
        if key == SEED_PARAM:
            return value or None
    return None


def timestamp_seed() -> str:
    return str(int(time.time() * 1000))


def with_seed(url: str, seed: str) -> str:
    """Return `url` with ``s`` set to `seed`, other query parameters preserved."""
    parts = urlsplit(url)
    pairs = parse_qsl(parts.query, keep_blank_values=True)
    out = []
    replaced = False
    for key, value in pairs:
        if key == SEED_PARAM:
            if replaced:
                continue
            value = seed
            replaced = True
        out.append((key, value))
    if not replaced:
        out.append((SEED_PARAM, seed))
    return urlunsplit((parts.scheme, parts.netloc, parts.path or "/", urlencode(out), ""))


class Location:
    """Current URL of the host, updated in place without navigating."""

    def __init__(self, url: str):
        self.url = url

    def replace_state(self, url: str) -> None:
        self.url = url

    @property
    def seed(self) -> Optional[str]:
        return read_seed(self.url)


def resolve_seed(location: Location, force_new_seed: bool = False) -> str:
    seed = None if force_new_seed else location.seed
    if seed is None:
        seed = timestamp_seed()
        logger.debug("Derived timestamp seed %s", seed)
    location.replace_state(with_seed(location.url, seed))
    return seed
