"""Weighted rendezvous (highest random weight) hashing."""

from __future__ import annotations

import hashlib
import math
import threading

__all__ = ["RendezvousRing"]

_HASH_SPACE = float(1 << 64)


def _unit_hash(name: str, key: str) -> float:
    """Map a (name, key) pair to a float strictly between 0 and 1."""
    digest = hashlib.blake2b(
        name.encode("utf-8") + b"\x00" + key.encode("utf-8"), digest_size=8
    ).digest()
    return (int.from_bytes(digest, "big") + 0.5) / _HASH_SPACE


class RendezvousRing:
    """Picks, for every key, the member with the highest weighted score.

    Adding or removing a member only moves the keys that the member wins
    or loses; every other key keeps its owner.
    """

    def __init__(self) -> None:
        self._weights: dict[str, float] = {}
        self._lock = threading.Lock()

    def add(self, name: str, weight: float = 1.0) -> None:
        """Add *name* with *weight*, replacing any earlier weight."""
        if not weight > 0 or math.isinf(weight):
            raise ValueError(f"weight must be a positive finite number, got {weight!r}")
        with self._lock:
            self._weights[name] = float(weight)

    def remove(self, name: str) -> None:
        """Remove *name*; removing an absent member does nothing."""
        with self._lock:
            self._weights.pop(name, None)

    def lookup(self, key: str) -> str:
        """Return the member responsible for *key*, or "" when empty."""
        with self._lock:
            members = list(self._weights.items())
        best_name = ""
        best_score = -math.inf
        for name, weight in members:
            score = -weight / math.log(_unit_hash(name, key))
            if score > best_score or (score == best_score and name < best_name):
                best_name, best_score = name, score
        return best_name

    def __len__(self) -> int:
        with self._lock:
            return len(self._weights)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._weights