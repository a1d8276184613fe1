"""
FairMint Reveal Entropy

The reveal shuffle is only as fair as the value drawn at reveal time. The
system source reads the operating system CSPRNG through pycryptodome, so the
revealer cannot know the draw before calling. The revealer does control
*when* to call; a revealer who dislikes a result cannot retry it, because a
successful reveal is final and a failed call draws nothing.
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from Crypto.Random import get_random_bytes

from fairmint.constants import ENTROPY_SIZE
from fairmint.crypto.hash import keccak256_raw


class EntropySource(ABC):
    """Supplies the unpredictable value for one batch reveal."""

    @abstractmethod
    def draw(self, batch: int) -> bytes:
        """Return ENTROPY_SIZE bytes for revealing batch."""


class SystemEntropySource(EntropySource):
    """Cryptographically secure source backed by the OS CSPRNG."""

    def draw(self, batch: int) -> bytes:
        return get_random_bytes(ENTROPY_SIZE)


class SeededEntropySource(EntropySource):
    """
    Deterministic source for tests and replays.

    NOTE: Anyone who knows the seed can predict every reveal. Never use it
    for a live collection.
    """

    def __init__(self, seed: bytes):
        self._seed = bytes(seed)
        self.draws = 0

    def draw(self, batch: int) -> bytes:
        self.draws += 1
        return keccak256_raw(
            self._seed + batch.to_bytes(32, "big") + self.draws.to_bytes(32, "big")
        )
