"""
FairMint Hash Functions

Keccak-256 (pre-standard SHA-3 padding), as used for allowance messages.
"""

from Crypto.Hash import keccak

from fairmint.constants import SIGNED_MESSAGE_PREFIX
from fairmint.core.types import Digest


def keccak256_raw(data: bytes) -> bytes:
    """Compute Keccak-256 and return raw bytes."""
    return keccak.new(digest_bits=256, data=data).digest()


def keccak256(data: bytes) -> Digest:
    """Compute Keccak-256."""
    return Digest(keccak256_raw(data))


def signed_message_digest(message: Digest) -> Digest:
    """
    Digest that is actually signed for a 32-byte message.

    H = Keccak256(PREFIX || message)
    """
    return keccak256(SIGNED_MESSAGE_PREFIX + message.data)
