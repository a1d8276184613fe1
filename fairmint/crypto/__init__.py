"""
FairMint Cryptographic Primitives
"""

from fairmint.crypto.hash import keccak256, keccak256_raw, signed_message_digest
from fairmint.crypto.signing import address_of, new_signer_seed, sign_message, verify_message
from fairmint.crypto.entropy import (
    EntropySource,
    SystemEntropySource,
    SeededEntropySource,
)

__all__ = [
    # Hash functions
    "keccak256",
    "keccak256_raw",
    "signed_message_digest",
    # Ed25519 signatures
    "address_of",
    "new_signer_seed",
    "sign_message",
    "verify_message",
    # Reveal entropy
    "EntropySource",
    "SystemEntropySource",
    "SeededEntropySource",
]
