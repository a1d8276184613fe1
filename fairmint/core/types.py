"""
FairMint Cryptographic Types

Addresses are raw Ed25519 verify keys: the identity of a principal is the
key its signatures are checked against.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from fairmint.constants import (
    ADDRESS_SIZE,
    SIGNATURE_SIZE,
    DIGEST_SIZE,
    SEED_SIZE,
)


@dataclass(frozen=True, slots=True)
class Address:
    """
    Principal or recipient identity.

    SIZE: 32 bytes
    SERIALIZATION: raw bytes
    """
    data: bytes = field(default_factory=lambda: bytes(ADDRESS_SIZE))

    def __post_init__(self):
        if not isinstance(self.data, bytes):
            raise TypeError(f"Address data must be bytes, got {type(self.data).__name__}")
        if len(self.data) != ADDRESS_SIZE:
            raise ValueError(f"Address must be {ADDRESS_SIZE} bytes, got {len(self.data)}")

    def __bytes__(self) -> bytes:
        return bytes(self.data)

    def __repr__(self) -> str:
        return f"Address({self.data.hex()[:16]}...)"

    def hex(self) -> str:
        return self.data.hex()

    def is_zero(self) -> bool:
        return self.data == bytes(ADDRESS_SIZE)

    @classmethod
    def from_hex(cls, hex_string: str) -> Address:
        if hex_string.startswith("0x"):
            hex_string = hex_string[2:]
        return cls(bytes.fromhex(hex_string))

    @classmethod
    def zero(cls) -> Address:
        return cls(bytes(ADDRESS_SIZE))


@dataclass(frozen=True, slots=True)
class Digest:
    """
    Keccak-256 output.

    SIZE: 32 bytes
    """
    data: bytes = field(default_factory=lambda: bytes(DIGEST_SIZE))

    def __post_init__(self):
        if len(self.data) != DIGEST_SIZE:
            raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(self.data)}")

    def __bytes__(self) -> bytes:
        return bytes(self.data)

    def __repr__(self) -> str:
        return f"Digest({self.data.hex()[:16]}...)"

    def hex(self) -> str:
        return self.data.hex()

    @classmethod
    def from_hex(cls, hex_string: str) -> Digest:
        return cls(bytes.fromhex(hex_string))


@dataclass(frozen=True, slots=True)
class Signature:
    """
    Ed25519 signature.

    SIZE: 64 bytes
    """
    data: bytes = field(default_factory=lambda: bytes(SIGNATURE_SIZE))

    def __post_init__(self):
        if not isinstance(self.data, bytes):
            raise TypeError(f"Signature data must be bytes, got {type(self.data).__name__}")
        if len(self.data) != SIGNATURE_SIZE:
            raise ValueError(
                f"Signature must be {SIGNATURE_SIZE} bytes, got {len(self.data)}"
            )

    def __bytes__(self) -> bytes:
        return bytes(self.data)

    def __repr__(self) -> str:
        return f"Signature({self.data.hex()[:16]}...)"

    def hex(self) -> str:
        return self.data.hex()

    @classmethod
    def from_hex(cls, hex_string: str) -> Signature:
        if hex_string.startswith("0x"):
            hex_string = hex_string[2:]
        return cls(bytes.fromhex(hex_string))


@dataclass(frozen=True, slots=True)
class KeyPair:
    """
    Ed25519 signing seed with its address.
    NOTE: The seed never leaves the signer's machine.
    """
    seed: bytes
    address: Address

    def __post_init__(self):
        if len(self.seed) != SEED_SIZE:
            raise ValueError(f"Seed must be {SEED_SIZE} bytes, got {len(self.seed)}")

    def __repr__(self) -> str:
        # Never expose the seed
        return f"KeyPair(address={self.address!r}, seed=<redacted>)"

    @classmethod
    def from_seed(cls, seed: bytes) -> KeyPair:
        from fairmint.crypto.signing import address_of

        return cls(seed=bytes(seed), address=address_of(seed))

    @classmethod
    def generate(cls) -> KeyPair:
        from fairmint.crypto.signing import new_signer_seed

        seed, address = new_signer_seed()
        return cls(seed=seed, address=address)
