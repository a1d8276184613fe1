"""
FairMint Collection Components

Leaves first: AccessControl, AllowlistAuthenticator, IssuanceLedger,
RevealEngine, and the Collection that wires them together.
"""

from fairmint.collection.access import AccessControl
from fairmint.collection.allowlist import AllowlistAuthenticator, encode_message
from fairmint.collection.issuance import IssuanceLedger, ReentrancyGuard
from fairmint.collection.reveal import RevealEngine, shuffled_id, derive_offsets
from fairmint.collection.collection import Collection, atomic

__all__ = [
    "AccessControl",
    "AllowlistAuthenticator",
    "encode_message",
    "IssuanceLedger",
    "ReentrancyGuard",
    "RevealEngine",
    "shuffled_id",
    "derive_offsets",
    "Collection",
    "atomic",
]
