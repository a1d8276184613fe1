"""
FairMint Core Data Structures
"""

from fairmint.core.types import Address, Digest, Signature, KeyPair
from fairmint.core.events import Event, EventLog
from fairmint.core.state import (
    CollectionState,
    PhaseState,
    Principals,
    AllowlistState,
    SupplyState,
    RevealBatch,
    RevealState,
    StateSnapshot,
)

__all__ = [
    # Types
    "Address",
    "Digest",
    "Signature",
    "KeyPair",
    # Events
    "Event",
    "EventLog",
    # State
    "CollectionState",
    "PhaseState",
    "Principals",
    "AllowlistState",
    "SupplyState",
    "RevealBatch",
    "RevealState",
    "StateSnapshot",
]
