"""
FairMint External Ledgers

Collaborators the collection calls out to: token ownership and payouts.
"""

from fairmint.ledger.ownership import (
    OwnershipLedger,
    InMemoryOwnershipLedger,
    TokenAlreadyMinted,
)
from fairmint.ledger.funds import FundsLedger

__all__ = [
    "OwnershipLedger",
    "InMemoryOwnershipLedger",
    "TokenAlreadyMinted",
    "FundsLedger",
]
