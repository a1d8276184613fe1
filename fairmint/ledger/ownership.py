"""
FairMint Ownership Ledger

The collection only mints through this interface and reads owners and
supply back. Transfer and approval bookkeeping belong to the ledger.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Tuple

from fairmint.constants import EVT_TRANSFER
from fairmint.core.events import EventLog
from fairmint.core.types import Address

logger = logging.getLogger(__name__)

# hook(operator, to, token_id), called synchronously after each mint to `to`
ReceiveHook = Callable[[Address, Address, int], None]


class TokenAlreadyMinted(Exception):
    """Raised when minting an identifier that already has an owner."""
    pass


class OwnershipLedger(ABC):
    """Interface of the ownership ledger collaborator."""

    @abstractmethod
    def mint(self, to: Address, token_id: int, operator: Address) -> None:
        """Record to as owner of the new token_id."""

    @abstractmethod
    def owner_of(self, token_id: int) -> Optional[Address]:
        """Owner of token_id, or None if it does not exist."""

    @abstractmethod
    def balance_of(self, owner: Address) -> int:
        """Number of tokens held by owner."""

    @abstractmethod
    def total_supply(self) -> int:
        """Number of tokens issued."""

    @abstractmethod
    def snapshot(self) -> object:
        """Opaque snapshot for rollback."""

    @abstractmethod
    def restore(self, snapshot: object) -> None:
        """Roll back to a snapshot taken by snapshot()."""

    def exists(self, token_id: int) -> bool:
        return self.owner_of(token_id) is not None


class InMemoryOwnershipLedger(OwnershipLedger):
    """
    Dictionary-backed ledger.

    Recipients may register a receive hook; it runs synchronously inside
    mint, before mint returns to the collection.
    """

    def __init__(self):
        self.events = EventLog()
        self._owners: Dict[int, Address] = {}
        self._balances: Dict[Address, int] = {}
        self._minted: List[int] = []
        self._hooks: Dict[Address, ReceiveHook] = {}

    def register_receiver(self, address: Address, hook: ReceiveHook) -> None:
        self._hooks[address] = hook

    def unregister_receiver(self, address: Address) -> None:
        self._hooks.pop(address, None)

    def mint(self, to: Address, token_id: int, operator: Address) -> None:
        if token_id in self._owners:
            raise TokenAlreadyMinted(f"Token {token_id} already minted")

        self._owners[token_id] = to
        self._balances[to] = self._balances.get(to, 0) + 1
        self._minted.append(token_id)
        self.events.emit(EVT_TRANSFER, sender=Address.zero(), to=to, token_id=token_id)

        logger.debug(f"Minted token {token_id} to {to.hex()[:16]}")

        hook = self._hooks.get(to)
        if hook is not None:
            hook(operator, to, token_id)

    def owner_of(self, token_id: int) -> Optional[Address]:
        return self._owners.get(token_id)

    def balance_of(self, owner: Address) -> int:
        return self._balances.get(owner, 0)

    def total_supply(self) -> int:
        return len(self._owners)

    def snapshot(self) -> Tuple[int, int]:
        """Mint count and event mark; minting is append-only."""
        return len(self._minted), self.events.mark()

    def restore(self, snapshot: Tuple[int, int]) -> None:
        minted, mark = snapshot
        while len(self._minted) > minted:
            token_id = self._minted.pop()
            owner = self._owners.pop(token_id)
            self._balances[owner] -= 1
        self.events.truncate(mark)
