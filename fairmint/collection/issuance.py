"""
FairMint Issuance Ledger

Three channels share one total_minted counter and one hard limit:
- Reserve:   owner_mint, operator only, no phase, no payment, capped by owner_limit
- Allowlist: mint_with_signature, needs an allowance and exact payment
- Public:    mint, needs exact payment

Every entry point, plus withdraw_funds, holds the same reentrancy guard for
its whole duration. Checks run before any state change, and state changes
before any call into the ownership or funds ledger.
"""

from __future__ import annotations
import logging
from typing import List, Union

from fairmint.constants import EVT_FUNDS_WITHDRAWN
from fairmint.collection.access import AccessControl
from fairmint.collection.allowlist import AllowlistAuthenticator
from fairmint.core.events import EventLog
from fairmint.core.state import CollectionState
from fairmint.core.types import Address, Signature
from fairmint.errors import (
    ExceedsMaxQuantity,
    ExceedsOwnerLimit,
    ExceedsSupply,
    IncorrectPayment,
    InvalidQuantity,
    PhaseInactive,
    Reentrant,
)
from fairmint.ledger.funds import FundsLedger
from fairmint.ledger.ownership import OwnershipLedger

logger = logging.getLogger(__name__)


class ReentrancyGuard:
    """
    Single flag held for the whole of a guarded call.

    Entering while held raises Reentrant; the flag is cleared on every exit,
    normal or exceptional.
    """

    def __init__(self):
        self._entered = False

    @property
    def locked(self) -> bool:
        return self._entered

    def __enter__(self) -> "ReentrancyGuard":
        if self._entered:
            raise Reentrant("Reentrant call")
        self._entered = True
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self._entered = False
        return False


class IssuanceLedger:
    """Capacity accounting, payment enforcement, and minting."""

    def __init__(
        self,
        collection: Address,
        state: CollectionState,
        access: AccessControl,
        authenticator: AllowlistAuthenticator,
        ownership: OwnershipLedger,
        funds: FundsLedger,
        events: EventLog,
    ):
        self._collection = collection
        self._state = state
        self._access = access
        self._authenticator = authenticator
        self._ownership = ownership
        self._funds = funds
        self._events = events
        self.guard = ReentrancyGuard()

    @property
    def total_minted(self) -> int:
        return self._state.supply.total_minted

    @property
    def owner_minted(self) -> int:
        return self._state.supply.owner_minted

    @property
    def balance(self) -> int:
        return self._state.supply.balance

    # ------------------------------------------------------------------
    # Channels
    # ------------------------------------------------------------------

    def owner_mint(self, sender: Address, quantity: int) -> List[int]:
        with self.guard:
            self._access.require_operator(sender)
            _require_positive(quantity)

            supply = self._state.supply
            owner_limit = self._state.config.owner_limit
            if supply.owner_minted + quantity > owner_limit:
                raise ExceedsOwnerLimit(
                    f"Reserve {supply.owner_minted} + {quantity} > {owner_limit}"
                )
            self._require_supply(quantity)

            supply.owner_minted += quantity
            return self._issue(sender, quantity, value=0)

    def mint_with_signature(
        self,
        sender: Address,
        quantity: int,
        index: int,
        signature: Union[Signature, bytes],
        value: int = 0,
    ) -> List[int]:
        with self.guard:
            if not self._state.phase.allowlist_active:
                raise PhaseInactive("Allowlist is not active")

            self._authenticator.admit(sender, index, signature)
            self._require_sale(quantity, value)

            self._authenticator.consume(index)
            token_ids = self._issue(sender, quantity, value)

            logger.info(f"Allowance {index} spent by {sender.hex()[:16]}")
            return token_ids

    def mint(self, sender: Address, quantity: int, value: int = 0) -> List[int]:
        with self.guard:
            if not self._state.phase.public_sale_active:
                raise PhaseInactive("Public sale is not active")

            self._require_sale(quantity, value)
            return self._issue(sender, quantity, value)

    # ------------------------------------------------------------------
    # Funds
    # ------------------------------------------------------------------

    def withdraw_funds(self, sender: Address) -> int:
        """Pay the whole collected balance to the operator."""
        with self.guard:
            self._access.require_operator(sender)

            supply = self._state.supply
            amount = supply.balance
            supply.balance = 0

            self._funds.pay(sender, amount)
            self._events.emit(EVT_FUNDS_WITHDRAWN, amount=amount)

            logger.info(f"Withdrew {amount} to {sender.hex()[:16]}")
            return amount

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_sale(self, quantity: int, value: int) -> None:
        config = self._state.config

        _require_positive(quantity)
        if quantity > config.max_quantity:
            raise ExceedsMaxQuantity(f"Quantity {quantity} > max {config.max_quantity}")

        expected = config.price * quantity
        if value != expected:
            raise IncorrectPayment(f"Payment {value} != {expected}")

        self._require_supply(quantity)

    def _require_supply(self, quantity: int) -> None:
        total = self._state.supply.total_minted
        limit = self._state.config.limit
        if total + quantity > limit:
            raise ExceedsSupply(f"Supply {total} + {quantity} > limit {limit}")

    def _issue(self, to: Address, quantity: int, value: int) -> List[int]:
        """Advance counters, then mint sequential ids through the ledger."""
        supply = self._state.supply
        first = supply.total_minted
        supply.total_minted += quantity
        supply.balance += value

        token_ids = list(range(first, first + quantity))
        for token_id in token_ids:
            self._ownership.mint(to, token_id, operator=self._collection)

        logger.info(
            f"Minted {quantity} to {to.hex()[:16]}: ids {first}..{first + quantity - 1}, "
            f"total={supply.total_minted}"
        )
        return token_ids


def _require_positive(quantity: int) -> None:
    if quantity < 1:
        raise InvalidQuantity(f"Quantity must be at least 1, got {quantity}")
