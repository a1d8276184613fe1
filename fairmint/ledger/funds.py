"""
FairMint Funds Ledger

Pays withdrawn proceeds out to an address. Payees may register a receive
hook that runs synchronously during the payment.
"""

from __future__ import annotations
import logging
from typing import Callable, Dict, List, Tuple

from fairmint.core.types import Address

logger = logging.getLogger(__name__)

# hook(payee, amount)
PaymentHook = Callable[[Address, int], None]


class FundsLedger:
    """Balances of payees credited by withdrawals."""

    def __init__(self):
        self._balances: Dict[Address, int] = {}
        self._credits: List[Tuple[Address, int]] = []
        self._hooks: Dict[Address, PaymentHook] = {}

    def register_receiver(self, address: Address, hook: PaymentHook) -> None:
        self._hooks[address] = hook

    def pay(self, to: Address, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Cannot pay a negative amount: {amount}")

        self._balances[to] = self._balances.get(to, 0) + amount
        self._credits.append((to, amount))
        logger.debug(f"Paid {amount} to {to.hex()[:16]}")

        hook = self._hooks.get(to)
        if hook is not None:
            hook(to, amount)

    def balance_of(self, address: Address) -> int:
        return self._balances.get(address, 0)

    def snapshot(self) -> int:
        """Rollback point: the number of credits so far."""
        return len(self._credits)

    def restore(self, snapshot: int) -> None:
        """Undo every credit made after snapshot, newest first."""
        while len(self._credits) > snapshot:
            to, amount = self._credits.pop()
            self._balances[to] -= amount
