"""
FairMint Access Control

Two independent principals:
- Operator: phases, configuration, funds, and its own transfer. Transferring
  the operator role also rebinds the allowlist signer to the new operator.
- Guardian: may only hand its own role to a new address.
"""

from __future__ import annotations
import logging

from fairmint.constants import (
    EVT_OPERATOR_TRANSFERRED,
    EVT_GUARDIAN_TRANSFERRED,
    EVT_ALLOWLIST_UPDATED,
    EVT_PUBLIC_SALE_UPDATED,
    EVT_FROZEN,
    EVT_BASE_URI_UPDATED,
    EVT_BASE_IMAGE_URI_UPDATED,
    EVT_PRE_REVEAL_URI_UPDATED,
    EVT_LIMIT_UPDATED,
    EVT_MAX_QUANTITY_UPDATED,
    EVT_PRICE_UPDATED,
    EVT_MINIMUM_INDEX_UPDATED,
)
from fairmint.core.events import EventLog
from fairmint.core.state import CollectionState
from fairmint.core.types import Address
from fairmint.errors import (
    Frozen,
    InvalidAddress,
    InvalidConfiguration,
    Unauthorized,
)

logger = logging.getLogger(__name__)


class AccessControl:
    """Authorization predicates and operator-controlled settings."""

    def __init__(self, state: CollectionState, events: EventLog):
        self._state = state
        self._events = events

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    @property
    def operator(self) -> Address:
        return self._state.principals.operator

    @property
    def guardian(self) -> Address:
        return self._state.principals.guardian

    @property
    def allowlist_signer(self) -> Address:
        return self._state.principals.allowlist_signer

    def is_operator(self, sender: Address) -> bool:
        return sender == self._state.principals.operator

    def is_guardian(self, sender: Address) -> bool:
        return sender == self._state.principals.guardian

    def require_operator(self, sender: Address) -> None:
        if not self.is_operator(sender):
            raise Unauthorized(f"{sender.hex()[:16]} is not the operator")

    def require_guardian(self, sender: Address) -> None:
        if not self.is_guardian(sender):
            raise Unauthorized(f"{sender.hex()[:16]} is not the guardian")

    # ------------------------------------------------------------------
    # Role transfers
    # ------------------------------------------------------------------

    def transfer_operator(self, sender: Address, new_operator: Address) -> None:
        self.require_operator(sender)
        _require_nonzero(new_operator)

        principals = self._state.principals
        previous = principals.operator
        principals.operator = new_operator
        principals.allowlist_signer = new_operator

        self._events.emit(EVT_OPERATOR_TRANSFERRED, previous=previous, new=new_operator)
        logger.info(f"Operator transferred: {previous.hex()[:16]} -> {new_operator.hex()[:16]}")

    def transfer_guardian(self, sender: Address, new_guardian: Address) -> None:
        self.require_guardian(sender)
        _require_nonzero(new_guardian)

        previous = self._state.principals.guardian
        self._state.principals.guardian = new_guardian

        self._events.emit(EVT_GUARDIAN_TRANSFERRED, previous=previous, new=new_guardian)
        logger.info(f"Guardian transferred: {previous.hex()[:16]} -> {new_guardian.hex()[:16]}")

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def toggle_allowlist(self, sender: Address) -> bool:
        self.require_operator(sender)
        phase = self._state.phase
        phase.allowlist_active = not phase.allowlist_active
        self._events.emit(EVT_ALLOWLIST_UPDATED, active=phase.allowlist_active)
        logger.info(f"Allowlist active: {phase.allowlist_active}")
        return phase.allowlist_active

    def toggle_public_sale(self, sender: Address) -> bool:
        self.require_operator(sender)
        phase = self._state.phase
        phase.public_sale_active = not phase.public_sale_active
        self._events.emit(EVT_PUBLIC_SALE_UPDATED, active=phase.public_sale_active)
        logger.info(f"Public sale active: {phase.public_sale_active}")
        return phase.public_sale_active

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def freeze(self, sender: Address) -> None:
        """Permanently lock metadata URIs."""
        self.require_operator(sender)
        self._state.frozen = True
        self._events.emit(EVT_FROZEN)
        logger.info("Metadata frozen")

    def set_base_uri(self, sender: Address, uri: str) -> None:
        self._require_unfrozen(sender)
        self._state.config.base_uri = uri
        self._events.emit(EVT_BASE_URI_UPDATED, value=uri)

    def set_base_image_uri(self, sender: Address, uri: str) -> None:
        self._require_unfrozen(sender)
        self._state.config.base_image_uri = uri
        self._events.emit(EVT_BASE_IMAGE_URI_UPDATED, value=uri)

    def set_pre_reveal_uri(self, sender: Address, uri: str) -> None:
        self._require_unfrozen(sender)
        self._state.config.pre_reveal_uri = uri
        self._events.emit(EVT_PRE_REVEAL_URI_UPDATED, value=uri)

    def set_limit(self, sender: Address, limit: int) -> None:
        self.require_operator(sender)
        config = self._state.config

        if self._state.reveal.current_revealed_batch > 0:
            raise InvalidConfiguration("Limit is fixed once a batch is revealed")
        if limit < self._state.supply.total_minted:
            raise InvalidConfiguration(
                f"Limit {limit} below minted supply {self._state.supply.total_minted}"
            )
        if limit < 1 or limit % config.batch_size != 0:
            raise InvalidConfiguration(
                f"Limit {limit} must be a positive multiple of batch size {config.batch_size}"
            )

        config.limit = limit
        self._events.emit(EVT_LIMIT_UPDATED, value=limit)
        logger.info(f"Limit updated: {limit}")

    def set_max_quantity(self, sender: Address, max_quantity: int) -> None:
        self.require_operator(sender)
        if max_quantity < 0:
            raise InvalidConfiguration("max_quantity cannot be negative")
        self._state.config.max_quantity = max_quantity
        self._events.emit(EVT_MAX_QUANTITY_UPDATED, value=max_quantity)

    def set_price(self, sender: Address, price: int) -> None:
        self.require_operator(sender)
        if price < 0:
            raise InvalidConfiguration("price cannot be negative")
        self._state.config.price = price
        self._events.emit(EVT_PRICE_UPDATED, value=price)
        logger.info(f"Price updated: {price}")

    def set_minimum_index(self, sender: Address, minimum_index: int) -> None:
        """Revoke every allowance with an index below minimum_index."""
        self.require_operator(sender)
        self._state.allowlist.minimum_index = minimum_index
        self._events.emit(EVT_MINIMUM_INDEX_UPDATED, value=minimum_index)
        logger.info(f"Minimum allowlist index: {minimum_index}")

    def _require_unfrozen(self, sender: Address) -> None:
        self.require_operator(sender)
        if self._state.frozen:
            raise Frozen("Metadata URIs are frozen")


def _require_nonzero(address: Address) -> None:
    if address.is_zero():
        raise InvalidAddress("New principal is the zero address")
