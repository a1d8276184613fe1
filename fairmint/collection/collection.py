"""
FairMint Collection

Wires access control, allowlist admission, issuance, and reveal around one
shared CollectionState. Every mutating call is all-or-nothing: collection
state, both ledgers, and the event log are restored if it raises.
"""

from __future__ import annotations
import functools
import logging
from typing import List, Optional, Union

from Crypto.Random import get_random_bytes

from fairmint.constants import ADDRESS_SIZE
from fairmint.collection.access import AccessControl
from fairmint.collection.allowlist import AllowlistAuthenticator
from fairmint.collection.issuance import IssuanceLedger
from fairmint.collection.reveal import RevealEngine
from fairmint.config import CollectionConfig
from fairmint.core.events import EventLog
from fairmint.core.state import CollectionState, RevealBatch
from fairmint.core.types import Address, Digest, Signature
from fairmint.crypto.entropy import EntropySource, SystemEntropySource
from fairmint.errors import InvalidConfiguration
from fairmint.ledger.funds import FundsLedger
from fairmint.ledger.ownership import InMemoryOwnershipLedger, OwnershipLedger

logger = logging.getLogger(__name__)


def atomic(method):
    """Roll back every side effect of method if it raises."""

    @functools.wraps(method)
    def wrapper(self: "Collection", *args, **kwargs):
        state_snapshot = self.state.snapshot()
        ownership_snapshot = self.ownership.snapshot()
        funds_snapshot = self.funds.snapshot()
        mark = self.events.mark()
        try:
            return method(self, *args, **kwargs)
        except Exception as e:
            self.state.rollback(state_snapshot)
            self.ownership.restore(ownership_snapshot)
            self.funds.restore(funds_snapshot)
            self.events.truncate(mark)
            logger.debug(f"{method.__name__} rolled back: {type(e).__name__}: {e}")
            raise

    return wrapper


class Collection:
    """
    A fixed-supply collection with phased issuance and batch reveal.

    Every mutating method takes the calling address as `sender`; payable
    methods take the attached payment as `value`.
    """

    def __init__(
        self,
        address: Address,
        config: CollectionConfig,
        operator: Address,
        guardian: Optional[Address] = None,
        ownership: Optional[OwnershipLedger] = None,
        funds: Optional[FundsLedger] = None,
        entropy: Optional[EntropySource] = None,
    ):
        errors = config.validate()
        if errors:
            raise InvalidConfiguration("; ".join(errors))

        self.address = address
        self.state = CollectionState.initial(config, operator, guardian)
        self.events = EventLog()
        self.ownership = ownership if ownership is not None else InMemoryOwnershipLedger()
        self.funds = funds if funds is not None else FundsLedger()

        self.access = AccessControl(self.state, self.events)
        self.authenticator = AllowlistAuthenticator(address, self.state)
        self.issuance = IssuanceLedger(
            address,
            self.state,
            self.access,
            self.authenticator,
            self.ownership,
            self.funds,
            self.events,
        )
        self.reveal = RevealEngine(
            self.state,
            self.access,
            self.ownership,
            entropy if entropy is not None else SystemEntropySource(),
            self.events,
        )

        logger.info(
            f"Collection {config.name} at {address.hex()[:16]}: limit={config.limit}, "
            f"batches={config.batch_count}x{config.batch_size}"
        )

    @classmethod
    def deploy(cls, config: CollectionConfig, operator: Address, **kwargs) -> "Collection":
        """Create a collection at a fresh random address."""
        return cls(Address(get_random_bytes(ADDRESS_SIZE)), config, operator, **kwargs)

    # ==================================================================
    # Getters
    # ==================================================================

    @property
    def limit(self) -> int:
        return self.state.config.limit

    @property
    def max_quantity(self) -> int:
        return self.state.config.max_quantity

    @property
    def owner_limit(self) -> int:
        return self.state.config.owner_limit

    @property
    def price(self) -> int:
        return self.state.config.price

    @property
    def batch_size(self) -> int:
        return self.state.config.batch_size

    @property
    def base_uri(self) -> str:
        return self.state.config.base_uri

    @property
    def base_image_uri(self) -> str:
        return self.state.config.base_image_uri

    @property
    def pre_reveal_uri(self) -> str:
        return self.state.config.pre_reveal_uri

    @property
    def allowlist_active(self) -> bool:
        return self.state.phase.allowlist_active

    @property
    def public_sale_active(self) -> bool:
        return self.state.phase.public_sale_active

    @property
    def frozen(self) -> bool:
        return self.state.frozen

    @property
    def operator(self) -> Address:
        return self.access.operator

    @property
    def guardian(self) -> Address:
        return self.access.guardian

    @property
    def allowlist_signer(self) -> Address:
        return self.access.allowlist_signer

    @property
    def minimum_index(self) -> int:
        return self.authenticator.minimum_index

    @property
    def total_minted(self) -> int:
        return self.issuance.total_minted

    @property
    def owner_minted(self) -> int:
        return self.issuance.owner_minted

    @property
    def balance(self) -> int:
        return self.issuance.balance

    @property
    def current_revealed_batch(self) -> int:
        return self.reveal.current_revealed_batch

    def total_supply(self) -> int:
        return self.ownership.total_supply()

    def owner_of(self, token_id: int) -> Optional[Address]:
        return self.ownership.owner_of(token_id)

    def is_index_used(self, index: int) -> bool:
        return self.authenticator.is_used(index)

    def batch_offset(self, batch: int) -> Optional[RevealBatch]:
        return self.reveal.batch_offset(batch)

    # ==================================================================
    # Access control
    # ==================================================================

    @atomic
    def transfer_operator(self, sender: Address, new_operator: Address) -> None:
        self.access.transfer_operator(sender, new_operator)

    @atomic
    def transfer_guardian(self, sender: Address, new_guardian: Address) -> None:
        self.access.transfer_guardian(sender, new_guardian)

    @atomic
    def toggle_allowlist(self, sender: Address) -> bool:
        return self.access.toggle_allowlist(sender)

    @atomic
    def toggle_public_sale(self, sender: Address) -> bool:
        return self.access.toggle_public_sale(sender)

    @atomic
    def freeze(self, sender: Address) -> None:
        self.access.freeze(sender)

    @atomic
    def set_base_uri(self, sender: Address, uri: str) -> None:
        self.access.set_base_uri(sender, uri)

    @atomic
    def set_base_image_uri(self, sender: Address, uri: str) -> None:
        self.access.set_base_image_uri(sender, uri)

    @atomic
    def set_pre_reveal_uri(self, sender: Address, uri: str) -> None:
        self.access.set_pre_reveal_uri(sender, uri)

    @atomic
    def set_limit(self, sender: Address, limit: int) -> None:
        self.access.set_limit(sender, limit)

    @atomic
    def set_max_quantity(self, sender: Address, max_quantity: int) -> None:
        self.access.set_max_quantity(sender, max_quantity)

    @atomic
    def set_price(self, sender: Address, price: int) -> None:
        self.access.set_price(sender, price)

    @atomic
    def set_minimum_index(self, sender: Address, minimum_index: int) -> None:
        self.access.set_minimum_index(sender, minimum_index)

    # ==================================================================
    # Allowlist
    # ==================================================================

    def create_message(self, recipient: Address, index: int) -> Digest:
        return self.authenticator.create_message(recipient, index)

    def validate_signature(
        self,
        recipient: Address,
        index: int,
        signature: Union[Signature, bytes],
    ) -> Digest:
        return self.authenticator.validate_signature(recipient, index, signature)

    # ==================================================================
    # Issuance
    # ==================================================================

    @atomic
    def owner_mint(self, sender: Address, quantity: int) -> List[int]:
        return self.issuance.owner_mint(sender, quantity)

    @atomic
    def mint_with_signature(
        self,
        sender: Address,
        quantity: int,
        index: int,
        signature: Union[Signature, bytes],
        value: int = 0,
    ) -> List[int]:
        return self.issuance.mint_with_signature(sender, quantity, index, signature, value)

    @atomic
    def mint(self, sender: Address, quantity: int, value: int = 0) -> List[int]:
        return self.issuance.mint(sender, quantity, value)

    @atomic
    def withdraw_funds(self, sender: Address) -> int:
        return self.issuance.withdraw_funds(sender)

    # ==================================================================
    # Reveal
    # ==================================================================

    @atomic
    def set_batch_offset(self, sender: Address, batch: int) -> RevealBatch:
        return self.reveal.set_batch_offset(sender, batch)

    def get_shuffled_id(self, token_id: int) -> int:
        return self.reveal.get_shuffled_id(token_id)

    def resolve_metadata(self, token_id: int) -> str:
        return self.reveal.resolve_metadata(token_id)

    token_uri = resolve_metadata
