"""
FairMint Reveal Engine

Identifiers [0, limit) are split into N = limit / batch_size consecutive
batches; batch b (1-indexed) covers [(b-1)*batch_size, b*batch_size).

Revealing batch b stores two integers:
- within:  cyclic rotation of positions inside the batch, in [0, batch_size)
- overall: column of the batch in the output grid, in [0, N), drawn without
           replacement from the slots no earlier batch took

    shuffled = ((id mod batch_size + within) mod batch_size) * N + overall

Rotation is a bijection on [0, batch_size) and overall values are distinct
across batches, so once all N batches are revealed every (row, column) cell
of the batch_size x N grid is hit exactly once: the mapping is a bijection
on [0, limit).
"""

from __future__ import annotations
import logging
from typing import Optional, Tuple

from fairmint.constants import EVT_BATCH_REVEALED, TAG_OVERALL, TAG_WITHIN
from fairmint.collection.access import AccessControl
from fairmint.core.events import EventLog
from fairmint.core.state import CollectionState, RevealBatch
from fairmint.core.types import Address
from fairmint.crypto.entropy import EntropySource
from fairmint.crypto.hash import keccak256_raw
from fairmint.errors import BatchNotMinted, NonexistentToken, NonSequentialBatch
from fairmint.ledger.ownership import OwnershipLedger

logger = logging.getLogger(__name__)


def shuffled_id(token_id: int, batch_size: int, batch_count: int, within: int, overall: int) -> int:
    """Display identifier for token_id given its batch parameters."""
    rotated = (token_id % batch_size + within) % batch_size
    return rotated * batch_count + overall


def derive_offsets(seed: bytes, batch_size: int, remaining: int) -> Tuple[int, int]:
    """
    Split one entropy draw into (within, pick).

    pick indexes the pool of `remaining` unassigned slots.
    """
    within = int.from_bytes(keccak256_raw(seed + TAG_WITHIN), "big") % batch_size
    pick = int.from_bytes(keccak256_raw(seed + TAG_OVERALL), "big") % remaining
    return within, pick


class RevealEngine:
    """Sequential batch reveal and identifier/metadata resolution."""

    def __init__(
        self,
        state: CollectionState,
        access: AccessControl,
        ownership: OwnershipLedger,
        entropy: EntropySource,
        events: EventLog,
    ):
        self._state = state
        self._access = access
        self._ownership = ownership
        self._entropy = entropy
        self._events = events

    @property
    def batch_size(self) -> int:
        return self._state.config.batch_size

    @property
    def batch_count(self) -> int:
        return self._state.config.batch_count

    @property
    def current_revealed_batch(self) -> int:
        return self._state.reveal.current_revealed_batch

    def batch_offset(self, batch: int) -> Optional[RevealBatch]:
        """Stored (within, overall) of a revealed batch, else None."""
        return self._state.reveal.get(batch)

    def batch_of(self, token_id: int) -> int:
        """1-indexed batch containing token_id."""
        return token_id // self.batch_size + 1

    def is_revealed(self, token_id: int) -> bool:
        return self.batch_of(token_id) <= self._state.reveal.current_revealed_batch

    # ------------------------------------------------------------------
    # Reveal
    # ------------------------------------------------------------------

    def set_batch_offset(self, sender: Address, batch: int) -> RevealBatch:
        """
        Reveal the next batch.

        Raises:
            Unauthorized: If sender is not the operator
            NonSequentialBatch: If batch != current_revealed_batch + 1
            BatchNotMinted: If any identifier of the batch is unsold
        """
        self._access.require_operator(sender)

        reveal = self._state.reveal
        expected = reveal.current_revealed_batch + 1
        if batch != expected:
            raise NonSequentialBatch(f"Expected batch {expected}, got {batch}")

        batch_count = self.batch_count
        if batch > batch_count:
            raise NonSequentialBatch(f"All {batch_count} batches are revealed")

        minted = self._state.supply.total_minted
        required = batch * self.batch_size
        if minted < required:
            raise BatchNotMinted(f"Batch {batch} needs {required} minted, have {minted}")

        seed = self._entropy.draw(batch)
        remaining = batch_count - (batch - 1)
        within, pick = derive_offsets(seed, self.batch_size, remaining)
        overall = self._take_slot(pick, remaining)

        entry = RevealBatch(within=within, overall=overall)
        reveal.batches[batch] = entry
        reveal.current_revealed_batch = batch

        self._events.emit(EVT_BATCH_REVEALED, batch=batch, within=within, overall=overall)
        logger.info(f"Revealed batch {batch}/{batch_count}: within={within}, overall={overall}")
        return entry

    def _take_slot(self, pick: int, remaining: int) -> int:
        """
        Fisher-Yates step over the sparse pool: take position pick, move the
        last live position into its place, shrink the pool by one.
        """
        swaps = self._state.reveal.slot_swaps
        last = remaining - 1

        slot = swaps.get(pick, pick)
        if pick != last:
            swaps[pick] = swaps.get(last, last)
        swaps.pop(last, None)
        return slot

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def get_shuffled_id(self, token_id: int) -> int:
        """
        Display identifier of token_id. Unrevealed batches resolve with
        (within, overall) = (0, 0).

        Raises:
            NonexistentToken: If token_id is outside [0, limit)
        """
        limit = self._state.config.limit
        if not 0 <= token_id < limit:
            raise NonexistentToken(f"Token {token_id} is outside [0, {limit})")

        entry = self._state.reveal.get(self.batch_of(token_id))
        within, overall = (entry.within, entry.overall) if entry else (0, 0)
        return shuffled_id(token_id, self.batch_size, self.batch_count, within, overall)

    def resolve_metadata(self, token_id: int) -> str:
        """
        Metadata URI of an existing token.

        Raises:
            NonexistentToken: If token_id has not been minted
        """
        if not self._ownership.exists(token_id):
            raise NonexistentToken(f"Token {token_id} does not exist")

        config = self._state.config
        if not self.is_revealed(token_id):
            return config.pre_reveal_uri

        return f"{config.base_uri}{self.get_shuffled_id(token_id)}{config.token_uri_suffix}"
