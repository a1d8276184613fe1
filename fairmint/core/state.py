"""
FairMint State Structures

All mutable collection state lives in one CollectionState so a failed call
can be rolled back by restoring a snapshot.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from fairmint.config import CollectionConfig
from fairmint.core.types import Address


@dataclass
class PhaseState:
    """Sale phase flags. Toggled by the operator only, never expire."""
    allowlist_active: bool = False
    public_sale_active: bool = False


@dataclass
class Principals:
    """Privileged identities."""
    operator: Address
    guardian: Address
    allowlist_signer: Address


@dataclass
class AllowlistState:
    """
    Allowlist replay protection.

    used_indices only grows; minimum_index revokes every index below it at once.
    consumed lists used_indices in consumption order so a rollback can undo
    the newest entries without copying the set.
    """
    used_indices: Set[int] = field(default_factory=set)
    minimum_index: int = 0
    consumed: List[int] = field(default_factory=list)

    def consume(self, index: int) -> None:
        self.used_indices.add(index)
        self.consumed.append(index)

    def mark(self) -> int:
        return len(self.consumed)

    def truncate(self, mark: int) -> None:
        for index in self.consumed[mark:]:
            self.used_indices.discard(index)
        del self.consumed[mark:]

    def copy(self) -> "AllowlistState":
        return AllowlistState(
            used_indices=set(self.used_indices),
            minimum_index=self.minimum_index,
            consumed=list(self.consumed),
        )


@dataclass
class SupplyState:
    """Issuance counters and collected payments."""
    total_minted: int = 0
    owner_minted: int = 0
    balance: int = 0


@dataclass(frozen=True)
class RevealBatch:
    """Stored shuffle parameters of one revealed batch."""
    within: int
    overall: int


@dataclass
class RevealState:
    """
    Reveal progress.

    batches holds entries only for 1..current_revealed_batch.
    slot_swaps is the sparse Fisher-Yates table over the unassigned overall
    slots: position p of the pool holds slot_swaps.get(p, p).
    """
    current_revealed_batch: int = 0
    batches: Dict[int, RevealBatch] = field(default_factory=dict)
    slot_swaps: Dict[int, int] = field(default_factory=dict)

    def get(self, batch: int) -> Optional[RevealBatch]:
        return self.batches.get(batch)

    def copy(self) -> "RevealState":
        return RevealState(
            current_revealed_batch=self.current_revealed_batch,
            batches=dict(self.batches),
            slot_swaps=dict(self.slot_swaps),
        )


@dataclass
class CollectionState:
    """Complete mutable state of a collection."""
    config: CollectionConfig
    principals: Principals
    frozen: bool = False
    phase: PhaseState = field(default_factory=PhaseState)
    allowlist: AllowlistState = field(default_factory=AllowlistState)
    supply: SupplyState = field(default_factory=SupplyState)
    reveal: RevealState = field(default_factory=RevealState)

    @classmethod
    def initial(
        cls,
        config: CollectionConfig,
        operator: Address,
        guardian: Optional[Address] = None,
    ) -> "CollectionState":
        return cls(
            config=config.copy(),
            principals=Principals(
                operator=operator,
                guardian=guardian if guardian is not None else operator,
                allowlist_signer=operator,
            ),
        )

    def copy(self) -> "CollectionState":
        """Create a deep copy of this state."""
        return self._copy_with(self.allowlist.copy())

    def _copy_with(self, allowlist: AllowlistState) -> "CollectionState":
        return CollectionState(
            config=self.config.copy(),
            principals=Principals(
                operator=self.principals.operator,
                guardian=self.principals.guardian,
                allowlist_signer=self.principals.allowlist_signer,
            ),
            frozen=self.frozen,
            phase=PhaseState(
                allowlist_active=self.phase.allowlist_active,
                public_sale_active=self.phase.public_sale_active,
            ),
            allowlist=allowlist,
            supply=SupplyState(
                total_minted=self.supply.total_minted,
                owner_minted=self.supply.owner_minted,
                balance=self.supply.balance,
            ),
            reveal=self.reveal.copy(),
        )

    def snapshot(self) -> "StateSnapshot":
        """
        Rollback point.

        Used indices are recorded by position, not copied; everything else
        is bounded by the number of batches.
        """
        allowlist = AllowlistState(minimum_index=self.allowlist.minimum_index)
        return StateSnapshot(state=self._copy_with(allowlist), consumed=self.allowlist.mark())

    def rollback(self, snapshot: "StateSnapshot") -> None:
        """
        Return to snapshot in place.

        Sub-objects keep their identity, so references held by an in-flight
        call stay valid after a nested call rolls back.
        """
        restored = snapshot.state.copy()
        self.frozen = restored.frozen
        for name in ("config", "principals", "phase", "supply", "reveal"):
            vars(getattr(self, name)).update(vars(getattr(restored, name)))

        self.allowlist.truncate(snapshot.consumed)
        self.allowlist.minimum_index = restored.allowlist.minimum_index


@dataclass(frozen=True)
class StateSnapshot:
    """Point a CollectionState can roll back to."""
    state: CollectionState
    consumed: int
