"""
FairMint Reentrancy Tests

A receiver hook runs synchronously inside the ownership ledger's mint, the
same place a malicious receiver contract gets control.
"""

import pytest

from fairmint.collection import ReentrancyGuard
from fairmint.errors import IncorrectPayment, Reentrant


class TestReentrancyGuard:
    """Tests for the guard itself."""

    def test_blocks_nested_entry(self):
        """Test entering twice raises."""
        guard = ReentrancyGuard()
        with guard:
            assert guard.locked
            with pytest.raises(Reentrant):
                with guard:
                    pass
        assert not guard.locked

    def test_released_on_error(self):
        """Test the flag clears when the body raises."""
        guard = ReentrancyGuard()
        with pytest.raises(RuntimeError):
            with guard:
                raise RuntimeError("boom")
        assert not guard.locked


class TestMintReentrancy:
    """Tests for reentrant calls from the mint callback."""

    def test_reentrant_mint_aborts_outer(self, collection, operator, bob):
        """Test a re-entering receiver fails the whole mint."""
        collection.toggle_public_sale(operator)
        calls = []

        def attack(op, to, token_id):
            calls.append(token_id)
            collection.mint(bob, 1, value=collection.price)

        collection.ownership.register_receiver(bob, attack)

        with pytest.raises(Reentrant):
            collection.mint(bob, 2, value=collection.price * 2)

        assert calls == [0]
        assert collection.total_minted == 0
        assert collection.total_supply() == 0
        assert collection.balance == 0
        assert collection.ownership.events.filter("Transfer") == []

    def test_swallowed_reentry_changes_nothing(self, collection, operator, bob):
        """Test a caught reentrant call leaves counters to the outer call."""
        collection.toggle_public_sale(operator)
        errors = []

        def attack(op, to, token_id):
            try:
                collection.mint(bob, 1, value=collection.price)
            except Reentrant as e:
                errors.append(e)

        collection.ownership.register_receiver(bob, attack)
        collection.mint(bob, 3, value=collection.price * 3)

        assert len(errors) == 3
        assert collection.total_minted == 3
        assert collection.total_supply() == 3

    def test_reentrant_allowlist_mint(self, collection, operator, bob, sign_for):
        """Test reentry through the allowlist channel."""
        collection.toggle_allowlist(operator)
        first = sign_for(bob, 1)
        second = sign_for(bob, 2)

        def attack(op, to, token_id):
            collection.mint_with_signature(bob, 1, 2, second, value=collection.price)

        collection.ownership.register_receiver(bob, attack)

        with pytest.raises(Reentrant):
            collection.mint_with_signature(bob, 1, 1, first, value=collection.price)

        assert collection.total_minted == 0
        assert not collection.is_index_used(1)
        assert not collection.is_index_used(2)

    def test_reentrant_owner_mint(self, collection, operator):
        """Test reentry through the reserve channel."""
        def attack(op, to, token_id):
            collection.owner_mint(operator, 1)

        collection.ownership.register_receiver(operator, attack)

        with pytest.raises(Reentrant):
            collection.owner_mint(operator, 1)
        assert collection.owner_minted == 0
        assert collection.total_minted == 0

    def test_cross_channel_reentry(self, collection, operator, bob):
        """Test public mint cannot be entered from a reserve mint."""
        collection.toggle_public_sale(operator)

        def attack(op, to, token_id):
            collection.mint(operator, 1, value=collection.price)

        collection.ownership.register_receiver(operator, attack)

        with pytest.raises(Reentrant):
            collection.owner_mint(operator, 1)
        assert collection.total_minted == 0

    def test_guard_released_after_failures(self, collection, operator, bob):
        """Test guard never sticks after a rejected or aborted call."""
        collection.toggle_public_sale(operator)

        with pytest.raises(IncorrectPayment):
            collection.mint(bob, 1, value=0)

        def attack(op, to, token_id):
            collection.mint(bob, 1, value=collection.price)

        collection.ownership.register_receiver(bob, attack)
        with pytest.raises(Reentrant):
            collection.mint(bob, 1, value=collection.price)
        collection.ownership.unregister_receiver(bob)

        assert not collection.issuance.guard.locked
        collection.mint(bob, 1, value=collection.price)
        assert collection.total_minted == 1


class TestWithdrawReentrancy:
    """Tests for reentry from the payout callback."""

    def test_reentrant_withdraw(self, collection, operator, bob):
        """Test a re-entering payee fails the withdrawal."""
        collection.toggle_public_sale(operator)
        collection.mint(bob, 2, value=collection.price * 2)

        def attack(payee, amount):
            collection.withdraw_funds(operator)

        collection.funds.register_receiver(operator, attack)

        with pytest.raises(Reentrant):
            collection.withdraw_funds(operator)

        assert collection.balance == collection.price * 2
        assert collection.funds.balance_of(operator) == 0
        assert collection.events.last("FundsWithdrawn") is None

    def test_mint_during_withdraw(self, collection, operator):
        """Test minting cannot be entered from a payout."""
        collection.toggle_public_sale(operator)
        collection.mint(operator, 1, value=collection.price)

        def attack(payee, amount):
            collection.mint(operator, 1, value=collection.price)

        collection.funds.register_receiver(operator, attack)

        with pytest.raises(Reentrant):
            collection.withdraw_funds(operator)
        assert collection.total_minted == 1
