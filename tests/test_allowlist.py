"""
FairMint Allowlist Tests
"""

import pytest

from fairmint.collection import Collection
from fairmint.core.types import Address, Signature
from fairmint.crypto.hash import signed_message_digest
from fairmint.errors import (
    AdmissionError,
    IndexAlreadyUsed,
    IndexBelowMinimum,
    IncorrectPayment,
    InvalidSignature,
    PhaseInactive,
)


class TestMessages:
    """Tests for allowance message construction."""

    def test_deterministic(self, collection, alice):
        """Test the same inputs give the same message."""
        assert collection.create_message(alice, 1) == collection.create_message(alice, 1)

    def test_bound_to_recipient_and_index(self, collection, alice, bob):
        """Test message changes with recipient and index."""
        base = collection.create_message(alice, 1)
        assert collection.create_message(bob, 1) != base
        assert collection.create_message(alice, 2) != base

    def test_bound_to_collection(self, config, operator, alice):
        """Test message changes with the collection identity."""
        a = Collection(Address(bytes([1] * 32)), config, operator)
        b = Collection(Address(bytes([2] * 32)), config, operator)
        assert a.create_message(alice, 1) != b.create_message(alice, 1)

    def test_index_out_of_range(self, collection, alice):
        """Test index must fit u256."""
        with pytest.raises(ValueError):
            collection.create_message(alice, -1)
        with pytest.raises(ValueError):
            collection.create_message(alice, 2**256)


class TestValidateSignature:
    """Tests for signature validation."""

    def test_signer_signature_valid(self, collection, alice, alice_signature):
        """Test validation returns the signed digest."""
        digest = collection.validate_signature(alice, 1, alice_signature)
        assert digest == signed_message_digest(collection.create_message(alice, 1))

    def test_accepts_raw_bytes(self, collection, alice, alice_signature):
        """Test raw signature bytes are accepted."""
        assert collection.validate_signature(alice, 1, alice_signature.data) is not None

    def test_non_signer_invalid(self, collection, alice, alice_keys, sign_for):
        """Test a signature from anyone else is rejected."""
        signature = sign_for(alice, 1, signer=alice_keys)
        with pytest.raises(InvalidSignature):
            collection.validate_signature(alice, 1, signature)

    def test_wrong_recipient_invalid(self, collection, bob, alice_signature):
        """Test a signature cannot be used for another recipient."""
        with pytest.raises(InvalidSignature):
            collection.validate_signature(bob, 1, alice_signature)

    def test_wrong_index_invalid(self, collection, alice, alice_signature):
        """Test a signature cannot be used for another index."""
        with pytest.raises(InvalidSignature):
            collection.validate_signature(alice, 2, alice_signature)

    def test_malformed_signature(self, collection, alice):
        """Test malformed signatures are InvalidSignature, not crashes."""
        with pytest.raises(InvalidSignature):
            collection.validate_signature(alice, 1, b"\x00" * 10)
        with pytest.raises(InvalidSignature):
            collection.validate_signature(alice, 1, Signature(bytes(64)))

    def test_out_of_range_index(self, collection, alice, alice_signature):
        """Test an index outside u256 is InvalidSignature."""
        with pytest.raises(InvalidSignature):
            collection.validate_signature(alice, 2**256, alice_signature)


class TestMintWithSignature:
    """Tests for the allowlist channel."""

    def test_inactive(self, collection, alice, alice_signature):
        """Test allowlist minting is closed by default."""
        with pytest.raises(PhaseInactive):
            collection.mint_with_signature(alice, 1, 1, alice_signature, value=collection.price)

    def test_mint(self, collection, operator, alice, alice_signature):
        """Test a valid allowance mints and spends its index."""
        collection.toggle_allowlist(operator)
        quantity = collection.max_quantity

        token_ids = collection.mint_with_signature(
            alice, quantity, 1, alice_signature, value=collection.price * quantity
        )

        assert token_ids == list(range(quantity))
        assert collection.ownership.balance_of(alice) == quantity
        assert collection.total_minted == quantity
        assert collection.is_index_used(1)

    def test_index_cannot_be_reused(self, collection, operator, alice, alice_signature):
        """Test the identical triple fails the second time."""
        collection.toggle_allowlist(operator)
        collection.mint_with_signature(alice, 1, 1, alice_signature, value=collection.price)

        with pytest.raises(IndexAlreadyUsed):
            collection.mint_with_signature(alice, 1, 1, alice_signature, value=collection.price)
        assert collection.total_minted == 1

    def test_reuse_reported_for_any_recipient_or_quantity(self, collection, operator, alice, bob, alice_signature, sign_for):
        """Test reuse is IndexAlreadyUsed whoever submits and whatever the quantity."""
        collection.toggle_allowlist(operator)
        collection.mint_with_signature(alice, 1, 1, alice_signature, value=collection.price)

        with pytest.raises(IndexAlreadyUsed):
            collection.mint_with_signature(bob, 1, 1, sign_for(bob, 1), value=collection.price)
        with pytest.raises(IndexAlreadyUsed):
            collection.mint_with_signature(alice, 500, 1, alice_signature, value=0)

    def test_other_address_cannot_use_allowance(self, collection, operator, bob, alice_signature):
        """Test bob cannot spend alice's allowance."""
        collection.toggle_allowlist(operator)
        with pytest.raises(InvalidSignature):
            collection.mint_with_signature(bob, 1, 1, alice_signature, value=collection.price)
        assert not collection.is_index_used(1)

    def test_minimum_index_revokes(self, collection, operator, alice, alice_signature):
        """Test raising the minimum index revokes earlier allowances."""
        collection.toggle_allowlist(operator)
        collection.set_minimum_index(operator, 1000)

        with pytest.raises(IndexBelowMinimum):
            collection.mint_with_signature(alice, 1, 1, alice_signature, value=collection.price)

    def test_minimum_index_spares_higher_indices(self, collection, operator, alice, sign_for):
        """Test allowances at or above the minimum still work."""
        collection.toggle_allowlist(operator)
        collection.set_minimum_index(operator, 1000)

        signature = sign_for(alice, 1000)
        collection.mint_with_signature(alice, 1, 1000, signature, value=collection.price)
        assert collection.is_index_used(1000)

    def test_minimum_checked_before_reuse(self, collection, operator, alice, alice_signature):
        """Test a spent index below the minimum reports IndexBelowMinimum."""
        collection.toggle_allowlist(operator)
        collection.mint_with_signature(alice, 1, 1, alice_signature, value=collection.price)
        collection.set_minimum_index(operator, 5)

        with pytest.raises(IndexBelowMinimum):
            collection.mint_with_signature(alice, 1, 1, alice_signature, value=collection.price)

    def test_failed_mint_keeps_index(self, collection, operator, alice, alice_signature):
        """Test a rejected mint leaves the allowance unspent."""
        collection.toggle_allowlist(operator)

        with pytest.raises(IncorrectPayment):
            collection.mint_with_signature(alice, 2, 1, alice_signature, value=collection.price)
        assert not collection.is_index_used(1)

        collection.mint_with_signature(alice, 2, 1, alice_signature, value=collection.price * 2)
        assert collection.is_index_used(1)

    def test_admission_errors_share_a_group(self, collection, operator, alice, bob, alice_signature):
        """Test admission failures are all AdmissionError."""
        collection.toggle_allowlist(operator)
        with pytest.raises(AdmissionError):
            collection.mint_with_signature(bob, 1, 1, alice_signature, value=collection.price)

    def test_public_sale_does_not_open_allowlist(self, collection, operator, alice, alice_signature):
        """Test phases gate their own channel only."""
        collection.toggle_public_sale(operator)
        with pytest.raises(PhaseInactive):
            collection.mint_with_signature(alice, 1, 1, alice_signature, value=collection.price)
