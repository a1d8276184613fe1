"""
FairMint Allowlist Authenticator

An allowance is a signature by the current allowlist signer over
Keccak256(collection || recipient || index). Binding the index lets the
issuer sign one allowance per participant off-chain with no per-address
writes here; each index is spent once, and raising the minimum index
revokes every unspent allowance below it in O(1).
"""

from __future__ import annotations
import logging
from typing import Union

from fairmint.constants import INDEX_SIZE, MAX_INDEX
from fairmint.core.state import CollectionState
from fairmint.core.types import Address, Digest, Signature
from fairmint.crypto.hash import keccak256, signed_message_digest
from fairmint.crypto.signing import verify_message
from fairmint.errors import IndexAlreadyUsed, IndexBelowMinimum, InvalidSignature

logger = logging.getLogger(__name__)


def encode_message(collection: Address, recipient: Address, index: int) -> bytes:
    """collection (32) || recipient (32) || index (u256 big-endian)."""
    if not 0 <= index <= MAX_INDEX:
        raise ValueError(f"Index out of range: {index}")
    return collection.data + recipient.data + index.to_bytes(INDEX_SIZE, "big")


class AllowlistAuthenticator:
    """Message construction, signature checks, and index bookkeeping."""

    def __init__(self, collection: Address, state: CollectionState):
        self._collection = collection
        self._state = state

    @property
    def minimum_index(self) -> int:
        return self._state.allowlist.minimum_index

    def is_used(self, index: int) -> bool:
        return index in self._state.allowlist.used_indices

    def create_message(self, recipient: Address, index: int) -> Digest:
        """Message the signer signs for (recipient, index)."""
        return keccak256(encode_message(self._collection, recipient, index))

    def validate_signature(
        self,
        recipient: Address,
        index: int,
        signature: Union[Signature, bytes],
    ) -> Digest:
        """
        Check that the current allowlist signer signed (recipient, index).

        Returns:
            The signed message digest

        Raises:
            InvalidSignature: If the signature is malformed or from anyone else
        """
        try:
            if not isinstance(signature, Signature):
                signature = Signature(bytes(signature))
            message = self.create_message(recipient, index)
        except (TypeError, ValueError) as e:
            raise InvalidSignature(str(e)) from e

        signer = self._state.principals.allowlist_signer
        if not verify_message(signer.data, message, signature):
            raise InvalidSignature("Signature is not from the allowlist signer")

        return signed_message_digest(message)

    def admit(
        self,
        recipient: Address,
        index: int,
        signature: Union[Signature, bytes],
    ) -> Digest:
        """
        Mint-time admission. Index checks come first so that reuse and
        revocation are reported as such whatever the recipient.
        """
        allowlist = self._state.allowlist

        if index < allowlist.minimum_index:
            logger.warning(f"Allowance index {index} below minimum {allowlist.minimum_index}")
            raise IndexBelowMinimum(f"Index {index} < minimum {allowlist.minimum_index}")

        if index in allowlist.used_indices:
            logger.warning(f"Allowance index {index} already used")
            raise IndexAlreadyUsed(f"Index {index} already used")

        try:
            return self.validate_signature(recipient, index, signature)
        except InvalidSignature:
            logger.warning(f"Rejected allowance {index} for {recipient.hex()[:16]}")
            raise

    def consume(self, index: int) -> None:
        self._state.allowlist.consume(index)
