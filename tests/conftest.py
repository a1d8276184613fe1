"""
FairMint Test Fixtures
"""

import pytest

from fairmint.collection import Collection
from fairmint.config import CollectionConfig
from fairmint.core.types import Address, KeyPair, Signature
from fairmint.crypto.entropy import SeededEntropySource
from fairmint.crypto.signing import sign_message

PRICE = 80_000_000_000_000_000   # 0.08 ether


def make_keypair(tag: int) -> KeyPair:
    """Deterministic keypair from a one-byte tag."""
    return KeyPair.from_seed(bytes([tag] * 32))


def sign_allowance(signer: KeyPair, collection: Collection, recipient: Address, index: int) -> Signature:
    """Sign an allowance the way the off-chain issuer does."""
    return sign_message(signer, collection.create_message(recipient, index))


def mint_out(collection: Collection, buyer: Address) -> None:
    """Open the public sale if needed and sell every remaining identifier."""
    if not collection.public_sale_active:
        collection.toggle_public_sale(collection.operator)
    while collection.total_minted < collection.limit:
        quantity = min(collection.max_quantity, collection.limit - collection.total_minted)
        collection.mint(buyer, quantity, value=collection.price * quantity)


@pytest.fixture
def operator_keys() -> KeyPair:
    return make_keypair(1)


@pytest.fixture
def alice_keys() -> KeyPair:
    return make_keypair(2)


@pytest.fixture
def bob_keys() -> KeyPair:
    return make_keypair(3)


@pytest.fixture
def operator(operator_keys) -> Address:
    return operator_keys.address


@pytest.fixture
def alice(alice_keys) -> Address:
    return alice_keys.address


@pytest.fixture
def bob(bob_keys) -> Address:
    return bob_keys.address


@pytest.fixture
def collection_address() -> Address:
    return Address(bytes([0xC0] * 32))


@pytest.fixture
def config() -> CollectionConfig:
    """100 identifiers in 10 batches of 10."""
    return CollectionConfig(
        name="test-collection",
        limit=100,
        max_quantity=10,
        owner_limit=10,
        price=PRICE,
        batch_size=10,
        base_uri="starterURI",
        base_image_uri="A baseImageURI appears",
        pre_reveal_uri="PreRevealURI is this",
    )


@pytest.fixture
def entropy() -> SeededEntropySource:
    return SeededEntropySource(b"fairmint-test-seed")


@pytest.fixture
def collection(collection_address, config, operator, entropy) -> Collection:
    return Collection(collection_address, config, operator, entropy=entropy)


@pytest.fixture
def alice_signature(operator_keys, collection, alice) -> Signature:
    """Operator-signed allowance for alice at index 1."""
    return sign_allowance(operator_keys, collection, alice, 1)


@pytest.fixture
def minted_out(collection, bob) -> Collection:
    """Collection with every identifier sold to bob."""
    mint_out(collection, bob)
    return collection


@pytest.fixture
def sign_for(operator_keys, collection):
    """sign_for(recipient, index, signer=operator_keys) -> Signature"""
    def _sign(recipient: Address, index: int, signer: KeyPair = None) -> Signature:
        return sign_allowance(signer or operator_keys, collection, recipient, index)
    return _sign


@pytest.fixture
def sell_out():
    return mint_out


@pytest.fixture
def keypair_factory():
    return make_keypair
