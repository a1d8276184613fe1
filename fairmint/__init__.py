"""
FairMint
Phased fixed-supply issuance with signed allowlists and batch reveal.

Three issuance channels (reserve, allowlist, public) share a single hard cap;
display identifiers are revealed batch by batch through a shuffle that is a
bijection over the whole identifier space once complete.
"""

__version__ = "0.3.0"
__author__ = "FairMint"

from fairmint.collection import Collection
from fairmint.config import CollectionConfig
from fairmint.core.types import Address, Signature, Digest, KeyPair

__all__ = [
    "Collection",
    "CollectionConfig",
    "Address",
    "Signature",
    "Digest",
    "KeyPair",
    "__version__",
]
