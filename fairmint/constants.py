"""
FairMint Constants

All collection-wide constants defined here for single source of truth.
"""

from typing import Final

# ==============================================================================
# SIZES
# ==============================================================================

ADDRESS_SIZE: Final[int] = 32           # Ed25519 verify key
SIGNATURE_SIZE: Final[int] = 64         # Ed25519 signature
DIGEST_SIZE: Final[int] = 32            # Keccak-256 output
SEED_SIZE: Final[int] = 32              # Ed25519 secret seed
INDEX_SIZE: Final[int] = 32             # Allowlist index, u256 big-endian

MAX_INDEX: Final[int] = 2**256 - 1

# ==============================================================================
# SIGNING
# ==============================================================================

# Prefix applied to every 32-byte message before signing, so an allowance
# signature can never be mistaken for a signature over arbitrary data.
SIGNED_MESSAGE_PREFIX: Final[bytes] = b"\x19FairMint Signed Message:\n32"

# ==============================================================================
# REVEAL
# ==============================================================================

ENTROPY_SIZE: Final[int] = 32
TAG_WITHIN: Final[bytes] = b"within"
TAG_OVERALL: Final[bytes] = b"overall"

# ==============================================================================
# METADATA
# ==============================================================================

DEFAULT_TOKEN_URI_SUFFIX: Final[str] = ".json"

# ==============================================================================
# UNITS
# ==============================================================================

WEI_PER_ETHER: Final[int] = 10**18

# ==============================================================================
# EVENT NAMES
# ==============================================================================

EVT_OPERATOR_TRANSFERRED: Final[str] = "OperatorTransferred"
EVT_GUARDIAN_TRANSFERRED: Final[str] = "GuardianTransferred"
EVT_ALLOWLIST_UPDATED: Final[str] = "AllowlistUpdated"
EVT_PUBLIC_SALE_UPDATED: Final[str] = "PublicSaleUpdated"
EVT_FROZEN: Final[str] = "Frozen"
EVT_BASE_URI_UPDATED: Final[str] = "BaseURIUpdated"
EVT_BASE_IMAGE_URI_UPDATED: Final[str] = "BaseImageURIUpdated"
EVT_PRE_REVEAL_URI_UPDATED: Final[str] = "PreRevealURIUpdated"
EVT_LIMIT_UPDATED: Final[str] = "LimitUpdated"
EVT_MAX_QUANTITY_UPDATED: Final[str] = "MaxQuantityUpdated"
EVT_PRICE_UPDATED: Final[str] = "PriceUpdated"
EVT_MINIMUM_INDEX_UPDATED: Final[str] = "MinimumIndexUpdated"
EVT_FUNDS_WITHDRAWN: Final[str] = "FundsWithdrawn"
EVT_BATCH_REVEALED: Final[str] = "BatchRevealed"
EVT_TRANSFER: Final[str] = "Transfer"
