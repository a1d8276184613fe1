"""
FairMint Errors

Every failure aborts the whole call. Each concrete error carries a stable
``kind`` so callers can tell admission failures from capacity failures
without parsing messages.
"""


class CollectionError(Exception):
    """Base error for all collection operations."""
    kind = "CollectionError"


# ==============================================================================
# GROUPS
# ==============================================================================

class AuthorizationError(CollectionError):
    """Caller is not the required principal."""
    pass


class PhaseError(CollectionError):
    """Issuance channel is closed."""
    pass


class AdmissionError(CollectionError):
    """Allowlist admission failed."""
    pass


class CapacityError(CollectionError):
    """Requested quantity does not fit a cap."""
    pass


class PaymentError(CollectionError):
    """Attached payment is wrong."""
    pass


class ConfigurationError(CollectionError):
    """Configuration change rejected."""
    pass


class RevealError(CollectionError):
    """Batch reveal rejected."""
    pass


class ReentrancyError(CollectionError):
    """Guarded entry point re-entered."""
    pass


# ==============================================================================
# CONCRETE ERRORS
# ==============================================================================

class Unauthorized(AuthorizationError):
    kind = "Unauthorized"


class PhaseInactive(PhaseError):
    kind = "PhaseInactive"


class InvalidSignature(AdmissionError):
    kind = "InvalidSignature"


class IndexAlreadyUsed(AdmissionError):
    kind = "IndexAlreadyUsed"


class IndexBelowMinimum(AdmissionError):
    kind = "IndexBelowMinimum"


class ExceedsMaxQuantity(CapacityError):
    kind = "ExceedsMaxQuantity"


class ExceedsSupply(CapacityError):
    kind = "ExceedsSupply"


class ExceedsOwnerLimit(CapacityError):
    kind = "ExceedsOwnerLimit"


class InvalidQuantity(CapacityError):
    kind = "InvalidQuantity"


class IncorrectPayment(PaymentError):
    kind = "IncorrectPayment"


class Frozen(ConfigurationError):
    kind = "Frozen"


class InvalidConfiguration(ConfigurationError):
    kind = "InvalidConfiguration"


class InvalidAddress(ConfigurationError):
    kind = "InvalidAddress"


class NonSequentialBatch(RevealError):
    kind = "NonSequentialBatch"


class BatchNotMinted(RevealError):
    kind = "BatchNotMinted"


class Reentrant(ReentrancyError):
    kind = "Reentrant"


class NonexistentToken(CollectionError, LookupError):
    kind = "NonexistentToken"
