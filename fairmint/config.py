"""
FairMint Configuration
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, asdict
from typing import List, Optional

from fairmint.constants import DEFAULT_TOKEN_URI_SUFFIX, WEI_PER_ETHER

logger = logging.getLogger(__name__)


@dataclass
class CollectionConfig:
    """
    Collection configuration.

    Fixed at deployment except for the values the operator may update
    (URIs, price, limit, max_quantity).
    """
    name: str = "fairmint"
    limit: int = 100                    # Hard supply cap
    max_quantity: int = 6               # Per-call cap
    owner_limit: int = 5                # Reserve cap
    price: int = 0                      # Per identifier, base units
    batch_size: int = 10                # Identifiers per reveal batch
    base_uri: str = ""
    base_image_uri: str = ""
    pre_reveal_uri: str = ""
    token_uri_suffix: str = DEFAULT_TOKEN_URI_SUFFIX

    @property
    def batch_count(self) -> int:
        """Number of reveal batches (N)."""
        return self.limit // self.batch_size

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.limit < 1:
            errors.append(f"limit must be at least 1, got {self.limit}")

        if self.batch_size < 1:
            errors.append(f"batch_size must be at least 1, got {self.batch_size}")
        elif self.limit % self.batch_size != 0:
            errors.append(
                f"limit ({self.limit}) must be divisible by batch_size ({self.batch_size})"
            )

        if self.max_quantity < 0:
            errors.append("max_quantity cannot be negative")

        if self.owner_limit < 0:
            errors.append("owner_limit cannot be negative")
        elif self.owner_limit > self.limit:
            errors.append(f"owner_limit ({self.owner_limit}) exceeds limit ({self.limit})")

        if self.price < 0:
            errors.append("price cannot be negative")

        return errors

    def copy(self) -> "CollectionConfig":
        return CollectionConfig(**asdict(self))

    def to_dict(self) -> dict:
        """Export configuration as dictionary."""
        return asdict(self)

    def save(self, path: str) -> None:
        """Save configuration to file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Configuration saved to {path}")

    @classmethod
    def load(cls, path: str) -> "CollectionConfig":
        """Load configuration from file."""
        with open(path, 'r') as f:
            data = json.load(f)

        config = cls(**data)

        logger.info(f"Configuration loaded from {path}")
        return config

    @classmethod
    def default_example(cls) -> "CollectionConfig":
        """Create the reference 100-piece configuration."""
        return cls(
            name="fairmint-example",
            limit=100,
            max_quantity=6,
            owner_limit=5,
            price=88 * WEI_PER_ETHER // 1000,   # 0.088 ether
            batch_size=10,
            base_uri="ipfs://QmHash/",
            base_image_uri="ipfs://QmSecondHash/",
            pre_reveal_uri="ipfs://QmThirdHash/0.json",
        )


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_size_mb: int = 100
    backup_count: int = 5


def setup_logging(config: LogConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]

    if config.file:
        from logging.handlers import RotatingFileHandler
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format=config.format,
        handlers=handlers,
    )
