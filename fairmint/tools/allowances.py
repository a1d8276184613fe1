"""
FairMint Allowance Issuance

Off-chain side of the allowlist: the signer produces one allowance per
participant and publishes it as <address>.json for the participant to
submit with mint_with_signature.
"""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from fairmint.collection.allowlist import encode_message
from fairmint.constants import MAX_INDEX
from fairmint.core.types import Address, KeyPair, Signature
from fairmint.crypto.hash import keccak256
from fairmint.crypto.signing import sign_message, verify_message

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Allowance:
    """A signed (recipient, index) pair."""
    index: int
    signature: Signature
    address: Address

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "signature": self.signature.hex(),
            "address": self.address.hex(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Allowance":
        index = int(data["index"])
        if not 0 <= index <= MAX_INDEX:
            raise ValueError(f"Index out of range: {index}")
        return cls(
            index=index,
            signature=Signature.from_hex(data["signature"]),
            address=Address.from_hex(data["address"]),
        )


def issue_allowance(
    signer: KeyPair,
    collection: Address,
    recipient: Address,
    index: int,
) -> Allowance:
    """Sign the allowance message for (recipient, index) on collection."""
    message = keccak256(encode_message(collection, recipient, index))
    return Allowance(index=index, signature=sign_message(signer, message), address=recipient)


def verify_allowance(signer: Address, collection: Address, allowance: Allowance) -> bool:
    """Check an allowance against a signer without a live collection."""
    message = keccak256(encode_message(collection, allowance.address, allowance.index))
    return verify_message(signer.data, message, allowance.signature)


def issue_allowances(
    signer: KeyPair,
    collection: Address,
    recipients: Iterable[Union[str, Address]],
    start_index: int = 0,
) -> List[Allowance]:
    """
    Issue allowances with consecutive indices.

    A recipient that cannot be parsed is logged and skipped; its index is
    not reused for the next recipient.
    """
    allowances = []
    for offset, raw in enumerate(recipients):
        index = start_index + offset
        try:
            recipient = _parse_recipient(raw)
            allowances.append(issue_allowance(signer, collection, recipient, index))
        except (TypeError, ValueError) as e:
            logger.error(f"{raw!r} failed: {e}")

    logger.info(f"Issued {len(allowances)} allowances from index {start_index}")
    return allowances


def _parse_recipient(raw: Union[str, Address]) -> Address:
    if isinstance(raw, Address):
        return raw
    if not isinstance(raw, str):
        raise TypeError(f"Recipient must be a hex string or Address, got {type(raw).__name__}")
    return Address.from_hex(raw.strip())


def write_allowance_files(directory: Union[str, Path], allowances: Iterable[Allowance]) -> List[Path]:
    """Write one <address>.json per allowance."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    paths = []
    for allowance in allowances:
        path = directory / f"{allowance.address.hex()}.json"
        with open(path, 'w') as f:
            json.dump(allowance.to_dict(), f)
        paths.append(path)

    return paths


def load_allowance(path: Union[str, Path]) -> Allowance:
    """
    Read one allowance file.

    Raises:
        ValueError: If the file is not a well-formed allowance
    """
    with open(path, 'r') as f:
        try:
            return Allowance.from_dict(json.load(f))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ValueError(f"{path}: malformed allowance ({type(e).__name__}: {e})") from e


def read_recipients(path: Union[str, Path]) -> List[str]:
    """One hex address per line; blank lines and # comments ignored."""
    with open(path, 'r') as f:
        lines = [line.split("#", 1)[0].strip() for line in f]
    return [line for line in lines if line]


def load_keypair(path: Union[str, Path]) -> KeyPair:
    with open(path, 'r') as f:
        return KeyPair.from_seed(bytes.fromhex(f.read().strip()))


def save_keypair(path: Union[str, Path], keypair: KeyPair) -> Tuple[Path, Address]:
    """
    Write the signer seed readable by the owner only.

    The file is created 0600, and an existing file is narrowed to 0600
    before the seed is written into it.
    """
    path = Path(path)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    try:
        os.fchmod(fd, 0o600)
    except OSError:
        os.close(fd)
        raise
    with os.fdopen(fd, 'w') as f:
        f.write(keypair.seed.hex())
    return path, keypair.address
