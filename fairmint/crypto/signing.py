"""
FairMint Allowance Signatures

Ed25519 over libsodium via PyNaCl. The signer signs the prefixed digest of
an allowance message, never the message itself, so an allowance cannot be
mistaken for any other 32-byte payload the same key might sign.
"""

import logging
from typing import Tuple

import nacl.exceptions
import nacl.signing

from fairmint.core.types import Address, Digest, KeyPair, Signature
from fairmint.crypto.hash import signed_message_digest

logger = logging.getLogger(__name__)


def new_signer_seed() -> Tuple[bytes, Address]:
    """Fresh signing seed and the address it controls."""
    signing_key = nacl.signing.SigningKey.generate()
    return signing_key.encode(), Address(signing_key.verify_key.encode())


def address_of(seed: bytes) -> Address:
    return Address(nacl.signing.SigningKey(seed).verify_key.encode())


def sign_message(keypair: KeyPair, message: Digest) -> Signature:
    """Sign the prefixed digest of a 32-byte message, as a wallet would."""
    digest = signed_message_digest(message)
    signed = nacl.signing.SigningKey(keypair.seed).sign(digest.data)
    return Signature(signed.signature)


def verify_message(signer: bytes, message: Digest, signature: Signature) -> bool:
    """
    Check that signer signed the prefixed digest of message.

    A key libsodium refuses to load counts as a failed check, not an error:
    the allowlist signer is whatever address the operator holds.
    """
    digest = signed_message_digest(message)
    try:
        nacl.signing.VerifyKey(signer).verify(digest.data, signature.data)
        return True
    except nacl.exceptions.BadSignatureError:
        return False
    except (nacl.exceptions.CryptoError, ValueError, TypeError) as e:
        logger.warning(f"Allowance signature check failed on key {bytes(signer).hex()[:16]}: {e}")
        return False
