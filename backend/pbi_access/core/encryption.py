"""
Encryption utilities for the stored database credentials
Uses AES-256-GCM (AEAD) from the cryptography library
"""

import base64
import binascii
import logging
import os
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from pbi_access.core.exceptions import DecryptionFailed, InvalidKey

logger = logging.getLogger(__name__)

KEY_SIZE = 32
NONCE_SIZE = 12


def get_master_key(value: Optional[str]) -> Optional[bytes]:
    """
    Turn the configured master key into key bytes

    Returns None (encryption disabled) when the value is empty or
    is not exactly 32 bytes long.
    """
    if not value:
        return None

    key = value.encode("utf-8")
    if len(key) != KEY_SIZE:
        logger.warning("Master key ignored: expected %d bytes, got %d", KEY_SIZE, len(key))
        return None
    return key


def _cipher(key: bytes) -> AESGCM:
    if key is None or len(key) != KEY_SIZE:
        raise InvalidKey()
    return AESGCM(key)


def encrypt(plaintext: str, key: bytes) -> str:
    """
    Encrypt plaintext string

    Args:
        plaintext: String to encrypt
        key: 32-byte master key

    Returns:
        base64 of nonce || ciphertext || tag
    """
    aesgcm = _cipher(key)
    nonce = os.urandom(NONCE_SIZE)
    sealed = aesgcm.encrypt(nonce, plaintext.encode("utf-8"), None)
    return base64.b64encode(nonce + sealed).decode("ascii")


def decrypt(envelope: str, key: bytes) -> str:
    """
    Decrypt an envelope produced by encrypt()

    Malformed input, a wrong key and tampered data all raise the
    same DecryptionFailed error.
    """
    aesgcm = _cipher(key)

    try:
        data = base64.b64decode(envelope, validate=True)
    except (binascii.Error, ValueError):
        raise DecryptionFailed()

    if len(data) < NONCE_SIZE:
        raise DecryptionFailed()

    nonce, sealed = data[:NONCE_SIZE], data[NONCE_SIZE:]
    try:
        plaintext = aesgcm.decrypt(nonce, sealed, None)
        return plaintext.decode("utf-8")
    except (InvalidTag, UnicodeDecodeError):
        raise DecryptionFailed()
