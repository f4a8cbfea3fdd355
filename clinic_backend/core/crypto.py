"""
Field-level encryption for sensitive columns.

Values are sealed with AES-256-GCM and stored as a self-describing token
``nonce:tag:ciphertext`` where every part is hex encoded. The nonce is 96 bits
and freshly drawn for every call. The tag is always verified before any
plaintext is handed back.
"""
import hashlib
import logging
import re
from typing import Optional

from Crypto.Cipher import AES
from Crypto.Random import get_random_bytes

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


class CryptoError(Exception):
    """Base class for field encryption errors."""


class InvalidInput(CryptoError):
    """Plaintext (or value to hash) is empty or not a string."""


class InvalidFormat(CryptoError):
    """Token is not ``nonce:tag:ciphertext`` with valid hex parts."""


class AuthenticationFailure(CryptoError):
    """Authentication tag did not verify (tampered data or wrong key)."""


def hash_value(value: str) -> str:
    """SHA-256 of the trimmed, lower-cased value. For duplicate checks only."""
    if not value or not isinstance(value, str):
        raise InvalidInput("Invalid value provided for hashing")
    return hashlib.sha256(value.strip().lower().encode("utf-8")).hexdigest()


def _split_token(token: str):
    if not token or not isinstance(token, str):
        raise InvalidFormat("Invalid encrypted data provided for decryption")

    parts = token.split(":")
    if len(parts) != 3 or not all(part and _HEX_RE.match(part) for part in parts):
        raise InvalidFormat("Invalid encrypted data format")

    try:
        nonce, tag, ciphertext = (bytes.fromhex(part) for part in parts)
    except ValueError as exc:
        raise InvalidFormat("Invalid encrypted data format") from exc

    if len(nonce) != NONCE_SIZE or len(tag) != TAG_SIZE:
        raise InvalidFormat("Invalid encrypted data format")
    return nonce, tag, ciphertext


def looks_encrypted(value) -> bool:
    """True when ``value`` has the shape of a token produced by ``encrypt``."""
    if not value or not isinstance(value, str):
        return False
    try:
        _split_token(value)
    except InvalidFormat:
        return False
    return True


class FieldCipher:
    """AES-256-GCM cipher for individual string fields."""

    def __init__(self, key: bytes):
        if len(key) != KEY_SIZE:
            raise ConfigurationError(f"AES key must be {KEY_SIZE} bytes, got {len(key)}")
        self._key = key

    @classmethod
    def from_hex(cls, hex_key: Optional[str]) -> "FieldCipher":
        if not hex_key:
            raise ConfigurationError("AES_SECRET_KEY not found in environment variables")
        try:
            key = bytes.fromhex(hex_key.strip())
        except ValueError as exc:
            raise ConfigurationError("AES_SECRET_KEY must be hex encoded") from exc
        return cls(key)

    @classmethod
    def from_settings(cls, settings) -> "FieldCipher":
        return cls.from_hex(settings.AES_SECRET_KEY)

    def encrypt(self, plaintext: str) -> str:
        if not plaintext or not isinstance(plaintext, str):
            raise InvalidInput("Invalid text provided for encryption")

        nonce = get_random_bytes(NONCE_SIZE)
        cipher = AES.new(self._key, AES.MODE_GCM, nonce=nonce, mac_len=TAG_SIZE)
        ciphertext, tag = cipher.encrypt_and_digest(plaintext.encode("utf-8"))
        return f"{nonce.hex()}:{tag.hex()}:{ciphertext.hex()}"

    def decrypt(self, token: str) -> str:
        nonce, tag, ciphertext = _split_token(token)

        cipher = AES.new(self._key, AES.MODE_GCM, nonce=nonce, mac_len=TAG_SIZE)
        try:
            plaintext = cipher.decrypt_and_verify(ciphertext, tag)
        except ValueError as exc:
            raise AuthenticationFailure("Authentication tag verification failed") from exc
        return plaintext.decode("utf-8")

    def safe_encrypt(self, value: Optional[str]) -> Optional[str]:
        """Encrypt, mapping empty input to ``None``."""
        if not value:
            return None
        return self.encrypt(value)

    def safe_decrypt(self, value: Optional[str]) -> str:
        """Decrypt, mapping empty input and any failure to ``''``."""
        if not value:
            return ""
        try:
            return self.decrypt(value)
        except (CryptoError, UnicodeDecodeError) as exc:
            logger.warning(f"Decryption failed: {exc}")
            return ""

    def decrypt_if_encrypted(self, value: Optional[str]) -> str:
        """Decrypt token-shaped values, pass plain values through unchanged."""
        if looks_encrypted(value):
            return self.safe_decrypt(value)
        return value or ""
