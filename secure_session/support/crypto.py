"""
Crypto - Centralized cryptography operations
Provides token generation, key derivation and hashing helpers
"""
import hashlib
import secrets
from typing import Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF


class Crypto:
    """Centralized cryptography helper"""

    # === Random Token Generation ===

    @staticmethod
    def generate_token(length: int = 32) -> str:
        """
        Generate URL-safe random token

        Used as the default session id source: the output alphabet
        ([A-Za-z0-9_-]) is accepted by every session store.

        Args:
            length: Length of token in bytes (default: 32)

        Returns:
            URL-safe random string
        """
        return secrets.token_urlsafe(length)

    @staticmethod
    def generate_secret(length: int = 32) -> str:
        """
        Generate random hex secret

        Args:
            length: Length of secret in bytes (default: 32)

        Returns:
            Random hex string
        """
        return secrets.token_hex(length)

    # === Key Derivation (HKDF) ===

    @staticmethod
    def derive_key(
        secret: Union[str, bytes],
        salt: bytes = None,
        length: int = None,
        info: bytes = None
    ) -> bytes:
        """
        Derive a fixed-length key from an application secret using HKDF-SHA256

        Args:
            secret: Application secret (any length)
            salt: Optional salt (random per ciphertext for AES-GCM)
            length: Key length in bytes (default: DEFAULT_KEY_LENGTH)
            info: Context string binding the key to its purpose

        Returns:
            Derived key bytes
        """
        from secure_session.defaults import DEFAULT_KEY_LENGTH, DEFAULT_KDF_INFO
        if length is None:
            length = DEFAULT_KEY_LENGTH
        if info is None:
            info = DEFAULT_KDF_INFO
        if isinstance(secret, str):
            secret = secret.encode('utf-8')

        hkdf = HKDF(
            algorithm=hashes.SHA256(),
            length=length,
            salt=salt,
            info=info,
        )
        return hkdf.derive(secret)

    # === Hash Functions ===

    @staticmethod
    def sha256(data: str) -> str:
        """
        Generate SHA256 hash of string

        Args:
            data: String to hash

        Returns:
            SHA256 hex digest
        """
        return hashlib.sha256(data.encode()).hexdigest()
