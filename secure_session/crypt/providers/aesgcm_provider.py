"""
AES-GCM Crypt Provider
Authenticated AES-256-GCM encryption with a per-payload derived key
"""
import os
from typing import Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from secure_session.crypt.crypt_provider import CryptProvider
from secure_session.crypt.exceptions import IntegrityException, MalformedCiphertextException
from secure_session.support import Crypto


class AESGCMCryptProvider(CryptProvider):
    """
    AES-256-GCM crypt provider (default)

    Token layout:
        version (1) | salt (16) | nonce (12) | ciphertext + tag (16)

    Every call draws a fresh salt and nonce. The AES key is derived from the
    application secret with HKDF-SHA256 over the salt, and the header is
    authenticated as associated data.
    """

    cipher = 'aes-256-gcm'

    VERSION = 1
    TAG_LENGTH = 16

    def __init__(self, secret: Union[str, bytes]):
        """
        Initialize AES-GCM provider

        Args:
            secret: Application secret
        """
        from secure_session.defaults import DEFAULT_SALT_LENGTH, DEFAULT_NONCE_LENGTH
        super().__init__(secret)
        self.salt_length = DEFAULT_SALT_LENGTH
        self.nonce_length = DEFAULT_NONCE_LENGTH

    @property
    def header_length(self) -> int:
        return 1 + self.salt_length + self.nonce_length

    def _key(self, salt: bytes) -> bytes:
        return Crypto.derive_key(self._secret, salt=salt)

    def encrypt(self, plaintext: bytes) -> bytes:
        """Encrypt payload with a fresh salt and nonce"""
        salt = os.urandom(self.salt_length)
        nonce = os.urandom(self.nonce_length)
        header = bytes([self.VERSION]) + salt + nonce

        sealed = AESGCM(self._key(salt)).encrypt(nonce, bytes(plaintext), header)
        return header + sealed

    def decrypt(self, ciphertext: bytes) -> bytes:
        """Authenticate and decrypt payload"""
        ciphertext = bytes(ciphertext)

        if len(ciphertext) < self.header_length + self.TAG_LENGTH:
            raise MalformedCiphertextException("Ciphertext is too short")

        if ciphertext[0] != self.VERSION:
            raise MalformedCiphertextException(
                f"Unsupported ciphertext version: {ciphertext[0]}"
            )

        header = ciphertext[:self.header_length]
        salt = header[1:1 + self.salt_length]
        nonce = header[1 + self.salt_length:]

        try:
            return AESGCM(self._key(salt)).decrypt(nonce, ciphertext[self.header_length:], header)
        except InvalidTag:
            raise IntegrityException("Ciphertext failed authentication") from None
