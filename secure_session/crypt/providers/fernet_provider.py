"""
Fernet Crypt Provider
Session payload encryption using cryptography's Fernet recipe
"""
import base64
import binascii
from typing import Union

from cryptography.fernet import Fernet, InvalidToken

from secure_session.crypt.crypt_provider import CryptProvider
from secure_session.crypt.exceptions import IntegrityException, MalformedCiphertextException
from secure_session.support import Crypto


class FernetCryptProvider(CryptProvider):
    """
    Fernet crypt provider (AES-128-CBC + HMAC-SHA256)

    The Fernet key is derived from the application secret with HKDF, so
    any secret string can be used. Fernet tokens carry their own IV and
    timestamp.
    """

    cipher = 'fernet'

    KDF_INFO = b'secure-session fernet key'
    TOKEN_VERSION = 0x80
    # version (1) + timestamp (8) + iv (16) + one AES block (16) + hmac (32)
    MIN_TOKEN_LENGTH = 73

    def __init__(self, secret: Union[str, bytes]):
        """
        Initialize Fernet provider

        Args:
            secret: Application secret
        """
        super().__init__(secret)
        key = Crypto.derive_key(self._secret, length=32, info=self.KDF_INFO)
        self._fernet = Fernet(base64.urlsafe_b64encode(key))

    def encrypt(self, plaintext: bytes) -> bytes:
        """Encrypt payload into a Fernet token"""
        return self._fernet.encrypt(bytes(plaintext))

    def decrypt(self, ciphertext: bytes) -> bytes:
        """Verify and decrypt a Fernet token"""
        ciphertext = bytes(ciphertext)

        try:
            raw = base64.urlsafe_b64decode(ciphertext)
        except (binascii.Error, ValueError):
            raise MalformedCiphertextException("Ciphertext is not valid base64") from None

        if len(raw) < self.MIN_TOKEN_LENGTH or raw[0] != self.TOKEN_VERSION:
            raise MalformedCiphertextException("Ciphertext is not a Fernet token")

        try:
            return self._fernet.decrypt(ciphertext)
        except InvalidToken:
            raise IntegrityException("Ciphertext failed authentication") from None
