"""
Crypt Provider Interface
Base class for all session payload encryption providers
"""
from abc import ABC, abstractmethod
from typing import Union


class CryptProvider(ABC):
    """
    Base crypt provider interface

    A provider instance is bound to exactly one application secret for its
    whole lifetime. Implementations must embed all per-call randomness
    (salt, nonce, IV) in the ciphertext so decrypt() is self-contained.
    """

    # Cipher name used by the crypt factory (e.g. 'aes-256-gcm')
    cipher: str = ""

    def __init__(self, secret: Union[str, bytes]):
        """
        Initialize crypt provider

        Args:
            secret: Application secret (never stored outside this instance)
        """
        from secure_session.exceptions import SessionConfigurationException
        if not secret:
            raise SessionConfigurationException(
                "An application secret is required to encrypt sessions"
            )
        if isinstance(secret, str):
            secret = secret.encode('utf-8')
        self._secret = secret

    @abstractmethod
    def encrypt(self, plaintext: bytes) -> bytes:
        """
        Encrypt a session payload

        Args:
            plaintext: Serialized session payload (may be empty)

        Returns:
            Self-contained ciphertext
        """
        pass

    @abstractmethod
    def decrypt(self, ciphertext: bytes) -> bytes:
        """
        Decrypt and authenticate a session payload

        Args:
            ciphertext: Value previously returned by encrypt()

        Returns:
            Original plaintext

        Raises:
            MalformedCiphertextException: Ciphertext is not in this provider's format
            IntegrityException: Authentication failed (tamper or wrong secret)
        """
        pass

    def __repr__(self) -> str:
        """String representation (never includes the secret)"""
        return f"<{self.__class__.__name__} cipher={self.cipher}>"
