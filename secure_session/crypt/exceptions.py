"""
Crypt Provider Exceptions

Decryption failures are reported with two distinct types. The session
handler never lets either escape: both read as an empty session.
"""


class DecryptionException(Exception):
    """Base class for all decryption failures"""
    pass


class MalformedCiphertextException(DecryptionException):
    """Ciphertext is truncated, not in the provider's format, or of an unknown version"""
    pass


class IntegrityException(DecryptionException):
    """Ciphertext failed authentication (tampered, or encrypted under another secret)"""
    pass
