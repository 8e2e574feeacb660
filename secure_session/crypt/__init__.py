"""
Crypt Package
Session payload encryption providers
"""
from secure_session.crypt.crypt_provider import CryptProvider
from secure_session.crypt.crypt_manager import create_crypt_provider
from secure_session.crypt.exceptions import (
    DecryptionException,
    MalformedCiphertextException,
    IntegrityException,
)
from secure_session.crypt.providers import AESGCMCryptProvider, FernetCryptProvider

__all__ = [
    'CryptProvider',
    'create_crypt_provider',
    'DecryptionException',
    'MalformedCiphertextException',
    'IntegrityException',
    'AESGCMCryptProvider',
    'FernetCryptProvider',
]
