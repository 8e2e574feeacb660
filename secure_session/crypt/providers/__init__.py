"""
Crypt Providers
"""
from secure_session.crypt.providers.aesgcm_provider import AESGCMCryptProvider
from secure_session.crypt.providers.fernet_provider import FernetCryptProvider

__all__ = [
    'AESGCMCryptProvider',
    'FernetCryptProvider',
]
