"""
Crypt Manager
Creates the configured crypt provider
"""
from typing import Dict, Optional, Type, Union

from secure_session.crypt.crypt_provider import CryptProvider
from secure_session.crypt.providers import AESGCMCryptProvider, FernetCryptProvider
from secure_session.exceptions import SessionConfigurationException
from secure_session.support import Config

PROVIDERS: Dict[str, Type[CryptProvider]] = {
    AESGCMCryptProvider.cipher: AESGCMCryptProvider,
    FernetCryptProvider.cipher: FernetCryptProvider,
}


def create_crypt_provider(
    secret: Optional[Union[str, bytes]] = None,
    cipher: Optional[str] = None
) -> CryptProvider:
    """
    Create a crypt provider bound to an application secret

    Args:
        secret: Application secret (default: session.SECRET)
        cipher: Cipher name (default: session.CIPHER)

    Returns:
        CryptProvider instance

    Raises:
        SessionConfigurationException: No secret configured or unknown cipher

    Example:
        provider = create_crypt_provider('my-app-secret', cipher='fernet')
    """
    from secure_session.defaults import DEFAULT_CIPHER
    if secret is None:
        secret = Config.get('session.SECRET')
    if cipher is None:
        cipher = Config.get('session.CIPHER', DEFAULT_CIPHER)

    if not secret:
        raise SessionConfigurationException(
            "session.SECRET is required to encrypt sessions!\n"
            "Run: secure-session session:secret\n"
            "Or manually set SESSION_SECRET in .env file"
        )

    provider_class = PROVIDERS.get(cipher.lower())
    if provider_class is None:
        raise SessionConfigurationException(
            f"Unknown session cipher: {cipher} (available: {', '.join(sorted(PROVIDERS))})"
        )

    return provider_class(secret)
