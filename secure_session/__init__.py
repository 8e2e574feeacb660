"""
secure-session
Encrypted, pluggable session storage with session fixation defense
"""
from secure_session.crypt import (
    CryptProvider,
    AESGCMCryptProvider,
    FernetCryptProvider,
    create_crypt_provider,
)
from secure_session.exceptions import (
    SessionException,
    InsecureConfigurationException,
    UseStrictModeDisabledException,
    UseCookiesDisabledException,
    UseOnlyCookiesDisabledException,
    UseTransSidEnabledException,
    SessionStateException,
    SessionConfigurationException,
)
from secure_session.session import (
    SessionHandler,
    SessionManager,
    SecurityPosture,
    SessionRecord,
    SessionStore,
    ArraySessionStore,
    FileSessionStore,
    DatabaseSessionStore,
    RedisSessionStore,
    create_store,
)


def create_handler(secret: str = None, driver: str = None, cipher: str = None) -> SessionHandler:
    """
    Build a SessionHandler from configuration

    Args:
        secret: Application secret (default: session.SECRET)
        driver: Store driver (default: session.DRIVER)
        cipher: Cipher name (default: session.CIPHER)

    Returns:
        SessionHandler
    """
    from secure_session.defaults import DEFAULT_WARN_INSECURE_SETTINGS
    from secure_session.support import Config

    return SessionHandler(
        create_crypt_provider(secret, cipher),
        create_store(driver),
        warn_insecure_settings=bool(
            Config.get('session.WARN_INSECURE_SETTINGS', DEFAULT_WARN_INSECURE_SETTINGS)
        ),
    )


__all__ = [
    'create_handler',
    'CryptProvider',
    'AESGCMCryptProvider',
    'FernetCryptProvider',
    'create_crypt_provider',
    'SessionException',
    'InsecureConfigurationException',
    'UseStrictModeDisabledException',
    'UseCookiesDisabledException',
    'UseOnlyCookiesDisabledException',
    'UseTransSidEnabledException',
    'SessionStateException',
    'SessionConfigurationException',
    'SessionHandler',
    'SessionManager',
    'SecurityPosture',
    'SessionRecord',
    'SessionStore',
    'ArraySessionStore',
    'FileSessionStore',
    'DatabaseSessionStore',
    'RedisSessionStore',
    'create_store',
]
