"""
Store Manager
Creates the configured session store driver
"""
from secure_session.exceptions import SessionConfigurationException
from secure_session.session.store import SessionStore
from secure_session.support import Config, Storage

DRIVERS = ('array', 'file', 'database', 'redis')


def create_store(driver: str = None) -> SessionStore:
    """
    Create session store based on driver

    Args:
        driver: Driver name (default: session.DRIVER)

    Returns:
        SessionStore instance

    Raises:
        SessionConfigurationException: Unknown driver
    """
    from secure_session.defaults import DEFAULT_SESSION_DRIVER, DEFAULT_REDIS_URL
    if driver is None:
        driver = Config.get('session.DRIVER', DEFAULT_SESSION_DRIVER)

    driver = driver.lower()

    if driver == 'file':
        from secure_session.session.stores import FileSessionStore
        path = Config.get('session.PATH') or Storage.sessions()
        return FileSessionStore(path)

    elif driver == 'database':
        from secure_session.database import DatabaseManager
        from secure_session.session.stores import DatabaseSessionStore
        return DatabaseSessionStore(manager=DatabaseManager())

    elif driver == 'redis':
        from secure_session.session.stores import RedisSessionStore
        return RedisSessionStore(redis_url=Config.get('session.REDIS_URL', DEFAULT_REDIS_URL))

    elif driver == 'array':
        from secure_session.session.stores import ArraySessionStore
        return ArraySessionStore()

    raise SessionConfigurationException(
        f"Unknown session driver: {driver} (available: {', '.join(DRIVERS)})"
    )
