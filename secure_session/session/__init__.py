"""
Session Package
Encrypted session handling with pluggable storage drivers
"""
from secure_session.session.store import SessionRecord, SessionStore
from secure_session.session.posture import SecurityPosture
from secure_session.session.handler import SessionHandler
from secure_session.session.session_manager import SessionManager
from secure_session.session.store_manager import create_store
from secure_session.session.stores import (
    ArraySessionStore,
    FileSessionStore,
    DatabaseSessionStore,
    RedisSessionStore,
)

__all__ = [
    'SessionRecord',
    'SessionStore',
    'SecurityPosture',
    'SessionHandler',
    'SessionManager',
    'create_store',
    'ArraySessionStore',
    'FileSessionStore',
    'DatabaseSessionStore',
    'RedisSessionStore',
]
