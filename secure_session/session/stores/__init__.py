"""
Session Stores
"""
from secure_session.session.stores.array_store import ArraySessionStore
from secure_session.session.stores.file_store import FileSessionStore
from secure_session.session.stores.database_store import DatabaseSessionStore, SessionRecordModel
from secure_session.session.stores.redis_store import RedisSessionStore

__all__ = [
    'ArraySessionStore',
    'FileSessionStore',
    'DatabaseSessionStore',
    'SessionRecordModel',
    'RedisSessionStore',
]
