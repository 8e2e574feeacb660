"""
Database Manager
Handles Tortoise ORM initialization and connection management for the database session store
"""
from typing import Any, Dict, List
from tortoise import Tortoise
from secure_session.logging import getLogger
from secure_session.support import Config

logger = getLogger(__name__)

SESSION_MODELS_MODULE = 'secure_session.session.stores.database_store'


class DatabaseManager:
    """Manages database connections and Tortoise ORM"""

    def __init__(self, database_url: str = None, models: List[str] = None):
        """
        Initialize database manager

        Args:
            database_url: Tortoise connection URL (default: session.DATABASE_URL)
            models: Model modules to register (session models are always included)
        """
        from secure_session.defaults import DEFAULT_DATABASE_URL
        if database_url is None:
            database_url = Config.get('session.DATABASE_URL', DEFAULT_DATABASE_URL)
        self.database_url = database_url
        self.models = list(models or [])
        if SESSION_MODELS_MODULE not in self.models:
            self.models.append(SESSION_MODELS_MODULE)
        self._initialized = False
        self.app_label = 'sessions'

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite"""
        return self.database_url.startswith("sqlite")

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def get_tortoise_config(self) -> Dict[str, Any]:
        """
        Get Tortoise configuration

        Returns:
            Tortoise configuration dict
        """
        return {
            "connections": {"default": self.database_url},
            "apps": {
                self.app_label: {
                    "models": self.models,
                    "default_connection": "default",
                }
            },
        }

    async def init(self, generate_schemas: bool = True):
        """
        Initialize Tortoise ORM

        Args:
            generate_schemas: Create the sessions table if it doesn't exist
        """
        if self._initialized:
            return

        if self.is_sqlite:
            self._ensure_sqlite_directory()

        await Tortoise.init(self.get_tortoise_config())

        if generate_schemas:
            await self.generate_schemas(safe=True)

        self._initialized = True
        logger.debug("Session database initialized (%s)", self.database_url.split('://')[0])

    def _ensure_sqlite_directory(self):
        """Create the parent directory of a file-based SQLite database"""
        from pathlib import Path
        from secure_session.support import Storage

        path = self.database_url.split('://', 1)[1]
        if path and path != ':memory:':
            Storage.ensure_directory(Path(path).parent)

    async def generate_schemas(self, safe: bool = True):
        """
        Generate database schemas

        Args:
            safe: If True, don't drop existing tables
        """
        await Tortoise.generate_schemas(safe=safe)

    async def close(self):
        """Close database connections"""
        if self._initialized:
            await Tortoise.close_connections()
            self._initialized = False
