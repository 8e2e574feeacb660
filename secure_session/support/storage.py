"""
Storage - Path resolution for session data
Locates the session directory, log files and the .env file of the host application
"""

import os
from pathlib import Path
from typing import Optional, Union


class Storage:
    """
    Path helper rooted at the host application's base directory

    Layout:
    <base>/
    ├── config/session.py
    ├── storage/
    │   ├── framework/sessions/   # FileSessionStore default
    │   ├── logs/                 # LoggerConfig output
    │   └── database/             # default sqlite DATABASE_URL
    └── .env
    """

    _base_path: Optional[Path] = None
    _storage_path: Optional[Path] = None

    @classmethod
    def initialize(cls, base_path: Union[str, Path] = None):
        """Set the base directory (default: the working directory)"""
        cls._base_path = Path(base_path if base_path is not None else os.getcwd()).resolve()
        cls._storage_path = cls._base_path / 'storage'

    @staticmethod
    def _join(root: Path, paths) -> Path:
        return root.joinpath(*(p.lstrip('/') for p in paths)) if paths else root

    @classmethod
    def base(cls, *paths: str) -> Path:
        """
        Path under the base directory

        Example:
            Storage.base('.env')  # /project/.env
        """
        if cls._base_path is None:
            cls.initialize()
        return cls._join(cls._base_path, paths)

    @classmethod
    def storage(cls, *paths: str) -> Path:
        if cls._storage_path is None:
            cls.initialize()
        return cls._join(cls._storage_path, paths)

    @classmethod
    def sessions(cls, *paths: str) -> Path:
        """storage/framework/sessions/"""
        return cls.storage('framework', 'sessions', *paths)

    @classmethod
    def logs(cls, *paths: str) -> Path:
        """storage/logs/"""
        return cls.storage('logs', *paths)

    @staticmethod
    def ensure_directory(path: Union[str, Path]) -> Path:
        """Create a directory (and parents) if missing"""
        directory = Path(path)
        directory.mkdir(parents=True, exist_ok=True)
        return directory
