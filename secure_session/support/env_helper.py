"""
EnvHelper - .env access for session settings
Reads SESSION_* variables and writes generated secrets back to .env
"""

import os
import threading
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv, set_key, unset_key


class EnvHelper:
    """
    Process environment backed by an optional .env file

    The .env file is loaded lazily on first read, without overriding
    variables already present in the process.

    Usage:
        secret = EnvHelper.get('SESSION_SECRET')
        lifetime = EnvHelper.get_int('SESSION_LIFETIME', 1440)
        EnvHelper.set('SESSION_SECRET', Crypto.generate_token())
    """

    _lock = threading.Lock()
    _env_path: Optional[Path] = None
    _loaded: bool = False

    @classmethod
    def initialize(cls, env_path=None):
        """Point at a .env file (default: <base>/.env)"""
        if env_path is None:
            from secure_session.support.storage import Storage
            env_path = Storage.base('.env')
        cls._env_path = Path(env_path)

    @classmethod
    def path(cls) -> Path:
        if cls._env_path is None:
            cls.initialize()
        return cls._env_path

    @classmethod
    def load(cls, env_path=None, override: bool = False) -> bool:
        """
        Load the .env file into os.environ

        Args:
            env_path: File to load (default: the initialized path)
            override: Replace variables that are already set

        Returns:
            bool: False when the file does not exist
        """
        with cls._lock:
            if env_path is not None:
                cls._env_path = Path(env_path)
            cls._loaded = True

            env_file = cls.path()
            if not env_file.exists():
                return False
            load_dotenv(env_file, override=override)
            return True

    @classmethod
    def get(cls, key: str, default: Optional[str] = None) -> Optional[str]:
        if not cls._loaded:
            cls.load()
        return os.environ.get(key, default)

    @classmethod
    def get_bool(cls, key: str, default: bool = False) -> bool:
        """'true', '1', 'yes' and 'on' (any case) are True, anything else False"""
        raw = cls.get(key)
        if raw is None:
            return default
        return raw.strip().lower() in ('true', '1', 'yes', 'on')

    @classmethod
    def get_int(cls, key: str, default: int = 0) -> int:
        """Unparsable values fall back to the default"""
        raw = cls.get(key)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            return default

    @classmethod
    def get_list(cls, key: str, default: Optional[list] = None) -> Optional[list]:
        """
        Comma separated values, as ints when every item is numeric

        Example:
            SESSION_LOTTERY=2,100  ->  [2, 100]
        """
        raw = cls.get(key)
        if raw is None:
            return default
        items = [item.strip() for item in raw.split(',') if item.strip()]
        try:
            return [int(item) for item in items]
        except ValueError:
            return items

    @classmethod
    def set(cls, key: str, value, quote_mode: str = 'auto') -> bool:
        """
        Write a key to the .env file and the running process

        The file is created if missing.

        Example:
            EnvHelper.set('SESSION_SECRET', secret)
        """
        text = value if isinstance(value, str) else str(value)

        with cls._lock:
            env_file = cls.path()
            env_file.touch(exist_ok=True)
            written, _, _ = set_key(str(env_file), key, text, quote_mode=quote_mode)
            os.environ[key] = text

        return bool(written)

    @classmethod
    def remove(cls, key: str) -> bool:
        """Drop a key from the .env file and the running process"""
        with cls._lock:
            env_file = cls.path()
            os.environ.pop(key, None)
            if not env_file.exists():
                return False
            removed, _ = unset_key(str(env_file), key)

        return bool(removed)
