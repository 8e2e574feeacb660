"""
Config - session settings by dot notation
Resolves session.* keys from runtime overrides, the host's config/ modules and the environment
"""

import importlib
import threading
from typing import Any, Dict


_MISSING = object()


class Config:
    """
    Dot-notation settings lookup (keys are case-insensitive)

    Usage:
        driver = Config.get('session.DRIVER', 'file')
        Config.set('session.WARN_INSECURE_SETTINGS', False)

    Lookup order:
        1. Runtime overrides (Config.set)
        2. config/<file>.py module of the host application
        3. Environment variable <FILE>_<KEY> (e.g. SESSION_DRIVER), via EnvHelper
        4. The default passed by the caller

    Config files should be in the host application's config/ directory:
        config/
        └── session.py
    """

    _lock = threading.Lock()
    _loaded: Dict[str, Any] = {}
    _runtime_overrides: Dict[str, Any] = {}

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """
        Resolve a <file>.<KEY> setting

        Args:
            key: e.g. 'session.LIFETIME' (any case)
            default: Returned when nothing is set; its type also decides
                how an environment string is converted

        Example:
            lifetime = Config.get('session.LIFETIME', 1440)
        """
        normalized = key.lower()
        if normalized in cls._runtime_overrides:
            return cls._runtime_overrides[normalized]

        file_name, *path = parts = normalized.split('.')
        if file_name not in cls._loaded:
            cls._load_config_file(file_name)

        value = cls._resolve(cls._loaded.get(file_name), path)
        if value is not _MISSING:
            return value

        return cls._from_env(parts, default)

    @classmethod
    def _resolve(cls, value: Any, path: list) -> Any:
        """Navigate a loaded config module/dict (case-insensitive)"""
        if value is None:
            return _MISSING

        for part in path:
            if isinstance(value, dict):
                keys = {str(k).lower(): k for k in value.keys()}
                if part not in keys:
                    return _MISSING
                value = value[keys[part]]
            elif hasattr(value, '__dict__'):
                attrs = {name.lower(): name for name in dir(value)}
                if part not in attrs:
                    return _MISSING
                value = getattr(value, attrs[part])
            else:
                return _MISSING

        return value

    @classmethod
    def _from_env(cls, parts: list, default: Any) -> Any:
        """Fall back to an environment variable named FILE_KEY"""
        from secure_session.support.env_helper import EnvHelper

        env_key = '_'.join(parts).upper()
        raw = EnvHelper.get(env_key)
        if raw is None:
            return default

        # Coerce to the type of the default where possible
        if isinstance(default, bool):
            return EnvHelper.get_bool(env_key, default)
        if isinstance(default, int):
            return EnvHelper.get_int(env_key, default)
        if isinstance(default, (list, tuple)):
            return EnvHelper.get_list(env_key, list(default))
        return raw

    @classmethod
    def _load_config_file(cls, file_name: str):
        """Import config.<file_name> once; a missing module is cached as None"""
        with cls._lock:
            if file_name in cls._loaded:
                return

            try:
                cls._loaded[file_name] = importlib.import_module(f'config.{file_name}')
            except ImportError:
                cls._loaded[file_name] = None

    @classmethod
    def set(cls, key: str, value: Any):
        """
        Override a key for the rest of the process (never written to disk)

        Example:
            Config.set('session.WARN_INSECURE_SETTINGS', False)
        """
        cls._runtime_overrides[key.lower()] = value

    @classmethod
    def has(cls, key: str) -> bool:
        """True when the key resolves to anything other than None"""
        return cls.get(key) is not None

    @classmethod
    def clear_runtime_overrides(cls):
        """Drop every Config.set() value (config modules stay loaded)"""
        cls._runtime_overrides.clear()
