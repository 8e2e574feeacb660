"""
Support Classes
"""

from secure_session.support.storage import Storage
from secure_session.support.env_helper import EnvHelper
from secure_session.support.config import Config
from secure_session.support.crypto import Crypto

__all__ = [
    'Storage',
    'EnvHelper',
    'Config',
    'Crypto',
]
