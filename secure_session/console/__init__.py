"""
Console Package
"""
from secure_session.console.artisan import Artisan, main
from secure_session.console.command import Command

__all__ = [
    'Artisan',
    'Command',
    'main',
]
