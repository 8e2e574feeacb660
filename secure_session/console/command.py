"""
Console Command
Base class for secure-session maintenance commands
"""
from abc import ABC, abstractmethod
from typing import Optional


class Command(ABC):
    """
    A named console command

    Subclasses placed in ``secure_session/console/commands/`` are discovered
    by the Artisan runner. Options arrive as keyword arguments
    (``--lifetime=60`` -> ``lifetime=60``).
    """

    name: str = ""
    description: str = ""
    signature: Optional[str] = None

    def __init__(self):
        self.signature = self.signature or self.name

    @abstractmethod
    async def handle(self, *args, **kwargs) -> Optional[int]:
        """Run the command, returning the exit code (None means 0)"""

    def line(self, message: str = ""):
        print(message)

    def info(self, message: str):
        self.line(f"ℹ {message}")

    def success(self, message: str):
        self.line(f"✅ {message}")

    def warning(self, message: str):
        self.line(f"⚠ {message}")

    def error(self, message: str):
        self.line(f"❌ {message}")
