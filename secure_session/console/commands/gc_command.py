"""
Session GC Command
Runs one garbage collection sweep on the configured session store
"""
from secure_session.console.command import Command
from secure_session.support import Config


class SessionGcCommand(Command):
    """Remove expired sessions"""

    name = "session:gc"
    description = "Remove sessions older than the session lifetime"
    signature = "session:gc [--lifetime=SECONDS] [--driver=NAME]"

    async def handle(self, lifetime: int = None, driver: str = None, **kwargs):
        """Run a gc sweep"""
        from secure_session.session import create_store
        from secure_session.defaults import DEFAULT_SESSION_LIFETIME

        if lifetime is None:
            lifetime = Config.get('session.LIFETIME', DEFAULT_SESSION_LIFETIME)

        if not isinstance(lifetime, int) or isinstance(lifetime, bool) or lifetime < 0:
            self.error(f"Invalid lifetime: {lifetime}")
            return 1

        # Sweeping needs no secret: records are deleted by age without decrypting
        store = create_store(driver)

        try:
            deleted = await store.gc(lifetime)
        finally:
            await self._close_store(store)

        self.success(f"Removed {deleted} expired session(s) older than {lifetime}s")
        return 0

    async def _close_store(self, store):
        """Release store connections"""
        if hasattr(store, 'disconnect'):
            await store.disconnect()
        manager = getattr(store, 'manager', None)
        if manager is not None:
            await manager.close()
