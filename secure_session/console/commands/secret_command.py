"""
Generate Secret Command
Generates the application secret used to encrypt sessions
"""
from secure_session.console.command import Command
from secure_session.support import Crypto
from secure_session.support.env_helper import EnvHelper


class GenerateSecretCommand(Command):
    """Generate session encryption secret"""

    name = "session:secret"
    description = "Generate SESSION_SECRET and write it to .env"
    signature = "session:secret [--show] [--force]"

    async def handle(self, show: bool = False, force: bool = False, **kwargs):
        """Generate secret"""
        from secure_session.defaults import DEFAULT_SECRET_LENGTH

        if EnvHelper.get('SESSION_SECRET') and not force:
            self.warning("SESSION_SECRET is already set. Existing sessions become unreadable if it changes.")
            self.line("Re-run with --force to replace it.")
            return 1

        secret = Crypto.generate_token(DEFAULT_SECRET_LENGTH)

        if show:
            self.line(f"SESSION_SECRET={secret}")
            return 0

        EnvHelper.set('SESSION_SECRET', secret)
        self.success(f"SESSION_SECRET written to {EnvHelper.path()}")
        return 0
