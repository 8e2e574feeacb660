"""
Session Handler
Encrypts session payloads around a pluggable store and defends against session fixation
"""
import time
from typing import Callable, Optional

from secure_session.crypt import CryptProvider, DecryptionException
from secure_session.exceptions import SessionStateException
from secure_session.logging import getLogger, mask_session_id
from secure_session.session.posture import SecurityPosture
from secure_session.session.store import SessionStore
from secure_session.support import Crypto

logger = getLogger(__name__)


def default_id_generator() -> str:
    """Generate a fresh session id"""
    from secure_session.defaults import DEFAULT_SESSION_ID_LENGTH
    return Crypto.generate_token(DEFAULT_SESSION_ID_LENGTH)


class SessionHandler:
    """
    Encrypted session handler

    Lifecycle per request: ``open()`` -> ``read()`` / ``write()`` -> ``close()``.
    ``destroy()`` and ``gc()`` may be called in any state.

    Usage:
        handler = SessionHandler(AESGCMCryptProvider(secret), FileSessionStore(path))

        session_id = await handler.open(cookie_value)
        data = await handler.read(session_id)
        await handler.write(session_id, data)
        await handler.close()

    The handler keeps no copy of session data between calls; the only state
    it holds is the id bound by ``open()``. It does no locking of its own:
    the host must serialize requests for the same session id.
    """

    def __init__(
        self,
        crypt_provider: CryptProvider,
        store: SessionStore,
        warn_insecure_settings: bool = True,
        id_generator: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], float]] = None
    ):
        """
        Initialize session handler

        Args:
            crypt_provider: Provider bound to the application secret
            store: Session storage driver
            warn_insecure_settings: Refuse to open sessions under an insecure
                posture. Setting this to False skips posture validation.
            id_generator: Source of fresh session ids
            clock: Time source in epoch seconds (write timestamps, gc threshold)
        """
        self.crypt_provider = crypt_provider
        self.store = store
        self.warn_insecure_settings = warn_insecure_settings
        self.id_generator = id_generator or default_id_generator
        self.clock = clock or time.time
        self._session_id: Optional[str] = None

    @property
    def session_id(self) -> Optional[str]:
        """Id bound by open(), None while closed"""
        return self._session_id

    @property
    def is_open(self) -> bool:
        return self._session_id is not None

    # === Lifecycle ===

    async def open(
        self,
        candidate_id: Optional[str] = None,
        posture: Optional[SecurityPosture] = None,
        id_generator: Optional[Callable[[], str]] = None
    ) -> str:
        """
        Open a session

        Args:
            candidate_id: Id presented by the client (untrusted), if any
            posture: Security posture of the environment (default: from config)
            id_generator: Override the id source for this call

        Returns:
            The id the session is bound to. Differs from candidate_id when
            the candidate was rejected; the host must send the new id.

        Raises:
            InsecureConfigurationException: A posture flag is violated and
                insecure settings are not suppressed
            SessionStateException: The handler is already open
        """
        if self.is_open:
            raise SessionStateException(
                f"Session {mask_session_id(self._session_id)} is already open"
            )

        if posture is None:
            posture = SecurityPosture.from_config()

        if self.warn_insecure_settings:
            for violation in posture.violations():
                logger.warning("Insecure session setting: %s", violation.flag)
            posture.validate()

        generate = id_generator or self.id_generator
        session_id = await self._resolve_id(candidate_id, posture, generate)

        self._session_id = session_id
        logger.debug("Session opened: %s", mask_session_id(session_id))
        return session_id

    async def _resolve_id(
        self,
        candidate_id: Optional[str],
        posture: SecurityPosture,
        generate: Callable[[], str]
    ) -> str:
        """Accept a candidate id only if the store already knows it"""
        if not candidate_id:
            return generate()

        if await self.store.exists(candidate_id):
            return candidate_id

        if not posture.use_strict_mode and not self.warn_insecure_settings:
            # Legacy compatibility: an uninitialized id is adopted as-is.
            # This path offers no fixation protection.
            logger.warning(
                "Accepting uninitialized session id %s (strict mode disabled)",
                mask_session_id(candidate_id)
            )
            return candidate_id

        session_id = generate()
        logger.warning(
            "Rejected uninitialized session id %s, regenerated as %s",
            mask_session_id(candidate_id),
            mask_session_id(session_id)
        )
        return session_id

    async def close(self) -> bool:
        """
        Close the session

        Returns:
            True if a session was open
        """
        if not self.is_open:
            return False

        logger.debug("Session closed: %s", mask_session_id(self._session_id))
        self._session_id = None
        return True

    # === Data ===

    async def read(self, session_id: str) -> bytes:
        """
        Read and decrypt session payload

        A missing record and an undecryptable one (tampered, corrupted, or
        encrypted under another secret) both read as an empty payload.

        Args:
            session_id: Session identifier

        Returns:
            Plaintext payload, b'' if there is none

        Raises:
            SessionStateException: The handler is not open
        """
        self._ensure_open('read')
        self._note_foreign_id('read', session_id)

        record = await self.store.read(session_id)
        if record is None:
            return b''

        try:
            return self.crypt_provider.decrypt(record.payload)
        except DecryptionException as e:
            logger.warning(
                "Could not decrypt session %s (%s), starting empty",
                mask_session_id(session_id),
                e.__class__.__name__
            )
            return b''

    async def write(self, session_id: str, data: bytes) -> bool:
        """
        Encrypt and persist session payload

        Args:
            session_id: Session identifier
            data: Plaintext payload (empty is stored, not skipped)

        Returns:
            True if the store accepted the write

        Raises:
            SessionStateException: The handler is not open
        """
        self._ensure_open('write')
        self._note_foreign_id('write', session_id)

        ciphertext = self.crypt_provider.encrypt(data)
        return await self.store.write(session_id, ciphertext, self.clock())

    # === Maintenance ===

    async def destroy(self, session_id: str) -> bool:
        """
        Destroy a session record

        Args:
            session_id: Session identifier

        Returns:
            True if a record existed and was removed
        """
        destroyed = await self.store.destroy(session_id)

        if session_id == self._session_id:
            self._session_id = None

        logger.debug(
            "Session destroy %s: %s",
            mask_session_id(session_id),
            'removed' if destroyed else 'not found'
        )
        return destroyed

    async def gc(self, max_lifetime: int) -> int:
        """
        Remove session records older than max_lifetime seconds

        Args:
            max_lifetime: Maximum age in seconds

        Returns:
            Number of records removed
        """
        deleted = await self.store.gc(max_lifetime, now=self.clock())
        logger.info("Session gc removed %d record(s)", deleted)
        return deleted

    # === Helpers ===

    def _ensure_open(self, operation: str):
        if not self.is_open:
            raise SessionStateException(f"Cannot {operation} a session that is not open")

    def _note_foreign_id(self, operation: str, session_id: str):
        if session_id != self._session_id:
            logger.debug(
                "Administrative %s of %s while %s is open",
                operation,
                mask_session_id(session_id),
                mask_session_id(self._session_id)
            )

    def __repr__(self) -> str:
        state = f"open id={mask_session_id(self._session_id)}" if self.is_open else "closed"
        return f"<SessionHandler {state} store={self.store.__class__.__name__}>"
