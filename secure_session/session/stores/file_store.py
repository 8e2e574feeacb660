"""
File Session Store
Stores sessions as JSON files in the filesystem
"""
import base64
import binascii
import json
import os
import re
from pathlib import Path
from typing import Optional, Union
from secure_session.exceptions import InvalidSessionIdException
from secure_session.logging import getLogger, mask_session_id
from secure_session.session.store import SessionRecord, SessionStore

logger = getLogger(__name__)


class FileSessionStore(SessionStore):
    """
    File-based session storage

    One file per session: ``<prefix><session_id>.json`` holding the
    base64-encoded payload and its last-modified time. Session ids are
    validated before they are turned into file names.
    """

    def __init__(self, path: Union[str, Path], prefix: str = None):
        """
        Initialize file session store

        Args:
            path: Path to session storage directory
            prefix: File name prefix (default: DEFAULT_SESSION_FILE_PREFIX)
        """
        from secure_session.defaults import DEFAULT_SESSION_FILE_PREFIX, SESSION_ID_PATTERN
        self.path = Path(path)
        self.prefix = prefix if prefix is not None else DEFAULT_SESSION_FILE_PREFIX
        self._id_pattern = re.compile(SESSION_ID_PATTERN)
        self.path.mkdir(parents=True, exist_ok=True)

    def is_valid_id(self, session_id: str) -> bool:
        """Check that a session id is safe to use as a file name"""
        return bool(session_id) and self._id_pattern.match(session_id) is not None

    def _get_session_file(self, session_id: str) -> Path:
        """Get path to session file"""
        return self.path / f"{self.prefix}{session_id}.json"

    def _load(self, session_file: Path) -> Optional[dict]:
        """Load a session file, None if missing or corrupt"""
        try:
            with open(session_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Corrupt session file: %s", session_file.name)
            return None

        try:
            data['last_modified'] = float(data['last_modified'])
            data['payload'].encode('ascii')
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.warning("Corrupt session file: %s", session_file.name)
            return None

        return data

    async def read(self, session_id: str) -> Optional[SessionRecord]:
        """Read session from file"""
        if not self.is_valid_id(session_id):
            logger.debug("Rejected invalid session id %s", mask_session_id(session_id))
            return None

        data = self._load(self._get_session_file(session_id))
        if data is None:
            return None

        try:
            payload = base64.b64decode(data['payload'], validate=True)
        except (binascii.Error, ValueError, TypeError):
            logger.warning("Corrupt session payload for %s", mask_session_id(session_id))
            return None

        return SessionRecord(session_id, payload, data['last_modified'])

    async def write(self, session_id: str, payload: bytes, timestamp: float) -> bool:
        """Write session to file"""
        if not self.is_valid_id(session_id):
            raise InvalidSessionIdException(f"Invalid session id: {mask_session_id(session_id)}")

        session_file = self._get_session_file(session_id)
        tmp_file = session_file.with_name(f".{session_file.name}.tmp")

        session_data = {
            'payload': base64.b64encode(bytes(payload)).decode('ascii'),
            'last_modified': timestamp,
        }

        try:
            with open(tmp_file, 'w', encoding='utf-8') as f:
                json.dump(session_data, f)
            # Atomic replace so readers never see a half-written file
            os.replace(tmp_file, session_file)
        except BaseException:
            tmp_file.unlink(missing_ok=True)
            raise
        return True

    async def destroy(self, session_id: str) -> bool:
        """Delete session file"""
        if not self.is_valid_id(session_id):
            return False

        try:
            self._get_session_file(session_id).unlink()
        except FileNotFoundError:
            return False
        return True

    async def gc(self, max_lifetime: int, now: Optional[float] = None) -> int:
        """Remove expired (and corrupt) session files"""
        threshold = self._threshold(max_lifetime, now)
        deleted = 0

        for session_file in self.path.glob(f'{self.prefix}*.json'):
            data = self._load(session_file)

            if data is not None and data['last_modified'] >= threshold:
                continue

            try:
                session_file.unlink()
                deleted += 1
            except FileNotFoundError:
                # Destroyed concurrently
                pass

        return deleted
