"""
Session Manager
Request-scoped session data on top of the encrypted session handler
"""
import json
import random
from typing import Any, Dict, Iterable, List, Optional, Union
from secure_session.logging import getLogger, mask_session_id
from secure_session.session.handler import SessionHandler
from secure_session.session.posture import SecurityPosture

logger = getLogger(__name__)

# Flash bookkeeping lives in the payload under this key:
# {"old": keys removed at the next start, "new": keys aged at the next start}
FLASH_KEY = '_flash'

Keys = Union[str, Iterable[str]]


def _key_list(keys: Keys) -> List[str]:
    return [keys] if isinstance(keys, str) else list(keys)


class SessionManager:
    """
    One request cycle of a session

    ``start()`` opens the handler and decodes the payload into a dict,
    the data methods mutate that dict, and ``save()`` writes it back (JSON,
    then encrypted) only if something changed.

    Usage:
        session = SessionManager(create_handler())
        session_id = await session.start(cookie_value)

        session.put('user_id', 42)
        session.flash('status', 'Profile saved')
        session.regenerate(destroy_old=True)   # after login

        await session.save()
    """

    def __init__(self, handler: SessionHandler, lifetime: int = None, lottery: List[int] = None):
        """
        Args:
            handler: Encrypted session handler (closed)
            lifetime: gc threshold in seconds (default: session.LIFETIME)
            lottery: [chances, out_of] odds of a gc sweep per save
                (default: session.LOTTERY)
        """
        from secure_session.defaults import DEFAULT_SESSION_LIFETIME, DEFAULT_SESSION_LOTTERY
        from secure_session.support import Config

        self.handler = handler
        self.lifetime = lifetime if lifetime is not None else Config.get('session.LIFETIME', DEFAULT_SESSION_LIFETIME)
        self.lottery = self._parse_lottery(
            lottery if lottery is not None else Config.get('session.LOTTERY', DEFAULT_SESSION_LOTTERY)
        )
        self.session_id: Optional[str] = None
        self._data: Dict[str, Any] = {}
        self._started = False
        self._dirty = False
        self._stale_ids: List[str] = []

    # === Lifecycle ===

    async def start(self, candidate_id: str = None, posture: SecurityPosture = None) -> str:
        """
        Open the handler and load the payload

        Returns:
            The id to send back to the client (a fresh one if the
            candidate was rejected)
        """
        if not self._started:
            self.session_id = await self.handler.open(candidate_id, posture)
            self._data = self._decode(await self.handler.read(self.session_id))
            self._age_flash()
            self._started = True
        return self.session_id

    async def save(self) -> bool:
        """
        Write changes, close the handler, maybe run gc

        Returns:
            False if the store refused the write
        """
        written = True

        if self._dirty:
            written = await self.handler.write(self.session_id, self._encode())
            for stale_id in self._stale_ids:
                await self.handler.destroy(stale_id)
            self._stale_ids = []
            self._dirty = False

        await self.handler.close()
        self._started = False

        await self._gc_lottery()
        return written

    @staticmethod
    def _parse_lottery(lottery) -> List[int]:
        """
        Normalize [chances, out_of]

        Accepts a two-item list or tuple, or the "2,100" form read from the
        environment.

        Raises:
            SessionConfigurationException: Anything else
        """
        from secure_session.exceptions import SessionConfigurationException

        if isinstance(lottery, str):
            lottery = lottery.split(',')
        try:
            chances, out_of = (int(part) for part in lottery)
        except (TypeError, ValueError):
            raise SessionConfigurationException(
                f"session.LOTTERY must be [chances, out_of], got {lottery!r}"
            ) from None
        if chances < 0 or out_of < 1:
            raise SessionConfigurationException(
                f"session.LOTTERY odds out of range: {chances}/{out_of}"
            )
        return [chances, out_of]

    async def _gc_lottery(self) -> Optional[int]:
        chances, out_of = self.lottery
        if random.randint(1, out_of) > chances:
            return None
        return await self.handler.gc(self.lifetime)

    def _decode(self, payload: bytes) -> Dict[str, Any]:
        if not payload:
            return {}
        try:
            data = json.loads(payload.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError):
            logger.warning("Undecodable session data for %s, starting empty", mask_session_id(self.session_id))
            return {}
        return data if isinstance(data, dict) else {}

    def _encode(self) -> bytes:
        return json.dumps(self._data, ensure_ascii=False).encode('utf-8')

    # === Reading ===

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def all(self) -> Dict[str, Any]:
        """Everything except internal (underscore) keys"""
        return {key: value for key, value in self._data.items() if not key.startswith('_')}

    def has(self, key: str) -> bool:
        return key in self._data

    def missing(self, key: str) -> bool:
        return key not in self._data

    # === Writing ===

    def put(self, key: str, value: Any) -> None:
        """Set a value (must be JSON serializable)"""
        self._data[key] = value
        self._dirty = True

    def push(self, key: str, value: Any) -> None:
        """Append to a list value, creating it if needed"""
        current = self._data.get(key, [])
        items = current if isinstance(current, list) else [current]
        self.put(key, items + [value])

    def increment(self, key: str, amount: int = 1) -> int:
        value = int(self._data.get(key, 0)) + amount
        self.put(key, value)
        return value

    def decrement(self, key: str, amount: int = 1) -> int:
        return self.increment(key, -amount)

    def forget(self, keys: Keys) -> None:
        for key in _key_list(keys):
            self._data.pop(key, None)
        self._dirty = True

    def pull(self, key: str, default: Any = None) -> Any:
        """Remove a key and return its value"""
        value = self._data.get(key, default)
        self.forget(key)
        return value

    def flush(self) -> None:
        self._data = {}
        self._dirty = True

    # === Flash data ===

    def _flash_bucket(self, name: str) -> List[str]:
        flash = self._data.setdefault(FLASH_KEY, {'old': [], 'new': []})
        return flash.setdefault(name, [])

    @staticmethod
    def _flash_keys(flash: Dict[str, Any], name: str) -> List[str]:
        keys = flash.get(name)
        if not isinstance(keys, list):
            return []
        return [key for key in keys if isinstance(key, str)]

    def _age_flash(self):
        """Drop last request's flash keys, promote this request's"""
        flash = self._data.pop(FLASH_KEY, None)
        if not isinstance(flash, dict):
            flash = {}
        old, new = self._flash_keys(flash, 'old'), self._flash_keys(flash, 'new')

        for key in old:
            if key not in new:
                self._data.pop(key, None)

        self._data[FLASH_KEY] = {'old': list(new), 'new': []}
        if old or new:
            self._dirty = True

    def flash(self, key: str, value: Any) -> None:
        """Value visible until the end of the next request"""
        self.put(key, value)
        bucket = self._flash_bucket('new')
        if key not in bucket:
            bucket.append(key)

    def now(self, key: str, value: Any) -> None:
        """Value visible for the current request only"""
        self.put(key, value)
        bucket = self._flash_bucket('old')
        if key not in bucket:
            bucket.append(key)

    def reflash(self) -> None:
        """Carry every current flash value over one more request"""
        self._data.setdefault(FLASH_KEY, {})['new'] = list(self._flash_bucket('old'))
        self._dirty = True

    def keep(self, keys: Keys = None) -> None:
        """Carry selected flash values over one more request (None: all)"""
        if keys is None:
            self.reflash()
            return

        old = self._flash_bucket('old')
        new = self._flash_bucket('new')
        new.extend(key for key in _key_list(keys) if key in old and key not in new)
        self._dirty = True

    # === Ids ===

    def get_id(self) -> Optional[str]:
        return self.session_id

    def regenerate(self, destroy_old: bool = False) -> str:
        """
        Move the session to a fresh id (call after a privilege change)

        The data is written under the new id on save(). With destroy_old the
        old record is deleted at the same time, otherwise it is left to gc.
        """
        previous = self.session_id
        self.session_id = self.handler.id_generator()
        if destroy_old and previous and previous not in self._stale_ids:
            self._stale_ids.append(previous)
        self._dirty = True
        return self.session_id

    async def invalidate(self) -> str:
        """Empty the session and move it to a fresh id, destroying the old one"""
        self.flush()
        return self.regenerate(destroy_old=True)

    async def migrate(self, destroy: bool = False) -> bool:
        """regenerate() followed by save()"""
        self.regenerate(destroy)
        return await self.save()

    # === Mapping protocol ===

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.put(key, value)

    def __delitem__(self, key: str) -> None:
        self.forget(key)

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __repr__(self) -> str:
        state = 'started' if self._started else 'idle'
        return f"<SessionManager {state} id={mask_session_id(self.session_id)} keys={len(self.all())}>"
