"""
Shared pytest fixtures for secure-session tests.

This module provides common fixtures including:
- FakeClock: controllable time source for write timestamps and gc
- FakeRedis: in-memory stub of the redis.asyncio commands the Redis store uses
- store fixtures for every session store driver
- handler factories bound to an in-memory store
"""
import itertools
from typing import Dict, List, Optional, Union

import pytest
import pytest_asyncio

from secure_session.crypt import AESGCMCryptProvider
from secure_session.database import DatabaseManager
from secure_session.session import SecurityPosture, SessionHandler
from secure_session.session.stores import (
    ArraySessionStore,
    DatabaseSessionStore,
    FileSessionStore,
    RedisSessionStore,
)
from secure_session.support import Config


# =============================================================================
# Time and id sources
# =============================================================================

class FakeClock:
    """Manually advanced epoch clock."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SequentialIds:
    """Deterministic id generator that records what it produced."""

    def __init__(self, prefix: str = "generated"):
        self.prefix = prefix
        self._counter = itertools.count(1)
        self.issued: List[str] = []

    def __call__(self) -> str:
        session_id = f"{self.prefix}{next(self._counter)}"
        self.issued.append(session_id)
        return session_id


# =============================================================================
# Redis stub
# =============================================================================

class FakeRedis:
    """Minimal in-memory stub matching the redis.asyncio.Redis interface."""

    def __init__(self) -> None:
        self._strings: Dict[str, bytes] = {}
        self._zsets: Dict[str, Dict[str, float]] = {}
        self.closed = False
        self.transactions: List[List[str]] = []
        self.fail_next_execute = False

    def pipeline(self, transaction: bool = True) -> "FakeRedisPipeline":
        return FakeRedisPipeline(self)

    async def get(self, key: str) -> Optional[bytes]:
        return self._strings.get(key)

    async def set(self, key: str, value: bytes) -> bool:
        self._strings[key] = bytes(value)
        return True

    async def delete(self, *keys: str) -> int:
        count = 0
        for key in keys:
            if self._strings.pop(key, None) is not None:
                count += 1
        return count

    async def exists(self, *keys: str) -> int:
        return sum(1 for key in keys if key in self._strings)

    async def zadd(self, key: str, mapping: Dict[str, float]) -> int:
        zset = self._zsets.setdefault(key, {})
        added = sum(1 for member in mapping if member not in zset)
        zset.update({member: float(score) for member, score in mapping.items()})
        return added

    async def zscore(self, key: str, member: str) -> Optional[float]:
        return self._zsets.get(key, {}).get(member)

    async def zrem(self, key: str, *members: str) -> int:
        zset = self._zsets.get(key, {})
        return sum(1 for member in members if zset.pop(member, None) is not None)

    async def zrangebyscore(self, key: str, min: Union[str, float], max: Union[str, float]) -> List[bytes]:
        low_ok = self._bound(min, lower=True)
        high_ok = self._bound(max, lower=False)
        zset = self._zsets.get(key, {})
        return [
            member.encode('utf-8')
            for member, score in sorted(zset.items(), key=lambda item: item[1])
            if low_ok(score) and high_ok(score)
        ]

    @staticmethod
    def _bound(value, lower: bool):
        text = str(value)
        exclusive = text.startswith('(')
        if exclusive:
            text = text[1:]
        limit = float(text)
        if lower:
            return (lambda s: s > limit) if exclusive else (lambda s: s >= limit)
        return (lambda s: s < limit) if exclusive else (lambda s: s <= limit)

    async def aclose(self) -> None:
        self.closed = True


class FakeRedisPipeline:
    """Queues commands and applies them all at execute(), like MULTI/EXEC."""

    def __init__(self, redis: FakeRedis) -> None:
        self.redis = redis
        self.queued: List[tuple] = []

    def __getattr__(self, name: str):
        if not hasattr(self.redis, name):
            raise AttributeError(name)

        def queue(*args):
            self.queued.append((name, args))
            return self

        return queue

    async def execute(self) -> list:
        commands, self.queued = self.queued, []
        if self.redis.fail_next_execute:
            self.redis.fail_next_execute = False
            raise ConnectionError("connection lost before EXEC")
        self.redis.transactions.append([name for name, _ in commands])
        return [await getattr(self.redis, name)(*args) for name, args in commands]

    async def reset(self) -> None:
        self.queued = []

    async def __aenter__(self) -> "FakeRedisPipeline":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.reset()


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_config():
    """Runtime config overrides never leak between tests."""
    yield
    Config.clear_runtime_overrides()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ids():
    return SequentialIds()


@pytest.fixture
def secure_posture():
    return SecurityPosture()


@pytest.fixture
def array_store():
    return ArraySessionStore()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest_asyncio.fixture
async def database_manager():
    manager = DatabaseManager('sqlite://:memory:')
    await manager.init()
    yield manager
    await manager.close()


@pytest_asyncio.fixture(params=['array', 'file', 'database', 'redis'])
async def store(request, tmp_path):
    """Every store driver, for contract tests."""
    if request.param == 'array':
        yield ArraySessionStore()
    elif request.param == 'file':
        yield FileSessionStore(tmp_path / 'sessions')
    elif request.param == 'database':
        manager = DatabaseManager('sqlite://:memory:')
        await manager.init()
        yield DatabaseSessionStore(manager)
        await manager.close()
    else:
        yield RedisSessionStore(client=FakeRedis(), prefix='test:')


@pytest.fixture
def make_handler(array_store, clock, ids):
    """
    Build handlers sharing one store, clock and id source.

    Each call mirrors a fresh request with its own crypt provider instance.
    """
    def _make(secret: str = 'testKey', **kwargs) -> SessionHandler:
        kwargs.setdefault('id_generator', ids)
        kwargs.setdefault('clock', clock)
        return SessionHandler(AESGCMCryptProvider(secret), kwargs.pop('store', array_store), **kwargs)

    return _make
