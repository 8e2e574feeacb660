"""Tests for the session data API built on the encrypted handler."""

import pytest

from secure_session.exceptions import SessionConfigurationException
from secure_session.session import SessionManager
from secure_session.support import EnvHelper


@pytest.fixture
def make_manager(make_handler):
    def _make(**kwargs) -> SessionManager:
        kwargs.setdefault('lifetime', 60)
        kwargs.setdefault('lottery', [0, 1])
        return SessionManager(make_handler(), **kwargs)

    return _make


class TestSessionData:
    @pytest.mark.asyncio
    async def test_data_survives_requests(self, make_manager, secure_posture):
        session = make_manager()
        session_id = await session.start(posture=secure_posture)
        session.put('user_id', 42)
        session['theme'] = 'dark'
        assert await session.save() is True

        session = make_manager()
        assert await session.start(session_id, secure_posture) == session_id
        assert session.get('user_id') == 42
        assert session['theme'] == 'dark'
        assert session.all() == {'user_id': 42, 'theme': 'dark'}

    @pytest.mark.asyncio
    async def test_data_helpers(self, make_manager, secure_posture):
        session = make_manager()
        await session.start(posture=secure_posture)

        session.push('cart', 'apple')
        session.push('cart', 'pear')
        assert session.get('cart') == ['apple', 'pear']

        assert session.increment('visits') == 1
        assert session.increment('visits', 5) == 6
        assert session.decrement('visits') == 5

        assert session.pull('cart') == ['apple', 'pear']
        assert session.missing('cart')

        del session['visits']
        assert 'visits' not in session

        session.put('a', 1)
        session.flush()
        assert session.all() == {}

    @pytest.mark.asyncio
    async def test_undecodable_payload_starts_empty(self, make_handler, secure_posture):
        handler = make_handler()
        session_id = await handler.open(posture=secure_posture)
        await handler.write(session_id, b'\xff\xfe not json')
        await handler.close()

        session = SessionManager(make_handler(), lifetime=60, lottery=[0, 1])
        await session.start(session_id, secure_posture)
        assert session.all() == {}

    @pytest.mark.asyncio
    async def test_wrong_secret_starts_empty(self, make_handler, secure_posture):
        session = SessionManager(make_handler('K1'), lifetime=60, lottery=[0, 1])
        session_id = await session.start(posture=secure_posture)
        session.put('password', 'x')
        await session.save()

        session = SessionManager(make_handler('K2'), lifetime=60, lottery=[0, 1])
        assert await session.start(session_id, secure_posture) == session_id
        assert session.all() == {}

    @pytest.mark.asyncio
    async def test_unchanged_session_is_not_written(self, make_manager, secure_posture, array_store):
        session = make_manager()
        session_id = await session.start(posture=secure_posture)
        await session.save()

        assert await array_store.exists(session_id) is False


class TestFlashData:
    @pytest.mark.asyncio
    async def test_flash_lives_for_one_request(self, make_manager, secure_posture):
        session = make_manager()
        session_id = await session.start(posture=secure_posture)
        session.flash('status', 'saved')
        await session.save()

        session = make_manager()
        await session.start(session_id, secure_posture)
        assert session.get('status') == 'saved'
        await session.save()

        session = make_manager()
        await session.start(session_id, secure_posture)
        assert session.get('status') is None

    @pytest.mark.asyncio
    async def test_reflash_keeps_data(self, make_manager, secure_posture):
        session = make_manager()
        session_id = await session.start(posture=secure_posture)
        session.flash('status', 'saved')
        await session.save()

        session = make_manager()
        await session.start(session_id, secure_posture)
        session.reflash()
        await session.save()

        session = make_manager()
        await session.start(session_id, secure_posture)
        assert session.get('status') == 'saved'

    @pytest.mark.asyncio
    async def test_now_is_current_request_only(self, make_manager, secure_posture):
        session = make_manager()
        session_id = await session.start(posture=secure_posture)
        session.now('notice', 'hello')
        assert session.get('notice') == 'hello'
        await session.save()

        session = make_manager()
        await session.start(session_id, secure_posture)
        assert session.get('notice') is None


    @pytest.mark.asyncio
    async def test_malformed_flash_bookkeeping_is_reset(self, make_handler, secure_posture):
        handler = make_handler()
        session_id = await handler.open(posture=secure_posture)
        await handler.write(session_id, b'{"_flash": "garbage", "a": 1}')
        await handler.close()

        session = SessionManager(make_handler(), lifetime=60, lottery=[0, 1])
        await session.start(session_id, secure_posture)

        assert session.get('a') == 1
        session.flash('notice', 'saved')
        assert session.get('notice') == 'saved'

    @pytest.mark.asyncio
    async def test_malformed_flash_lists_are_ignored(self, make_handler, secure_posture):
        handler = make_handler()
        session_id = await handler.open(posture=secure_posture)
        await handler.write(session_id, b'{"_flash": {"old": 5, "new": "a"}, "a": 1}')
        await handler.close()

        session = SessionManager(make_handler(), lifetime=60, lottery=[0, 1])
        await session.start(session_id, secure_posture)

        assert session.get('a') == 1


class TestSessionIds:
    @pytest.mark.asyncio
    async def test_regenerate_moves_data(self, make_manager, secure_posture, array_store):
        session = make_manager()
        old_id = await session.start(posture=secure_posture)
        session.put('user_id', 7)
        await session.save()

        session = make_manager()
        await session.start(old_id, secure_posture)
        new_id = session.regenerate(destroy_old=True)
        await session.save()

        assert new_id != old_id
        assert session.get_id() == new_id
        assert await array_store.exists(old_id) is False

        session = make_manager()
        assert await session.start(new_id, secure_posture) == new_id
        assert session.get('user_id') == 7

    @pytest.mark.asyncio
    async def test_repeated_regenerate_destroys_persisted_id(self, make_manager, secure_posture, array_store):
        session = make_manager()
        old_id = await session.start(posture=secure_posture)
        session.put('user_id', 7)
        await session.save()

        session = make_manager()
        await session.start(old_id, secure_posture)
        session.regenerate(destroy_old=True)
        final_id = session.regenerate(destroy_old=True)
        await session.save()

        assert await array_store.exists(old_id) is False
        assert await array_store.exists(final_id) is True

    @pytest.mark.asyncio
    async def test_regenerate_keeps_old_record(self, make_manager, secure_posture, array_store):
        session = make_manager()
        old_id = await session.start(posture=secure_posture)
        session.put('user_id', 7)
        session.regenerate()
        await session.save()

        assert await array_store.exists(session.get_id())
        # The old id was never written, so nothing to keep
        assert await array_store.exists(old_id) is False

    @pytest.mark.asyncio
    async def test_invalidate(self, make_manager, secure_posture, array_store):
        session = make_manager()
        old_id = await session.start(posture=secure_posture)
        session.put('user_id', 7)
        await session.save()

        session = make_manager()
        await session.start(old_id, secure_posture)
        new_id = await session.invalidate()
        await session.save()

        assert new_id != old_id
        assert await array_store.exists(old_id) is False
        assert session.all() == {}

    @pytest.mark.asyncio
    async def test_start_rejects_unknown_id(self, make_manager, secure_posture):
        session = make_manager()
        assert await session.start('forged', secure_posture) != 'forged'

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self, make_manager, secure_posture):
        session = make_manager()
        session_id = await session.start(posture=secure_posture)
        assert await session.start(posture=secure_posture) == session_id


class TestGcLottery:
    @pytest.mark.asyncio
    async def test_winning_lottery_runs_gc(self, make_manager, secure_posture, array_store, clock):
        await array_store.write('stale', b'x', clock() - 120)

        session = make_manager(lottery=[1, 1])
        await session.start(posture=secure_posture)
        await session.save()

        assert await array_store.exists('stale') is False

    @pytest.mark.asyncio
    async def test_losing_lottery_skips_gc(self, make_manager, secure_posture, array_store, clock):
        await array_store.write('stale', b'x', clock() - 120)

        session = make_manager(lottery=[0, 1])
        await session.start(posture=secure_posture)
        await session.save()

        assert await array_store.exists('stale') is True

    @pytest.mark.asyncio
    async def test_lottery_from_environment(self, make_handler, secure_posture, array_store, clock, monkeypatch):
        monkeypatch.setattr(EnvHelper, '_loaded', True)
        monkeypatch.setenv('SESSION_LOTTERY', '1,1')
        await array_store.write('stale', b'x', clock() - 120)

        session = SessionManager(make_handler(), lifetime=60)
        assert session.lottery == [1, 1]
        await session.start(posture=secure_posture)
        await session.save()

        assert await array_store.exists('stale') is False

    @pytest.mark.parametrize("lottery", [[1], [1, 0], [-1, 100], ['a', 'b'], '1;1', 5])
    def test_invalid_lottery(self, make_handler, lottery):
        with pytest.raises(SessionConfigurationException):
            SessionManager(make_handler(), lifetime=60, lottery=lottery)

    def test_lottery_accepts_tuple_and_string(self, make_handler):
        assert SessionManager(make_handler(), lottery=(2, 100)).lottery == [2, 100]
        assert SessionManager(make_handler(), lottery='5,50').lottery == [5, 50]
