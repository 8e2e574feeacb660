"""Tests for the session maintenance console."""

import time

import pytest

from secure_session.console.artisan import Artisan
from secure_session.session import FileSessionStore
from secure_session.support import Config
from secure_session.support.env_helper import EnvHelper


@pytest.fixture
def artisan():
    return Artisan()


@pytest.fixture
def env_file(tmp_path, monkeypatch):
    """Point EnvHelper at an empty .env with no SESSION_SECRET"""
    path = tmp_path / '.env'
    monkeypatch.setattr(EnvHelper, '_env_path', path)
    monkeypatch.setattr(EnvHelper, '_loaded', True)
    monkeypatch.setenv('SESSION_SECRET', '')
    return path


class TestArtisan:
    def test_discovers_session_commands(self, artisan):
        assert 'session:gc' in artisan.commands
        assert 'session:secret' in artisan.commands

    def test_parse_args(self, artisan):
        args, kwargs = artisan._parse_args(
            ['positional', '--lifetime=60', '--driver=file', '--force', '--dry-run', '--verbose=false', '-q']
        )

        assert args == ['positional']
        assert kwargs == {
            'lifetime': 60,
            'driver': 'file',
            'force': True,
            'dry_run': True,
            'verbose': False,
            'q': True,
        }

    @pytest.mark.asyncio
    async def test_no_command_shows_help(self, artisan, capsys):
        assert await artisan.run(['secure-session']) == 0
        assert 'session:gc' in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_help_for_command(self, artisan, capsys):
        assert await artisan.run(['secure-session', 'help', 'session:gc']) == 0
        assert 'Remove sessions older than' in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_unknown_command(self, artisan):
        assert await artisan.run(['secure-session', 'session:nope']) == 1


class TestSessionGcCommand:
    @pytest.mark.asyncio
    async def test_removes_expired_files(self, artisan, tmp_path, capsys):
        Config.set('session.PATH', str(tmp_path))
        store = FileSessionStore(tmp_path)
        await store.write('stale', b'x', time.time() - 1000)
        await store.write('fresh', b'x', time.time())

        exit_code = await artisan.run(['secure-session', 'session:gc', '--lifetime=60', '--driver=file'])

        assert exit_code == 0
        assert 'Removed 1 expired session(s)' in capsys.readouterr().out
        assert await store.exists('stale') is False
        assert await store.exists('fresh') is True

    @pytest.mark.asyncio
    async def test_lifetime_and_driver_from_config(self, artisan, tmp_path):
        Config.set('session.PATH', str(tmp_path))
        Config.set('session.DRIVER', 'file')
        Config.set('session.LIFETIME', 60)
        store = FileSessionStore(tmp_path)
        await store.write('stale', b'x', time.time() - 1000)

        assert await artisan.run(['secure-session', 'session:gc']) == 0
        assert await store.exists('stale') is False

    @pytest.mark.asyncio
    async def test_invalid_lifetime(self, artisan):
        assert await artisan.run(['secure-session', 'session:gc', '--lifetime=soon', '--driver=array']) == 1

    @pytest.mark.asyncio
    async def test_unknown_driver_fails(self, artisan):
        assert await artisan.run(['secure-session', 'session:gc', '--lifetime=60', '--driver=mongo']) == 1


class TestGenerateSecretCommand:
    @pytest.mark.asyncio
    async def test_show_prints_without_writing(self, artisan, env_file, capsys):
        assert await artisan.run(['secure-session', 'session:secret', '--show']) == 0

        assert 'SESSION_SECRET=' in capsys.readouterr().out
        assert not env_file.exists()

    @pytest.mark.asyncio
    async def test_writes_env_file(self, artisan, env_file):
        assert await artisan.run(['secure-session', 'session:secret']) == 0

        assert 'SESSION_SECRET=' in env_file.read_text()
        assert EnvHelper.get('SESSION_SECRET')

    @pytest.mark.asyncio
    async def test_refuses_to_replace_existing_secret(self, artisan, env_file, monkeypatch):
        monkeypatch.setenv('SESSION_SECRET', 'existing')

        assert await artisan.run(['secure-session', 'session:secret']) == 1
        assert not env_file.exists()

    @pytest.mark.asyncio
    async def test_force_replaces_existing_secret(self, artisan, env_file, monkeypatch):
        monkeypatch.setenv('SESSION_SECRET', 'existing')

        assert await artisan.run(['secure-session', 'session:secret', '--force']) == 0
        assert EnvHelper.get('SESSION_SECRET') != 'existing'
