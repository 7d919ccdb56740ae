"""Tests for AccountClient."""
from unittest.mock import Mock

import pytest

from accountpy import AccountClient
from accountpy.core.api import APIConfig, ErrorKind, RequestDispatcher
from accountpy.core.operations import LoginOperation, PingOperation


@pytest.fixture
def client(config, dispatcher):
    return AccountClient(config=config, dispatcher=dispatcher)


class TestConstruction:
    
    def test_overrides_do_not_mutate_config(self, config):
        client = AccountClient('https://other.test', config=config, timeout=5)
        
        assert client.config.base_url == 'https://other.test'
        assert client.config.timeout.total == 5
        assert config.base_url == 'https://accounts.test'
        assert config.timeout.total == 1.0
    
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv('ACCOUNTPY_BASE_URL', 'https://env.test')
        monkeypatch.setenv('ACCOUNTPY_TIMEOUT', '7.5')
        
        client = AccountClient()
        
        assert client.config.base_url == 'https://env.test'
        assert client.config.timeout.total == 7.5
    
    def test_repr(self, client):
        assert repr(client) == '<AccountClient https://accounts.test anonymous>'
        
        client.set_token('abc123')
        assert 'authenticated' in repr(client)


class TestAccountCalls:
    
    @pytest.mark.asyncio
    async def test_login_then_authenticate(self, client, fake_http, login_response):
        fake_http.add_response(200, login_response)
        fake_http.add_response(200, {'user': {'user_name': 'alice', 'user_id': 42}})
        token_changed = Mock()
        client.on_token_changed(token_changed)
        
        login = await client.login('alice', 'secret')
        me = await client.authenticate()
        
        assert login.succeeded
        assert client.token == 'abc123'
        assert me.user.name == 'alice'
        assert fake_http.calls[1]['headers']['Authorization'] == 'Bearer abc123'
        token_changed.assert_called_once_with()
    
    @pytest.mark.asyncio
    async def test_register_with_callback(self, client, fake_http):
        fake_http.add_response(409, {'error': 'USERNAME_EXISTS'})
        callback = Mock()
        
        result = await client.register('alice', 'secret', callback=callback)
        
        assert result.error is ErrorKind.USERNAME_EXISTS
        callback.assert_called_once_with(result)
    
    @pytest.mark.asyncio
    async def test_logout(self, client):
        client.set_token('abc123')
        
        client.logout()
        
        assert client.token == ''
        result = await client.authenticate()
        assert result.error is ErrorKind.TOKEN_INVALID
    
    @pytest.mark.asyncio
    async def test_operation_objects_share_session(self, client, fake_http, login_response):
        fake_http.add_response(200, login_response)
        
        op = client.login_operation('alice', 'secret')
        assert isinstance(op, LoginOperation)
        await op
        
        assert client.token == 'abc123'


class TestPing:
    
    @pytest.mark.asyncio
    async def test_defaults_to_base_url(self, client, fake_http):
        latency = await client.ping()
        
        assert latency >= 0.0
        assert fake_http.calls[0]['url'] == 'https://accounts.test'
    
    @pytest.mark.asyncio
    async def test_explicit_url(self, client, fake_http):
        await client.ping('https://status.test/health')
        
        assert fake_http.calls[0]['url'] == 'https://status.test/health'
    
    def test_operation(self, client):
        assert isinstance(client.ping_operation(), PingOperation)
    
    def test_no_url_raises(self, fake_http):
        client = AccountClient(config=APIConfig(), dispatcher=RequestDispatcher(session=fake_http))
        
        with pytest.raises(ValueError):
            client.ping_operation()


class TestLifecycle:
    
    @pytest.mark.asyncio
    async def test_keeps_injected_dispatcher(self, config, dispatcher):
        async with AccountClient(config=config, dispatcher=dispatcher):
            pass
        
        assert not dispatcher.closed
    
    @pytest.mark.asyncio
    async def test_closes_own_dispatcher(self, config):
        client = AccountClient(config=config)
        
        await client.close()
        
        assert client._dispatcher.closed
