"""Tests for ResponseDecoder."""
import json

import pytest

from accountpy.core.api.models import UserRecord
from accountpy.core.api.request import ResponseDecoder, Decoded, Malformed


def encode(document) -> bytes:
    return json.dumps(document).encode('utf-8')


class TestResponseDecoder:
    """Test suite for ResponseDecoder."""
    
    @pytest.fixture
    def decoder(self):
        return ResponseDecoder()
    
    def test_login_success(self, decoder, login_response):
        outcome = decoder.decode(encode(login_response), 200)
        
        assert isinstance(outcome, Decoded)
        payload = outcome.payload
        assert payload.is_success
        assert payload.user == UserRecord('alice', 42)
        assert payload.token == 'abc123'
        assert payload.message == 'welcome'
    
    def test_register_created(self, decoder):
        body = {'user': {'user_name': 'bob', 'user_id': 7}, 'message': 'created'}
        
        payload = decoder.decode(encode(body), 201).payload
        
        assert payload.is_success
        assert payload.user == UserRecord('bob', 7)
        assert payload.token is None
    
    def test_missing_fields_use_defaults(self, decoder):
        payload = decoder.decode(b'{}', 200).payload
        
        assert payload.user == UserRecord()
        assert payload.token is None
        assert payload.message == ''
    
    def test_empty_token_is_absent(self, decoder):
        payload = decoder.decode(encode({'token': ''}), 200).payload
        
        assert payload.token is None
    
    def test_flat_user_shape(self, decoder):
        payload = decoder.decode(encode({'user_name': 'carol', 'user_id': 3}), 200).payload
        
        assert payload.user == UserRecord('carol', 3)
    
    def test_nested_user_wins_over_flat(self, decoder):
        body = {'user': {'user_name': 'nested', 'user_id': 1}, 'user_name': 'flat', 'user_id': 2}
        
        payload = decoder.decode(encode(body), 200).payload
        
        assert payload.user == UserRecord('nested', 1)
    
    def test_error_body(self, decoder):
        body = {'error': 'USERNAME_EXISTS', 'message': 'taken', 'user': {'user_name': 'x', 'user_id': 1}}
        
        payload = decoder.decode(encode(body), 409).payload
        
        assert not payload.is_success
        assert payload.error == 'USERNAME_EXISTS'
        assert payload.message == 'taken'
        assert payload.user == UserRecord()
        assert payload.token is None
    
    def test_error_body_without_fields(self, decoder):
        payload = decoder.decode(b'{}', 500).payload
        
        assert payload.error == ''
        assert payload.message == ''
    
    @pytest.mark.parametrize("status", [202, 204, 301, 400, 503])
    def test_only_200_and_201_succeed(self, decoder, status):
        assert not decoder.decode(b'{}', status).payload.is_success
    
    @pytest.mark.parametrize("body", [b'', b'not json', b'{"user":', b'[1, 2]', b'"text"', b'\xff\xfe'])
    def test_malformed_bodies(self, decoder, body):
        outcome = decoder.decode(body, 200)
        
        assert isinstance(outcome, Malformed)
        assert outcome.status == 200
        assert outcome.reason
    
    def test_malformed_error_response(self, decoder):
        outcome = decoder.decode(b'<html>Bad Gateway</html>', 502)
        
        assert isinstance(outcome, Malformed)
        assert outcome.status == 502
