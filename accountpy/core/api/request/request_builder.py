"""Request builder for account API requests."""
import json
from dataclasses import dataclass, field
from typing import Dict, Optional, Any

from ..config import APIConfig
from ..models import Credentials

# Endpoint paths, relative to the configured base URL
API_REGISTER = '/api/account/register'
API_LOGIN = '/api/account/login'
API_AUTH = '/api/account/auth'

JSON_CONTENT_TYPE = 'application/json;charset=UTF-8'


@dataclass(frozen=True)
class HttpRequest:
    """One HTTP request, ready for the dispatcher."""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    timeout: Optional[float] = None


class RequestBuilder:
    """Builds account API requests from a configuration."""
    
    def __init__(self, config: APIConfig):
        """Initializes request builder."""
        self.config = config
    
    def build_url(self, path: str) -> str:
        """Builds request URL."""
        return self.config.api_url(path)
    
    def build_headers(self, token: Optional[str] = None, json_body: bool = False) -> Dict[str, str]:
        """Builds request headers."""
        headers = {}
        if json_body:
            headers['Content-Type'] = JSON_CONTENT_TYPE
        if token:
            headers['Authorization'] = f"Bearer {token}"
        return headers
    
    def build_data(self, payload: Dict[str, Any]) -> bytes:
        """Builds request body."""
        return json.dumps(payload).encode('utf-8')
    
    def _post_credentials(self, path: str, credentials: Credentials) -> HttpRequest:
        return HttpRequest(
            method='POST',
            url=self.build_url(path),
            headers=self.build_headers(json_body=True),
            body=self.build_data(credentials.to_payload()),
            timeout=self.config.timeout.total
        )
    
    def register(self, credentials: Credentials) -> HttpRequest:
        return self._post_credentials(API_REGISTER, credentials)
    
    def login(self, credentials: Credentials) -> HttpRequest:
        return self._post_credentials(API_LOGIN, credentials)
    
    def authenticate(self, token: str) -> HttpRequest:
        return HttpRequest(
            method='GET',
            url=self.build_url(API_AUTH),
            headers=self.build_headers(token=token),
            timeout=self.config.timeout.total
        )
    
    def ping(self, url: str, timeout: Optional[float] = None) -> HttpRequest:
        """Plain GET used by the latency probe."""
        return HttpRequest(
            method='GET',
            url=url,
            timeout=self.config.timeout.total if timeout is None else timeout
        )
