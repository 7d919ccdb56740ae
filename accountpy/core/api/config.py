"""
API configuration module.

Provides configuration for the account server client and the settings
provider that hands it to the session manager.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Callable, Mapping, Union
import os
import ssl

from ..exceptions import SettingsUnavailableError


@dataclass
class ProxyConfig:
    """
    Proxy configuration.

    Supports HTTP, HTTPS, and SOCKS proxies.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_aiohttp_proxy(self) -> Optional[str]:
        """Convert to aiohttp proxy format."""
        if not self.url:
            return None

        if self.username and self.password:
            # Insert credentials into URL
            if '://' in self.url:
                protocol, rest = self.url.split('://', 1)
                return f"{protocol}://{self.username}:{self.password}@{rest}"

        return self.url


@dataclass
class SSLConfig:
    """
    SSL/TLS configuration.

    Allows customization of SSL behavior for security requirements.
    """
    verify: bool = True
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self) -> Union[ssl.SSLContext, bool]:
        """Create SSL context from configuration."""
        if not self.verify:
            return False  # Disable SSL verification

        context = ssl.create_default_context()

        if self.ca_file:
            context.load_verify_locations(self.ca_file)

        if self.cert_file:
            context.load_cert_chain(
                self.cert_file,
                keyfile=self.key_file
            )

        context.check_hostname = self.check_hostname

        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    ``total`` is the per-request deadline; when it expires the request
    ends as a transport failure.
    """
    total: float = 30.0
    connect: float = 10.0
    sock_read: float = 30.0
    sock_connect: float = 10.0

    def to_aiohttp_timeout(self, total: Optional[float] = None):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total if total is None else total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


# Documented fallback when neither the request nor the config sets a timeout
DEFAULT_TIMEOUT = TimeoutConfig.total


@dataclass
class APIConfig:
    """
    Complete API configuration.

    Centralizes all configuration options for the account client.
    """
    # Server settings
    base_url: str = ''

    # User agent
    user_agent: str = 'accountpy/1.0.0'

    # Connection settings
    keepalive: bool = True

    # Sub-configurations
    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)

    # Additional headers
    extra_headers: Dict[str, str] = field(default_factory=dict)

    # Connection pool settings
    limit_per_host: int = 10
    limit: int = 100

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Create configuration with proxy."""
        return cls(
            proxy=ProxyConfig(url=proxy_url),
            **kwargs
        )

    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Create configuration with SSL verification disabled."""
        return cls(
            ssl=SSLConfig(verify=False, check_hostname=False),
            **kwargs
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'APIConfig':
        """
        Build configuration from a plain mapping (e.g. parsed JSON/YAML).

        Recognised keys: ``base_url``, ``user_agent``, ``timeout`` (seconds
        or a mapping of TimeoutConfig fields), ``verify_ssl``, ``proxy``,
        ``extra_headers``, ``limit``, ``limit_per_host``.
        Unknown keys are ignored.
        """
        config = cls()

        if 'base_url' in data:
            config.base_url = str(data['base_url'] or '')
        if 'user_agent' in data:
            config.user_agent = str(data['user_agent'])

        timeout = data.get('timeout')
        if isinstance(timeout, Mapping):
            config.timeout = TimeoutConfig(**timeout)
        elif timeout is not None:
            config.timeout = TimeoutConfig(total=float(timeout))

        if 'verify_ssl' in data and not data['verify_ssl']:
            config.ssl = SSLConfig(verify=False, check_hostname=False)
        if data.get('proxy'):
            config.proxy = ProxyConfig(url=str(data['proxy']))
        if data.get('extra_headers'):
            config.extra_headers = dict(data['extra_headers'])

        for key in ('limit', 'limit_per_host'):
            if key in data:
                setattr(config, key, int(data[key]))

        return config

    @classmethod
    def from_env(cls, prefix: str = 'ACCOUNTPY_') -> 'APIConfig':
        """Create configuration from environment variables."""
        data: Dict[str, Any] = {}

        base_url = os.environ.get(f'{prefix}BASE_URL')
        if base_url:
            data['base_url'] = base_url

        timeout = os.environ.get(f'{prefix}TIMEOUT')
        if timeout:
            data['timeout'] = float(timeout)

        verify = os.environ.get(f'{prefix}VERIFY_SSL')
        if verify is not None:
            data['verify_ssl'] = verify.strip().lower() not in ('0', 'false', 'no', 'off')

        return cls.from_dict(data)

    def api_url(self, path: str) -> str:
        """Join the base URL and an endpoint path."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
            'force_close': not self.keepalive,
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }


ConfigSource = Union[APIConfig, Callable[[], Optional[APIConfig]], None]


class SettingsProvider:
    """
    Supplies the account server configuration on demand.

    Wraps either a fixed APIConfig or a zero-argument callable that returns
    one (or None when settings are not loaded). The session manager asks for
    settings at the start of every network operation, so a callable source
    can be reloaded between calls.

    Example:
        >>> provider = SettingsProvider(APIConfig(base_url='https://api.example.com'))
        >>> provider.get().api_url('/api/account/login')
        'https://api.example.com/api/account/login'
    """

    def __init__(self, source: ConfigSource = None):
        self._source = source

    @classmethod
    def of(cls, settings: Union['SettingsProvider', ConfigSource]) -> 'SettingsProvider':
        """Wrap a config or callable, passing providers through unchanged."""
        if isinstance(settings, SettingsProvider):
            return settings
        return cls(settings)

    def get(self) -> APIConfig:
        """
        Return the current configuration.

        Raises:
            SettingsUnavailableError: If there is no usable config, no base URL,
                or loading the config failed
        """
        source = self._source
        try:
            config = source() if callable(source) else source
        except SettingsUnavailableError:
            raise
        except Exception as e:
            raise SettingsUnavailableError(f"Loading account server settings failed: {e}") from e

        if config is None:
            raise SettingsUnavailableError()
        if not isinstance(config, APIConfig):
            raise SettingsUnavailableError(
                f"Expected APIConfig from settings source, got {type(config).__name__}"
            )
        if not config.base_url:
            raise SettingsUnavailableError("Account server base URL is not configured")

        return config

    def is_available(self) -> bool:
        """Check whether get() would succeed."""
        try:
            self.get()
        except SettingsUnavailableError:
            return False
        return True
