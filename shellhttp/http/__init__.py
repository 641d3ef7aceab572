'''
**shellhttp.http**
---------

Builds the outbound client: option resolution, scheme dispatch to a domain
socket, plain or TLS transport, trust store assembly from the system roots
and extra CA material, and the retrying transport wrapped around them.
'''
from shellhttp.http._client import HTTPClient, new_http_client
from shellhttp.http._config import (
    DEFAULT_READ_TIMEOUT_SECONDS,
    DEFAULT_RETRY_MAX,
    DEFAULT_RETRY_WAIT_MAX,
    DEFAULT_RETRY_WAIT_MIN,
    ClientOption,
    ClientOptions,
    read_timeout,
    resolve_options,
    with_client_cert,
    with_retry_options,
)
from shellhttp.http._retry import NoAttemptsLeftError, RetryPolicy, RetryTransport
from shellhttp.http._transport import (
    SOCKET_BASE_URL,
    BuiltTransport,
    CAFileNotFoundError,
    UnknownURLPrefixError,
    build_transport,
)
from shellhttp.http._trust import build_trust_context

__all__ = [
    'HTTPClient',
    'new_http_client',
    'DEFAULT_READ_TIMEOUT_SECONDS',
    'DEFAULT_RETRY_MAX',
    'DEFAULT_RETRY_WAIT_MAX',
    'DEFAULT_RETRY_WAIT_MIN',
    'ClientOption',
    'ClientOptions',
    'read_timeout',
    'resolve_options',
    'with_client_cert',
    'with_retry_options',
    'NoAttemptsLeftError',
    'RetryPolicy',
    'RetryTransport',
    'SOCKET_BASE_URL',
    'BuiltTransport',
    'CAFileNotFoundError',
    'UnknownURLPrefixError',
    'build_transport',
    'build_trust_context',
]
