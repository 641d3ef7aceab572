'''
**shellhttp**
---------

The HTTP edge of the shell: one retrying async client per target, reached
over a local domain socket, plain HTTP or HTTPS with custom trust material.
See `shellhttp.http` for the pieces.
'''
from shellhttp.http import (
    CAFileNotFoundError,
    HTTPClient,
    NoAttemptsLeftError,
    UnknownURLPrefixError,
    new_http_client,
    with_client_cert,
    with_retry_options,
)

__all__ = [
    'CAFileNotFoundError',
    'HTTPClient',
    'NoAttemptsLeftError',
    'UnknownURLPrefixError',
    'new_http_client',
    'with_client_cert',
    'with_retry_options',
]
