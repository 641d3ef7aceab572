'''
Transport selection by target URL scheme: a unix domain socket, plain
HTTP, or TLS with the trust store from `_trust`.
'''
import errno
import logging
import os
import ssl
from typing import NamedTuple

import httpx

from shellhttp.http._config import ClientOptions
from shellhttp.http._trust import build_trust_context


logger = logging.getLogger(__name__)


SOCKET_BASE_URL = 'http://unix'
UNIX_SOCKET_PROTOCOL = 'http+unix://'
HTTP_PROTOCOL = 'http://'
HTTPS_PROTOCOL = 'https://'


class UnknownURLPrefixError(ValueError):
    '''
    Raised when the target URL does not start with a supported scheme.

    Parent: ValueError
    '''


class CAFileNotFoundError(FileNotFoundError):
    '''
    Raised when the configured CA file does not exist. The missing path
    is available as `filename`.

    Parent: FileNotFoundError
    '''
    def __init__(self, filename: str) -> None:
        super().__init__(errno.ENOENT, 'cannot find cafile', filename)


class BuiltTransport(NamedTuple):
    transport: httpx.AsyncHTTPTransport
    host: str
    ssl_context: ssl.SSLContext | None = None


def validate_ca_file(filename: str) -> None:
    '''
    Check that `filename` exists when it is set.

    Raises
    ------
    CAFileNotFoundError
        If the file does not exist.
    OSError
        If the file cannot be checked for any other reason.
    '''
    if not filename:
        return

    try:
        os.stat(filename)
    except FileNotFoundError as exc:
        raise CAFileNotFoundError(filename) from exc


def build_socket_transport(url: str, relative_url_root: str) -> BuiltTransport:
    '''
    Build a transport that sends every connection to the socket path in
    `url`, whatever host a request names.

    Parameters
    ----------
    url : str
        A `http+unix://` URL; the remainder is the socket path.
    relative_url_root : str
        Optional path prefix appended to the synthetic host.

    Returns
    -------
    BuiltTransport
    '''
    socket_path = url.removeprefix(UNIX_SOCKET_PROTOCOL)
    transport = httpx.AsyncHTTPTransport(uds=socket_path)

    host = SOCKET_BASE_URL
    relative_url_root = relative_url_root.strip('/')
    if relative_url_root:
        host = f'{host}/{relative_url_root}'

    logger.debug(f'Using domain socket {socket_path} as {host}')
    return BuiltTransport(transport, host)


def build_http_transport(url: str) -> BuiltTransport:
    return BuiltTransport(httpx.AsyncHTTPTransport(), url)


def build_https_transport(options: ClientOptions, url: str) -> BuiltTransport:
    '''
    Build a TLS transport trusting the system roots and the configured
    CA material.

    Raises
    ------
    CAFileNotFoundError
        If `options.ca_file` is set but missing.
    ssl.SSLError
        If the client certificate pair cannot be loaded.
    '''
    validate_ca_file(options.ca_file)
    ctx = build_trust_context(options)
    return BuiltTransport(httpx.AsyncHTTPTransport(verify=ctx), url, ctx)


def build_transport(
    url: str,
    relative_url_root: str,
    options: ClientOptions,
) -> BuiltTransport:
    '''
    Pick the transport for `url` by its scheme prefix.

    Raises
    ------
    UnknownURLPrefixError
        If the prefix is not one of `http+unix://`, `http://` or `https://`.
    '''
    if url.startswith(UNIX_SOCKET_PROTOCOL):
        return build_socket_transport(url, relative_url_root)
    if url.startswith(HTTP_PROTOCOL):
        return build_http_transport(url)
    if url.startswith(HTTPS_PROTOCOL):
        return build_https_transport(options, url)
    raise UnknownURLPrefixError('unknown target URL prefix')
