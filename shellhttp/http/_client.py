'''
Assembles the retrying client for a target: resolves options, builds the
transport for the URL scheme and wraps it with the retry policy and
timeout.
'''
import dataclasses as dc
import logging
from collections.abc import Iterable
from typing import Self

import httpx

from shellhttp.http._config import ClientOption, read_timeout, resolve_options
from shellhttp.http._retry import RetryPolicy, RetryTransport
from shellhttp.http._transport import build_transport


logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class HTTPClient:
    '''
    A retrying client bound to one target. `host` is the base address
    requests must be made against; relative URLs passed to `client`
    already resolve against it.
    '''
    client: httpx.AsyncClient
    host: str
    transport: RetryTransport = dc.field(repr=False, kw_only=True)

    @property
    def retry_policy(self) -> RetryPolicy:
        return self.transport.policy

    @property
    def timeout(self) -> httpx.Timeout:
        return self.client.timeout

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()


def new_http_client(
    url: str,
    relative_url_root: str = '',
    ca_file: str = '',
    ca_path: str = '',
    read_timeout_seconds: int = 0,
    opts: Iterable[ClientOption] = (),
) -> HTTPClient:
    '''
    Build a retrying client for `url`. The scheme prefix picks the
    transport: `http+unix://` (domain socket), `http://` or `https://`.

    Parameters
    ----------
    url : str
    relative_url_root : str, optional
        Path prefix used for domain socket targets.
    ca_file : str, optional
        PEM bundle trusted in addition to the system roots.
    ca_path : str, optional
        Directory of PEM files trusted in addition to the system roots.
    read_timeout_seconds : int, optional
        Timeout applied to each phase of an attempt (connect, read, write
        and pool acquisition) separately, not to the request as a whole;
        0 selects the default of 300 seconds.
    opts : Iterable[ClientOption], optional
        Named overrides such as `with_client_cert` and `with_retry_options`.

    Returns
    -------
    HTTPClient

    Raises
    ------
    UnknownURLPrefixError
        If the scheme prefix is not supported.
    CAFileNotFoundError
        If `ca_file` is set for an https target but does not exist.
    ssl.SSLError
        If the client certificate pair cannot be loaded.
    '''
    options = resolve_options(ca_file, ca_path, opts)
    built = build_transport(url, relative_url_root, options)

    policy = RetryPolicy(
        wait_min=options.retry_wait_min,
        wait_max=options.retry_wait_max,
        retry_max=options.retry_max,
    )
    timeout = read_timeout(read_timeout_seconds)

    transport = RetryTransport(built.transport, policy, logger=None)
    client = httpx.AsyncClient(
        base_url=built.host,
        transport=transport,
        timeout=httpx.Timeout(timeout),
    )
    logger.debug(
        f'Built client for {built.host} '
        f'(timeout={timeout}s, retries={policy.retry_max})'
    )
    return HTTPClient(client=client, host=built.host, transport=transport)
