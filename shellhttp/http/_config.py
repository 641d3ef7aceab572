'''
Client options for the shellhttp client, the defaults they are seeded with,
and the named option functions used to override them.
'''
import dataclasses as dc
from collections.abc import Callable, Iterable
from typing import Final


DEFAULT_READ_TIMEOUT_SECONDS: Final = 300
DEFAULT_RETRY_WAIT_MIN: Final = 1.0
DEFAULT_RETRY_WAIT_MAX: Final = 15.0
DEFAULT_RETRY_MAX: Final = 2


@dc.dataclass(frozen=True, slots=True)
class ClientOptions:
    '''
    Resolved options for building a client. An empty string means the
    path is unset.
    '''
    key_path: str = ''
    cert_path: str = ''
    ca_file: str = ''
    ca_path: str = ''
    retry_wait_min: float = DEFAULT_RETRY_WAIT_MIN
    retry_wait_max: float = DEFAULT_RETRY_WAIT_MAX
    retry_max: int = DEFAULT_RETRY_MAX

    @property
    def have_cert_and_key(self) -> bool:
        return bool(self.key_path) and bool(self.cert_path)


ClientOption = Callable[[ClientOptions], ClientOptions]


def with_client_cert(cert_path: str, key_path: str) -> ClientOption:
    '''
    Present a client certificate when connecting over TLS. Both paths
    must be set for the pair to be used.

    Parameters
    ----------
    cert_path : str
    key_path : str

    Returns
    -------
    ClientOption
    '''
    def apply(options: ClientOptions) -> ClientOptions:
        return dc.replace(options, cert_path=cert_path, key_path=key_path)

    return apply


def with_retry_options(
    wait_min: float,
    wait_max: float,
    max_attempts: int,
) -> ClientOption:
    '''
    Override the retry backoff bounds (in seconds) and the number of
    retries made after the first attempt.

    Parameters
    ----------
    wait_min : float
    wait_max : float
    max_attempts : int

    Returns
    -------
    ClientOption
    '''
    def apply(options: ClientOptions) -> ClientOptions:
        return dc.replace(
            options,
            retry_wait_min=wait_min,
            retry_wait_max=wait_max,
            retry_max=max_attempts,
        )

    return apply


def resolve_options(
    ca_file: str = '',
    ca_path: str = '',
    opts: Iterable[ClientOption] = (),
) -> ClientOptions:
    '''
    Seed the options with the defaults and the CA paths, then apply
    each option in order. Later options win.

    Parameters
    ----------
    ca_file : str, optional
    ca_path : str, optional
    opts : Iterable[ClientOption], optional

    Returns
    -------
    ClientOptions
    '''
    options = ClientOptions(ca_file=ca_file, ca_path=ca_path)
    for opt in opts:
        options = opt(options)
    return options


def read_timeout(timeout_seconds: int) -> float:
    if timeout_seconds == 0:
        timeout_seconds = DEFAULT_READ_TIMEOUT_SECONDS
    return float(timeout_seconds)
