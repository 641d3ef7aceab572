'''
Trust store assembly for https targets: the platform roots, extra CA
material read best-effort from a file and a directory, and an optional
client certificate.
'''
import logging
import ssl
from pathlib import Path

from shellhttp.http._config import ClientOptions


logger = logging.getLogger(__name__)


def system_trust_context() -> ssl.SSLContext:
    '''
    A client context seeded with the platform trust roots, or with an
    empty trust store if the platform roots cannot be loaded.

    Returns
    -------
    ssl.SSLContext
    '''
    ctx = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    try:
        ctx.load_default_certs(ssl.Purpose.SERVER_AUTH)
    except (OSError, ssl.SSLError) as exc:
        logger.debug(f'System trust roots unavailable, starting empty: {exc}')
    return ctx


def add_cert_to_pool(ctx: ssl.SSLContext, filename: str | Path) -> bool:
    '''
    Add the PEM certificates in `filename` to the trust store of `ctx`.
    Files that cannot be read or parsed are skipped.

    Parameters
    ----------
    ctx : ssl.SSLContext
    filename : str | Path

    Returns
    -------
    bool
        Whether the file was loaded.
    '''
    try:
        ctx.load_verify_locations(cafile=str(filename))
    except (OSError, ssl.SSLError) as exc:
        logger.debug(f'Skipping CA file {filename}: {exc}')
        return False
    return True


def add_cert_dir_to_pool(ctx: ssl.SSLContext, dirname: str | Path) -> int:
    '''
    Add every regular file directly inside `dirname` to the trust store
    of `ctx`. Subdirectories are not descended into.

    Returns
    -------
    int
        The number of files loaded.
    '''
    try:
        entries = sorted(Path(dirname).iterdir())
    except OSError as exc:
        logger.debug(f'Skipping CA directory {dirname}: {exc}')
        return 0

    loaded = 0
    for entry in entries:
        if entry.is_dir():
            continue
        if add_cert_to_pool(ctx, entry):
            loaded += 1
    return loaded


def harden(ctx: ssl.SSLContext) -> ssl.SSLContext:
    '''
    TLS 1.2 floor with hostname and certificate verification. Cipher
    selection is left at the library default.
    '''
    ctx.minimum_version = ssl.TLSVersion.TLSv1_2
    ctx.maximum_version = ssl.TLSVersion.MAXIMUM_SUPPORTED

    ctx.check_hostname = True
    ctx.verify_mode = ssl.CERT_REQUIRED

    return ctx


def build_trust_context(options: ClientOptions) -> ssl.SSLContext:
    '''
    Assemble the TLS context for an https target: the system roots plus
    `ca_file` and the files in `ca_path`, and the client certificate when
    both its paths are set.

    Parameters
    ----------
    options : ClientOptions

    Returns
    -------
    ssl.SSLContext

    Raises
    ------
    ssl.SSLError
        If the client certificate and key do not form a valid pair.
    OSError
        If the client certificate or key cannot be read.
    '''
    ctx = system_trust_context()

    if options.ca_file:
        add_cert_to_pool(ctx, options.ca_file)

    if options.ca_path:
        add_cert_dir_to_pool(ctx, options.ca_path)

    harden(ctx)

    if options.have_cert_and_key:
        ctx.load_cert_chain(
            certfile=options.cert_path,
            keyfile=options.key_path,
        )

    return ctx
