import dataclasses as dc

import pytest

from shellhttp.http import (
    ClientOptions,
    read_timeout,
    resolve_options,
    with_client_cert,
    with_retry_options,
)


def test_resolve_options_defaults_are_stable():
    options = resolve_options()

    assert options.key_path == ''
    assert options.cert_path == ''
    assert options.ca_file == ''
    assert options.ca_path == ''
    assert options.retry_wait_min == 1.0
    assert options.retry_wait_max == 15.0
    assert options.retry_max == 2


def test_resolve_options_carries_ca_paths():
    options = resolve_options('/etc/ca.pem', '/etc/certs')

    assert options.ca_file == '/etc/ca.pem'
    assert options.ca_path == '/etc/certs'


def test_resolve_options_applies_retry_override():
    options = resolve_options(opts=[with_retry_options(2.0, 20.0, 5)])

    assert (options.retry_wait_min, options.retry_wait_max, options.retry_max) == (
        2.0,
        20.0,
        5,
    )


def test_resolve_options_last_writer_wins():
    options = resolve_options(
        opts=[
            with_client_cert('/a/cert.pem', '/a/key.pem'),
            with_retry_options(2.0, 20.0, 5),
            with_client_cert('/b/cert.pem', '/b/key.pem'),
            with_retry_options(3.0, 30.0, 1),
        ]
    )

    assert options.cert_path == '/b/cert.pem'
    assert options.key_path == '/b/key.pem'
    assert options.retry_wait_min == 3.0
    assert options.retry_wait_max == 30.0
    assert options.retry_max == 1


def test_options_are_immutable():
    options = resolve_options()

    with pytest.raises(dc.FrozenInstanceError):
        options.retry_max = 10  # type: ignore[misc]


def test_option_does_not_mutate_its_input():
    base = ClientOptions()
    updated = with_client_cert('cert.pem', 'key.pem')(base)

    assert base.cert_path == ''
    assert updated.cert_path == 'cert.pem'


@pytest.mark.parametrize(
    ('cert_path', 'key_path', 'expected'),
    [
        ('cert.pem', 'key.pem', True),
        ('cert.pem', '', False),
        ('', 'key.pem', False),
        ('', '', False),
    ],
)
def test_have_cert_and_key_requires_both(cert_path, key_path, expected):
    options = resolve_options(opts=[with_client_cert(cert_path, key_path)])

    assert options.have_cert_and_key is expected


@pytest.mark.parametrize(
    ('seconds', 'expected'),
    [(0, 300.0), (10, 10.0), (300, 300.0), (1, 1.0)],
)
def test_read_timeout(seconds, expected):
    assert read_timeout(seconds) == expected
