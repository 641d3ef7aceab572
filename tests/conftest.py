import http.server
import socketserver
import ssl
import threading
from pathlib import Path

import pytest

from shellhttp.http import _trust


FIXTURES = Path(__file__).parent / 'fixtures'


class _RecordingHandler(http.server.BaseHTTPRequestHandler):
    server: 'UnixHTTPServer'

    def do_GET(self) -> None:
        self.server.requests.append((self.path, self.headers.get('Host')))
        status = self.server.statuses.pop(0) if self.server.statuses else 200
        body = b'ok'
        self.send_response(status)
        self.send_header('Content-Type', 'text/plain')
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args) -> None:
        pass


class UnixHTTPServer(socketserver.ThreadingUnixStreamServer):
    '''
    Answers GET requests on a unix socket, recording the path and Host
    header of each. Queued `statuses` are answered in order, then 200.
    '''
    daemon_threads = True

    def __init__(self, socket_path: str) -> None:
        super().__init__(socket_path, _RecordingHandler)
        self.socket_path = socket_path
        self.requests: list[tuple[str, str | None]] = []
        self.statuses: list[int] = []


@pytest.fixture
def unix_server(tmp_path_factory):
    socket_path = tmp_path_factory.mktemp('sock') / 's.sock'
    server = UnixHTTPServer(str(socket_path))
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()
    thread.join(timeout=5)


@pytest.fixture
def ca_pem() -> Path:
    return FIXTURES / 'ca.pem'


@pytest.fixture
def client_cert() -> Path:
    return FIXTURES / 'client.pem'


@pytest.fixture
def client_key() -> Path:
    return FIXTURES / 'client.key'


@pytest.fixture
def other_key() -> Path:
    return FIXTURES / 'other.key'


@pytest.fixture
def empty_system_roots(monkeypatch):
    '''
    Start trust stores empty so tests only see the CA material they add.
    '''
    monkeypatch.setattr(
        _trust,
        'system_trust_context',
        lambda: ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT),
    )


def _ca_subjects(ctx: ssl.SSLContext) -> list[str]:
    names = []
    for cert in ctx.get_ca_certs():
        for rdn in cert['subject']:
            for key, value in rdn:
                if key == 'commonName':
                    names.append(value)
    return names


@pytest.fixture
def ca_subjects():
    return _ca_subjects
