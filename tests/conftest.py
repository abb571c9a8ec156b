"""Shared fixtures: a local stand-in for the Reverse IP/DNS API."""

import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from reverseip.client import Client

API_KEY = "at_LoremIpsumDolorSitAmetConsect"

RESP_OK = (
    '{"current_page":"0","size":3,"result":[{"name":"iana.com","first_seen":1570492800,\n'
    '"last_visit":1657756800},{"name":"iana.net","first_seen":1571097600,"last_visit":1660780800},\n'
    '{"name":"iana.org","first_seen":1570147200,"last_visit":1657843200}]}'
)
RESP_UNPARSABLE = '<?xml version="1.0" encoding="utf-8"?><>'
RESP_ERROR = '{"code":499,"messages":"Test error message."}'

PATH_OK = "/ReverseIP/ok"
PATH_ERROR = "/ReverseIP/error"
PATH_500 = "/ReverseIP/500"
PATH_PARTIAL = "/ReverseIP/partial"
PATH_PARTIAL_LENGTH = "/ReverseIP/partial2"
PATH_UNPARSABLE = "/ReverseIP/unparsable"
PATH_SLOW = "/ReverseIP/slow"
PATH_TRICKLE = "/ReverseIP/trickle"
PATH_UNEXPECTED = "/ReverseIP/unexpected"


class _Handler(BaseHTTPRequestHandler):
    """Answers each path the way the real service would in that situation."""

    def do_GET(self):
        self.server.hits.append(self.path)
        path = self.path.split("?", 1)[0]

        status = 200
        body = RESP_OK
        length = None

        if path == PATH_OK:
            length = len(body)
        elif path == PATH_ERROR:
            status, body = 499, RESP_ERROR
        elif path == PATH_500:
            status, body = 500, RESP_UNPARSABLE
        elif path == PATH_PARTIAL:
            # No Content-Length: the short body ends when the connection closes
            body = body[:-10]
        elif path == PATH_PARTIAL_LENGTH:
            length = len(body)
            body = body[:-10]
        elif path == PATH_UNPARSABLE:
            body = RESP_UNPARSABLE
        elif path == PATH_SLOW:
            time.sleep(1.0)
            length = len(body)
        elif path == PATH_TRICKLE:
            self._trickle(body)
            return
        else:
            status, body = 500, "unexpected path"

        try:
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            if length is not None:
                self.send_header("Content-Length", str(length))
            self.end_headers()
            self.wfile.write(body.encode())
        except (BrokenPipeError, ConnectionResetError):
            pass

    def _trickle(self, body):
        """Send the full Content-Length, then the body one byte at a time."""
        try:
            self.send_response(200)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            for byte in body.encode():
                self.wfile.write(bytes([byte]))
                time.sleep(0.15)
        except (BrokenPipeError, ConnectionResetError):
            pass

    def log_message(self, format, *args):
        pass


@pytest.fixture(scope="session")
def api_server():
    """Run the stand-in API on a free local port for the whole session."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    server.hits = []
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def make_client(api_server):
    """Build a client whose base URL points at one of the stand-in paths."""
    host, port = api_server.server_address[:2]

    def _make(path, **kwargs):
        return Client(API_KEY, base_url=f"http://{host}:{port}{path}", **kwargs)

    api_server.hits.clear()
    return _make
