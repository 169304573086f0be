import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from untangle.http_client import HttpClient, HttpResponse


class _Handler(BaseHTTPRequestHandler):
    def log_message(self, format, *args):
        pass

    def _send(self, status, body=b"", extra=None):
        self.send_response(status)
        for key, value in (extra or {}).items():
            self.send_header(key, value)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _read_body(self):
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length)

    def do_GET(self):
        if self.path == "/missing":
            self._send(404, b"nope")
        elif self.path == "/redirect":
            self._send(302, b"", {"Location": "/elsewhere"})
        elif self.path == "/echo-header":
            self._send(200, (self.headers.get("X-Custom") or "").encode())
        else:
            self._send(200, b'{"id": 1}', {"X-Test": "  padded  "})

    def do_POST(self):
        self._send(201, b"POST:" + self._read_body())

    def do_PUT(self):
        self._send(200, b"PUT:" + self._read_body())

    def do_DELETE(self):
        self._send(200, b"DELETE:" + self.path.encode())


@pytest.fixture
def base_url():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}"
    finally:
        server.shutdown()
        server.server_close()


def test_get_returns_body_and_status(base_url):
    response = HttpClient(timeout=5).get(base_url + "/item")
    assert response.success
    assert response.status_code == 200
    assert response.body == '{"id": 1}'
    assert response.error_message == ""


def test_response_header_values_are_trimmed(base_url):
    response = HttpClient(timeout=5).get(base_url + "/item")
    assert response.headers["X-Test"] == "padded"


def test_request_headers_are_sent(base_url):
    response = HttpClient(timeout=5).get(
        base_url + "/echo-header", {"X-Custom": "hello"}
    )
    assert response.body == "hello"


def test_error_status_is_still_success(base_url):
    response = HttpClient(timeout=5).get(base_url + "/missing")
    assert response.success
    assert response.status_code == 404
    assert response.body == "nope"


def test_redirect_is_not_followed(base_url):
    response = HttpClient(timeout=5).get(base_url + "/redirect")
    assert response.success
    assert response.status_code == 302
    assert response.headers["Location"] == "/elsewhere"


def test_post_sends_body(base_url):
    response = HttpClient(timeout=5).post(base_url + "/posts", '{"a": 1}')
    assert response.status_code == 201
    assert response.body == 'POST:{"a": 1}'


def test_put_sends_body(base_url):
    response = HttpClient(timeout=5).put(
        base_url + "/posts/1", "data", {"Content-Type": "application/json"}
    )
    assert response.status_code == 200
    assert response.body == "PUT:data"


def test_delete_uses_delete_method(base_url):
    response = HttpClient(timeout=5).delete(base_url + "/posts/1")
    assert response.body == "DELETE:/posts/1"


def test_request_with_custom_method(base_url):
    response = HttpClient(timeout=5).request("PUT", base_url + "/x", "z")
    assert response.body == "PUT:z"


def test_connection_refused_reports_error():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    response = HttpClient(timeout=5).get(f"http://127.0.0.1:{port}/")
    assert response.success is False
    assert response.status_code == 0
    assert response.error_message


def test_unknown_scheme_reports_error():
    response = HttpClient().get("notascheme://host/path")
    assert response.success is False
    assert response.error_message


def test_default_response_is_failure():
    response = HttpResponse()
    assert (response.success, response.status_code, response.body) == (False, 0, "")