"""
Shared fixtures: a throwaway HTTP server standing in for the gopher host.
"""
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Dict, List, Optional, Tuple

import pytest

from gopher_friend.logging_config import configure_logging

PNG_BYTES = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A]) + b"\x00\x00\x00\rIHDR"


class GopherServer:
    """Routes and request log of the local test server."""

    def __init__(self):
        self.routes: Dict[str, Tuple[int, bytes, Dict[str, str]]] = {}
        self.requests: List[str] = []
        self.base_url = ""

    def add(self, path: str, body: bytes = PNG_BYTES, status: int = 200, headers: Optional[Dict[str, str]] = None):
        self.routes[path] = (status, body, headers or {})


@pytest.fixture
def gopher_server():
    state = GopherServer()

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            state.requests.append(self.path)
            status, body, headers = state.routes.get(self.path, (404, b"Not Found", {}))
            self.send_response(status)
            self.send_header("Content-Type", "image/png")
            self.send_header("Content-Length", str(len(body)))
            for key, value in headers.items():
                self.send_header(key, value)
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format, *args):
            pass

    httpd = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    state.base_url = f"http://127.0.0.1:{httpd.server_address[1]}/gophers"
    try:
        yield state
    finally:
        httpd.shutdown()
        httpd.server_close()


@pytest.fixture
def closed_port_url():
    """A base URL on which nothing is listening."""
    sock = socket.socket()
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return f"http://127.0.0.1:{port}/gophers"


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Runs the test inside an empty temporary working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def info_logging():
    configure_logging(level="INFO", fmt="console")
