"""Local HTTP server for a reduced copy of the registration form.

The form page keeps its query string, so ``?ignore=N`` reaches the page's
script, which swallows the first N submit activations.
"""

from __future__ import annotations

import functools
import http.server
import socketserver
import threading
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

FORM_ROUTE = "/automation-practice-form"
FORM_FILE = "form.html"

ROUTES = {
    "/": FORM_FILE,
    FORM_ROUTE: FORM_FILE,
    FORM_ROUTE + "/": FORM_FILE,
}


class FormRequestHandler(http.server.SimpleHTTPRequestHandler):
    """Static file handler that maps the form's routes onto its file."""

    def do_GET(self) -> None:
        route = urlparse(self.path).path
        if route in ROUTES:
            self.path = "/" + ROUTES[route]
        super().do_GET()

    def log_message(self, format: str, *args: Any) -> None:
        pass


class MockServer:
    """Serves a mock pages directory from a background thread.

    Port 0 binds an ephemeral port; after ``start()`` the ``port`` attribute
    and the URL properties report the bound one. Usable as a context manager.

    Example:
        >>> with MockServer(get_mock_pages_dir()) as server:
        ...     print(server.form_url)
    """

    def __init__(self, pages_dir: Path, port: int = 0):
        self.pages_dir = pages_dir
        self.port = port
        self._server: socketserver.ThreadingTCPServer | None = None
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        """Bind the socket and serve requests in a daemon thread."""
        handler = functools.partial(FormRequestHandler, directory=str(self.pages_dir))
        self._server = socketserver.ThreadingTCPServer(("localhost", self.port), handler)
        self._server.daemon_threads = True
        self.port = self._server.server_address[1]
        self._thread = threading.Thread(
            target=self._server.serve_forever, name="regsuite-mock", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Shut the server down; a no-op when it is not running."""
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        if self._thread is not None:
            self._thread.join(timeout=5)
        self._server = None
        self._thread = None

    def __enter__(self) -> MockServer:
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()

    @property
    def base_url(self) -> str:
        return f"http://localhost:{self.port}"

    @property
    def form_url(self) -> str:
        """URL of the mock registration form."""
        return self.base_url + FORM_ROUTE
