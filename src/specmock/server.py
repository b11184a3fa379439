"""Threaded HTTP front-end that serves resolved examples.

The server is thin: it turns each HTTP request into a
:class:`~specmock.models.MockRequest`, hands it to
:func:`~specmock.engine.resolve_example`, and writes the value back.

URL convention::

    GET /pets?page=1        -> status 200 (the configured default), path /pets
    GET /404/pets/7         -> status 404, path /pets/7

A leading three-digit segment between 100 and 599 selects the status code of
the response to serve; without it the configured default status is used.

Every :class:`~specmock.exceptions.ResolutionError` becomes a bare 404. Which
stage failed is written to the log and never to the client.

Handler threads share one frozen :class:`~specmock.models.Document`, so no
locking is needed.
"""

from __future__ import annotations

import json
import logging
import re
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Optional
from urllib.parse import unquote, urlsplit

from specmock import __version__
from specmock.engine import resolve_example
from specmock.exceptions import ResolutionError, ServerStartError
from specmock.models import Document, HTTPMethod, MockRequest, ServerConfig, json_default

logger = logging.getLogger(__name__)

_STATUS_PREFIX_RE = re.compile(r"^[1-5][0-9]{2}$")

# Statuses that must not carry a body
_BODYLESS_STATUSES = frozenset({204, 304})

_NOT_FOUND_BODY = json.dumps({"error": "Not Found"}).encode("utf-8")
_BAD_REQUEST_BODY = json.dumps({"error": "Bad Request"}).encode("utf-8")


def split_status_prefix(path: str, default_status: int = 200) -> tuple[int, str]:
    """Split an optional leading status segment off *path*.

    Example::

        split_status_prefix("/404/pets")  # (404, "/pets")
        split_status_prefix("/pets")      # (200, "/pets")
        split_status_prefix("/404")       # (404, "/")
    """
    head, _, tail = path.lstrip("/").partition("/")
    if _STATUS_PREFIX_RE.match(head):
        return int(head), "/" + tail
    return default_status, path or "/"


def request_media_type(header: Optional[str], default: str) -> str:
    """Return the media type named by a ``Content-Type`` header, or *default*.

    Parameters such as ``; charset=utf-8`` are dropped.
    """
    if not header:
        return default
    media_type = header.split(";", 1)[0].strip().lower()
    return media_type or default


def encode_body(value: Any, media_type: str) -> bytes:
    """Serialise an example value for the wire.

    JSON media types (``application/json``, ``application/problem+json``,
    ...) always get JSON. Other media types get string values verbatim and
    anything else as JSON. YAML timestamps and dates are written in ISO 8601.
    """
    if "json" not in media_type and isinstance(value, str):
        return value.encode("utf-8")
    return json.dumps(value, ensure_ascii=False, default=json_default).encode("utf-8")


def _make_handler(document: Document, config: ServerConfig) -> type[BaseHTTPRequestHandler]:
    """Build a request handler class bound to *document* and *config*."""

    class MockRequestHandler(BaseHTTPRequestHandler):
        server_version = f"specmock/{__version__}"

        def _handle(self) -> None:
            if not self._drain_body():
                logger.info("%s %s -> 400 (bad Content-Length)", self.command, self.path)
                self.close_connection = True
                self._send(400, "application/json", _BAD_REQUEST_BODY)
                return

            method = HTTPMethod.parse(self.command)
            url = urlsplit(self.path)
            status, path = split_status_prefix(unquote(url.path), config.default_status)
            media_type = request_media_type(
                self.headers.get("Content-Type"), config.media_type
            )

            if method is None:
                self._send(404, "application/json", _NOT_FOUND_BODY)
                return

            request = MockRequest(
                method=method,
                path=path,
                query=url.query,
                content_type=media_type,
                status=status,
                headers={key: value for key, value in self.headers.items()},
            )

            try:
                value = resolve_example(document, request)
            except ResolutionError as exc:
                logger.info(
                    "%s %s -> 404 (%s: %s)", self.command, self.path, exc.stage, exc
                )
                self._send(404, "application/json", _NOT_FOUND_BODY)
                return

            logger.info("%s %s -> %d", self.command, self.path, status)
            self._send(status, media_type, encode_body(value, media_type))

        do_GET = _handle
        do_PUT = _handle
        do_POST = _handle
        do_DELETE = _handle
        do_OPTIONS = _handle
        do_HEAD = _handle
        do_PATCH = _handle
        do_TRACE = _handle

        def _drain_body(self) -> bool:
            """Read and discard the request body. False if its length is unusable."""
            try:
                length = int(self.headers.get("Content-Length") or 0)
            except ValueError:
                return False
            if length < 0:
                return False
            if length > 0:
                self.rfile.read(length)
            return True

        def _send(self, status: int, media_type: str, body: bytes) -> None:
            with_body = self.command != "HEAD" and status not in _BODYLESS_STATUSES
            self.send_response(status)
            self.send_header("Content-Type", media_type)
            self.send_header("Content-Length", str(len(body) if with_body else 0))
            self.end_headers()
            if with_body:
                self.wfile.write(body)

        def log_message(self, format: str, *args: Any) -> None:
            logger.debug("%s - %s", self.address_string(), format % args)

    return MockRequestHandler


class MockServer:
    """An HTTP listener serving examples from one document.

    Args:
        document: The loaded document to serve.
        config: Effective server settings. ``port=0`` binds an ephemeral
            port; read the chosen one from :attr:`server_address`.

    Raises:
        ServerStartError: If the address cannot be bound.

    Example::

        with MockServer(document, ServerConfig(port=0)) as server:
            threading.Thread(target=server.serve_forever, daemon=True).start()
            httpx.get(f"{server.url}/pets")
            server.shutdown()
    """

    def __init__(self, document: Document, config: ServerConfig) -> None:
        self._config = config
        try:
            self._httpd = ThreadingHTTPServer(
                (config.host, config.port), _make_handler(document, config)
            )
        except OSError as exc:
            raise ServerStartError(
                f"Cannot bind {config.host}:{config.port}: {exc}"
            ) from exc

    @property
    def server_address(self) -> tuple[str, int]:
        host, port = self._httpd.server_address[:2]
        return str(host), int(port)

    @property
    def url(self) -> str:
        host, port = self.server_address
        if host in ("0.0.0.0", "::"):
            host = "127.0.0.1"
        return f"http://{host}:{port}"

    def serve_forever(self) -> None:
        """Handle requests until :meth:`shutdown` is called from another thread."""
        logger.info("Serving on %s", self.url)
        self._httpd.serve_forever()

    def shutdown(self) -> None:
        """Stop :meth:`serve_forever`. Must be called from another thread."""
        self._httpd.shutdown()

    def close(self) -> None:
        self._httpd.server_close()

    def __enter__(self) -> "MockServer":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
