"""``specmock serve`` -- run the mock server in the foreground."""

from __future__ import annotations

from typing import Optional

import typer

from specmock.exceptions import InvalidUsageError, SpecmockError
from specmock.output import error, info, success, suggest


def serve_command(
    spec: Optional[str] = typer.Argument(
        None,
        help="OpenAPI document: file path, URL, or '-' for stdin. "
        "Falls back to SPECMOCK_SPEC or ./specmock.json.",
    ),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to bind (default 8080)."),
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind (default 0.0.0.0)."),
    media_type: Optional[str] = typer.Option(
        None,
        "--media-type",
        "-m",
        help="Media type served when a request has no Content-Type (default application/json).",
    ),
) -> None:
    """Serve the examples of an OpenAPI document over HTTP.

    Prefix a path with a status code to ask for that response, e.g.
    ``/404/pets/7``; without a prefix the 200 response is served.

    Example::

        specmock serve petstore.yaml --port 9000
    """
    from specmock.config import resolve_server_config
    from specmock.parser import load_document
    from specmock.server import MockServer

    try:
        config = resolve_server_config(
            cli_spec=spec, cli_host=host, cli_port=port, cli_media_type=media_type
        )
        if config.spec is None:
            raise InvalidUsageError(
                "No OpenAPI document given. Pass SPEC or set SPECMOCK_SPEC."
            )

        document = load_document(config.spec)
        server = MockServer(document, config)
    except SpecmockError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    with server:
        success(
            f"Serving '{document.title}' ({len(document.paths)} paths) on {server.url}"
        )
        first_path = next(iter(document.paths), None)
        if first_path is not None:
            suggest(f"Try: curl {server.url}{first_path}")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            info("Shutting down.")
