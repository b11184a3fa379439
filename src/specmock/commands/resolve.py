"""``specmock resolve`` -- resolve a single request without starting a server.

Handy in shell scripts and when writing examples: it prints exactly the value
``specmock serve`` would return for the same URL, and exits with
:data:`~specmock.exit_codes.EXIT_NOT_FOUND` where the server would answer 404.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import unquote, urlsplit

import typer

from specmock.exceptions import InvalidUsageError, SpecmockError
from specmock.models import HTTPMethod, MockRequest
from specmock.output import debug, error, format_response


def _parse_headers(raw_headers: list[str]) -> dict[str, str]:
    """Parse ``-H 'Name: value'`` options into a dict."""
    headers: dict[str, str] = {}
    for raw in raw_headers:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise InvalidUsageError(f"Invalid header '{raw}'. Expected 'Name: value'.")
        headers[name.strip()] = value.strip()
    return headers


def resolve_command(
    spec: str = typer.Argument(..., help="OpenAPI document: file path, URL, or '-'."),
    url: str = typer.Argument(
        ..., help="Request path with optional status prefix and query, e.g. /404/pets?page=1."
    ),
    method: str = typer.Option("GET", "--method", "-X", help="HTTP method."),
    status: Optional[int] = typer.Option(
        None, "--status", "-s", help="Status code; overrides any status prefix in URL."
    ),
    content_type: str = typer.Option(
        "application/json", "--content-type", "-t", help="Media type of the example."
    ),
    header: list[str] = typer.Option(
        [], "--header", "-H", help="Request header 'Name: value'. Repeatable."
    ),
) -> None:
    """Print the example a request would receive.

    Example::

        specmock resolve petstore.yaml '/pets?page=1'
        specmock resolve petstore.yaml /pets/5 --status 401
    """
    from specmock.engine import resolve_example
    from specmock.parser import load_document
    from specmock.server import split_status_prefix

    try:
        http_method = HTTPMethod.parse(method)
        if http_method is None:
            raise InvalidUsageError(f"Unknown HTTP method: {method}")

        parts = urlsplit(url)
        prefixed_status, path = split_status_prefix(unquote(parts.path))
        request = MockRequest(
            method=http_method,
            path=path,
            query=parts.query,
            content_type=content_type,
            status=status if status is not None else prefixed_status,
            headers=_parse_headers(header),
        )
        debug(f"Resolving {request.method.value.upper()} {request.path} ({request.status})")

        document = load_document(spec)
        value = resolve_example(document, request)
    except SpecmockError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    format_response(value)
