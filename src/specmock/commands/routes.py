"""``specmock routes`` -- list what a document can answer.

Prints one row per operation and status code with the media types and the
example names declared for it, so it is easy to see which URL, query string,
or header selects which example.
"""

from __future__ import annotations

from typing import Union

import typer

from specmock.exceptions import SpecmockError
from specmock.models import Document, Reference, Response
from specmock.output import error, info, print_table


def _describe(document: Document, response: Union[Response, Reference]) -> tuple[str, str]:
    """Return the media types and example names of *response* as display strings."""
    from specmock.engine import resolve_reference

    resolved = resolve_reference(response, document.components, "responses")
    if resolved is None:
        return "(unresolved)", "-"

    media_types = ", ".join(resolved.content) or "-"
    names: list[str] = []
    for media in resolved.content.values():
        if media.examples:
            names.extend(n for n in media.examples if n not in names)
        elif media.example is not None and "(example)" not in names:
            names.append("(example)")
    return media_types, ", ".join(names) or "-"


def routes_command(
    spec: str = typer.Argument(..., help="OpenAPI document: file path, URL, or '-'."),
) -> None:
    """List every method, path, and status with its example names.

    Example::

        specmock routes petstore.yaml
        specmock --json routes petstore.yaml | jq '.[].Path'
    """
    from specmock.parser import load_document

    try:
        document = load_document(spec)
    except SpecmockError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    headers = ["Method", "Path", "Status", "Media types", "Examples"]
    rows: list[list[str]] = []
    for template, entry in document.paths.items():
        for method, operation in entry.operations.items():
            for status, response in operation.responses.items():
                media_types, examples = _describe(document, response)
                rows.append([method.value.upper(), template, status, media_types, examples])

    if not rows:
        info("No operations defined in this document.")
        return

    print_table(
        headers, rows, title=f"{document.title} {document.version} -- Routes ({len(rows)})"
    )
