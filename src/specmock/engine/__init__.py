"""Example-resolution engine -- from a request to one authored example value.

The engine is a chain of pure, synchronous lookups over an immutable
:class:`~specmock.models.Document`. It performs no I/O and keeps no state,
so any number of request threads may call it concurrently.

Pipeline, one stage per sub-module:

1. :func:`~specmock.engine.matcher.match_path` -- request path to
   :class:`~specmock.models.PathEntry`.
2. :func:`~specmock.engine.selector.select_operation` -- method to
   :class:`~specmock.models.Operation`.
3. :func:`~specmock.engine.selector.resolve_response` -- status code to
   :class:`~specmock.models.Response`, through ``$ref`` if needed.
4. :func:`~specmock.engine.examples.select_example` -- media type, path,
   query and headers to one :class:`~specmock.models.Example`.

:func:`~specmock.engine.resolver.resolve_reference` backs stages 3 and 4.

Typical usage::

    from specmock.engine import resolve_example
    from specmock.models import MockRequest

    value = resolve_example(document, MockRequest(path="/pets", query="page=1"))
"""

from __future__ import annotations

import logging
from typing import Any

from specmock.engine.examples import select_example
from specmock.engine.matcher import match_path
from specmock.engine.resolver import MAX_REF_DEPTH, resolve_reference
from specmock.engine.selector import resolve_response, select_operation
from specmock.exceptions import (
    ExampleAbsent,
    OperationNotFound,
    PathNotFound,
    ResolutionError,
)
from specmock.models import Document, MockRequest

__all__ = [
    "MAX_REF_DEPTH",
    "match_path",
    "resolve_example",
    "resolve_reference",
    "resolve_response",
    "select_example",
    "select_operation",
]

logger = logging.getLogger(__name__)


def resolve_example(document: Document, request: MockRequest) -> Any:
    """Run the full pipeline and return the example value for *request*.

    Args:
        document: The loaded document.
        request: The normalised request.

    Returns:
        The example value. It can be any JSON-like value, ``None`` included
        when the document authored a literal ``null``.

    Raises:
        PathNotFound: No template matches ``request.path``.
        OperationNotFound: The path has no operation for ``request.method``.
        ResponseNotFound: ``request.status`` is undeclared or unresolvable.
        ExampleAbsent: No example fits the media type and request.
    """
    try:
        entry = match_path(document, request.path)
        if entry is None:
            raise PathNotFound(f"No path template matches {request.path}")

        operation = select_operation(entry, request.method)
        if operation is None:
            raise OperationNotFound(
                f"{request.method.value.upper()} is not declared on {entry.template}"
            )

        response = resolve_response(document, operation, request.status)

        example = select_example(
            document,
            response,
            request.content_type,
            request.path,
            request.query,
            request.headers,
        )
        if example is None:
            raise ExampleAbsent(
                f"No {request.content_type} example for "
                f"{request.method.value.upper()} {entry.template} ({request.status})"
            )
    except ResolutionError as exc:
        logger.debug("Resolution failed at %s stage: %s", exc.stage, exc)
        raise

    return example.value
