"""Pick the one example a request should receive.

A response may carry several named examples for one media type. The name of
each example decides when it is served:

``/pets/2``
    **Exact path match** -- served when the request path is literally
    ``/pets/2`` (the concrete path, not the template).

``query:page=1&limit=5``
    **Structured query match** -- served when every listed pair appears in
    the request's query string. Extra request parameters are ignored.

``header:x-api-key=123``
    **Structured header match** -- like a query match, against request
    headers. Header names compare case-insensitively.

``default``
    **Fallback** -- served only when nothing above matched.

Precedence is exact path > first structured match > ``default``. The
collection is walked once, in document order: an exact match returns
immediately, while the first structured match and the ``default`` entry are
remembered until the walk ends.

Any other name never matches. When the media type has no ``examples`` map,
the literal ``example`` is served, and failing that the ``example`` of its
schema.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Union
from urllib.parse import parse_qsl

from specmock.engine.resolver import resolve_reference
from specmock.models import Document, Example, Reference, Response

logger = logging.getLogger(__name__)

QUERY_PREFIX = "query:"
HEADER_PREFIX = "header:"
DEFAULT_EXAMPLE = "default"


def select_example(
    document: Document,
    response: Response,
    content_type: str,
    request_path: str,
    request_query: str = "",
    request_headers: Optional[Mapping[str, str]] = None,
) -> Optional[Example]:
    """Return the example to serve for *content_type*, or ``None``.

    Args:
        document: The loaded document (its registry resolves references).
        response: The resolved response definition.
        content_type: Media type key, e.g. ``"application/json"``.
        request_path: The concrete, decoded request path.
        request_query: Raw query string without the leading ``?``.
        request_headers: Request headers; optional.

    Returns:
        The selected :class:`~specmock.models.Example`, or ``None`` when the
        media type is not declared, nothing matches and there is no
        ``default``, or the chosen entry is a broken reference.
    """
    media = response.content.get(content_type)
    if media is None:
        logger.debug("No content declared for media type %s", content_type)
        return None

    if not media.examples:
        if media.example is not None:
            return media.example
        return _schema_example(document, media.schema_)

    chosen = _choose_named(
        media.examples,
        request_path,
        _query_values(request_query),
        _header_values(request_headers or {}),
    )
    if chosen is None:
        return None

    name, entry = chosen
    example = resolve_reference(entry, document.components, "examples")
    if example is None:
        logger.debug("Example '%s' is a broken reference", name)
    return example


def _choose_named(
    examples: Mapping[str, Union[Example, Reference]],
    request_path: str,
    query: dict[str, list[str]],
    headers: dict[str, list[str]],
) -> Optional[tuple[str, Union[Example, Reference]]]:
    structured: Optional[tuple[str, Union[Example, Reference]]] = None
    fallback: Optional[tuple[str, Union[Example, Reference]]] = None

    for name, entry in examples.items():
        if name == request_path:
            logger.debug("Example '%s' matched the request path", name)
            return name, entry
        if structured is None and _structured_match(name, query, headers):
            structured = name, entry
        elif name == DEFAULT_EXAMPLE and fallback is None:
            fallback = name, entry

    if structured is not None:
        logger.debug("Example '%s' matched the request", structured[0])
        return structured
    return fallback


def _structured_match(
    name: str,
    query: dict[str, list[str]],
    headers: dict[str, list[str]],
) -> bool:
    if name.startswith(QUERY_PREFIX):
        expected = parse_qsl(name[len(QUERY_PREFIX):], keep_blank_values=True)
        return _pairs_present(expected, query)
    if name.startswith(HEADER_PREFIX):
        expected = [
            (key.lower(), value)
            for key, value in parse_qsl(name[len(HEADER_PREFIX):], keep_blank_values=True)
        ]
        return _pairs_present(expected, headers)
    return False


def _pairs_present(expected: list[tuple[str, str]], actual: dict[str, list[str]]) -> bool:
    """Subset test: every expected pair must occur among the actual values."""
    return all(value in actual.get(key, ()) for key, value in expected)


def _query_values(query: str) -> dict[str, list[str]]:
    values: dict[str, list[str]] = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        values.setdefault(key, []).append(value)
    return values


def _header_values(headers: Mapping[str, str]) -> dict[str, list[str]]:
    values: dict[str, list[str]] = {}
    for key, value in headers.items():
        values.setdefault(key.lower(), []).append(value.strip())
    return values


def _schema_example(
    document: Document, schema: Union[Reference, dict, None]
) -> Optional[Example]:
    resolved = resolve_reference(schema, document.components, "schemas")
    if isinstance(resolved, dict) and "example" in resolved:
        return Example(value=resolved["example"])
    return None
