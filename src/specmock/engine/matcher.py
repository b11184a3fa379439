"""Match a concrete request path against the document's path templates.

Both sides are split on ``/`` with empty segments discarded, so leading,
trailing and doubled slashes carry no meaning. A template matches when it has
the same number of segments as the request and each template segment is
either a ``{name}`` placeholder or exactly equal to the request segment
(case-sensitive, no percent-decoding).

Templates are tried in document order and the first match wins. Two templates
that both match one concrete path (``/pets/{id}`` and ``/pets/{name}``) are
therefore resolved by their order in the document.
"""

from __future__ import annotations

import re
from typing import Optional

from specmock.models import Document, PathEntry

_PARAM_RE = re.compile(r"^\{[^/{}]+\}$")


def split_path(path: str) -> list[str]:
    """Split *path* on ``/`` and drop empty segments."""
    return [segment for segment in path.split("/") if segment]


def is_placeholder(segment: str) -> bool:
    """True when *segment* is a ``{name}`` template parameter."""
    return bool(_PARAM_RE.match(segment))


def template_matches(template: str, request_path: str) -> bool:
    """True when the concrete *request_path* fits *template*.

    Example::

        template_matches("/pets/{petId}", "/pets/123")    # True
        template_matches("/pets/{petId}", "/pets/123/x")  # False
    """
    template_segments = split_path(template)
    request_segments = split_path(request_path)
    if len(template_segments) != len(request_segments):
        return False
    return all(
        is_placeholder(expected) or expected == actual
        for expected, actual in zip(template_segments, request_segments)
    )


def match_path(document: Document, request_path: str) -> Optional[PathEntry]:
    """Return the first :class:`~specmock.models.PathEntry` whose template fits.

    Args:
        document: The loaded document.
        request_path: Decoded request path without query string or status
            prefix.

    Returns:
        The matching entry, or ``None`` when no template fits.
    """
    for template, entry in document.paths.items():
        if template_matches(template, request_path):
            return entry
    return None
