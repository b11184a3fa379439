"""Select the operation for a method and the response for a status code."""

from __future__ import annotations

import logging
from typing import Optional, Union

from specmock.engine.resolver import resolve_reference
from specmock.exceptions import ResponseNotFound
from specmock.models import Document, HTTPMethod, Operation, PathEntry, Response

logger = logging.getLogger(__name__)


def select_operation(entry: PathEntry, method: HTTPMethod) -> Optional[Operation]:
    """Return the operation declared for *method* on *entry*, or ``None``."""
    return entry.operations.get(method)


def resolve_response(
    document: Document,
    operation: Operation,
    status: Union[int, str],
) -> Response:
    """Return the response declared for *status*, following ``$ref`` if needed.

    The lookup key is ``str(status)``. There is no fallback to the
    ``"default"`` response.

    Args:
        document: The loaded document (its registry resolves references).
        operation: The selected operation.
        status: Requested status code, e.g. ``404`` or ``"404"``.

    Returns:
        The inline :class:`~specmock.models.Response`.

    Raises:
        ResponseNotFound: If the status is not declared, or its reference
            chain is broken or deeper than
            :data:`~specmock.engine.resolver.MAX_REF_DEPTH`.
    """
    key = str(status)
    declared = operation.responses.get(key)
    if declared is None:
        raise ResponseNotFound(f"No response declared for status {key}")

    response = resolve_reference(declared, document.components, "responses")
    if response is None:
        raise ResponseNotFound(f"Response for status {key} could not be resolved")
    return response
