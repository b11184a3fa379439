"""Follow ``$ref`` indirection through the component registry.

OpenAPI documents use pointers such as
``{"$ref": "#/components/responses/NotFound"}`` to share definitions. The
document builder keeps those pointers as :class:`~specmock.models.Reference`
values; this module follows them on demand.

Resolution is a recursive walk with an explicit hop budget. Each hop looks the
target up by name in one section of :class:`~specmock.models.Components` and
recurses with the budget decremented, so a cyclic or absurdly long chain ends
with ``None`` instead of a ``RecursionError``.

The single public function is :func:`resolve_reference`.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from specmock.models import Components, Reference

logger = logging.getLogger(__name__)

MAX_REF_DEPTH = 8
"""Maximum number of ``$ref`` hops followed before giving up."""


def resolve_reference(
    item: Any,
    components: Components,
    section: str,
    depth: int = MAX_REF_DEPTH,
) -> Optional[Any]:
    """Resolve *item* to an inline value, following references in *section*.

    Args:
        item: An inline object (returned unchanged) or a
            :class:`~specmock.models.Reference`.
        components: The document's component registry.
        section: Registry section the reference must point into
            (``"responses"``, ``"examples"``, ``"schemas"``).
        depth: Remaining hop budget. Each followed reference costs one.

    Returns:
        The inline target, or ``None`` when the pointer is external, points
        into another section, names a missing entry, or the chain is longer
        than *depth* hops.

    Example::

        response = resolve_reference(
            Reference(ref="#/components/responses/NotFound"),
            document.components,
            "responses",
        )
    """
    if not isinstance(item, Reference):
        return item

    if depth <= 0:
        logger.debug("Giving up on %s: more than %d hops", item.ref, MAX_REF_DEPTH)
        return None

    target = components.lookup(section, item)
    if target is None:
        logger.debug("Unresolvable reference %s in section '%s'", item.ref, section)
        return None

    return resolve_reference(target, components, section, depth - 1)
