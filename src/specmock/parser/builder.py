"""Build the immutable :class:`~specmock.models.Document` from a raw OpenAPI dict.

Unlike a full dereferencer, this module keeps every ``$ref`` it meets as a
:class:`~specmock.models.Reference`. Indirection is followed lazily by the
engine through the component registry, with a depth bound, so documents whose
references form cycles still load.

The single public entry point is :func:`build_document`. Internally it
delegates to private helpers that each handle one level of the OpenAPI
structure:

* ``_build_path_entry`` -- a *Path Item Object* and its operations.
* ``_build_operation`` -- an *Operation Object* and its ``responses`` map.
* ``_build_response`` -- a *Response Object* and its ``content`` map.
* ``_build_media_type`` -- ``example``, ``examples`` and ``schema``.
* ``_build_components`` -- the ``components`` registry.

Entries that are not mappings are skipped rather than rejected: the engine
answers 404 for anything it cannot find, which is the useful behaviour for a
mock server fed a half-finished document.
"""

from __future__ import annotations

import logging
from typing import Any, Union

from specmock.models import (
    Components,
    Document,
    Example,
    HTTPMethod,
    MediaType,
    Operation,
    PathEntry,
    Reference,
    Response,
)

logger = logging.getLogger(__name__)


def build_document(raw_spec: dict[str, Any], openapi_version: str) -> Document:
    """Build a :class:`~specmock.models.Document` from a raw OpenAPI dict.

    Args:
        raw_spec: The document as returned by
            :func:`~specmock.parser.loader.load_spec`.
        openapi_version: The validated version string, as returned by
            :func:`~specmock.parser.loader.validate_openapi_version`.

    Returns:
        A frozen :class:`~specmock.models.Document`. ``paths`` keeps the
        document's own ordering.

    Example::

        raw = load_spec("petstore.yaml")
        document = build_document(raw, validate_openapi_version(raw))
        document.paths["/pets"].operations[HTTPMethod.GET].responses["200"]
    """
    info = raw_spec.get("info") or {}
    paths: dict[str, PathEntry] = {}

    for template, path_item in (raw_spec.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        paths[str(template)] = _build_path_entry(str(template), path_item)

    document = Document(
        openapi_version=openapi_version,
        title=str(info.get("title", "Untitled API")),
        version=str(info.get("version", "0.0.0")),
        paths=paths,
        components=_build_components(raw_spec.get("components") or {}),
    )
    logger.debug(
        "Built document '%s' with %d path template(s)", document.title, len(paths)
    )
    return document


def _is_reference(node: Any) -> bool:
    return isinstance(node, dict) and isinstance(node.get("$ref"), str)


def _build_path_entry(template: str, path_item: dict[str, Any]) -> PathEntry:
    operations: dict[HTTPMethod, Operation] = {}
    for method in HTTPMethod:
        operation = path_item.get(method.value)
        if isinstance(operation, dict):
            operations[method] = _build_operation(operation)
    return PathEntry(template=template, operations=operations)


def _build_operation(operation: dict[str, Any]) -> Operation:
    """Build an :class:`~specmock.models.Operation`.

    Status keys are stringified because YAML turns an unquoted ``200:`` into
    an integer, while lookups are always by ``"200"``.
    """
    responses: dict[str, Union[Response, Reference]] = {}
    for status, response in (operation.get("responses") or {}).items():
        built = _build_response_or_reference(response)
        if built is not None:
            responses[str(status)] = built

    return Operation(
        operation_id=operation.get("operationId"),
        summary=operation.get("summary"),
        responses=responses,
    )


def _build_response_or_reference(node: Any) -> Union[Response, Reference, None]:
    if _is_reference(node):
        return Reference(ref=node["$ref"])
    if isinstance(node, dict):
        return _build_response(node)
    return None


def _build_response(response: dict[str, Any]) -> Response:
    content: dict[str, MediaType] = {}
    for media_type, media in (response.get("content") or {}).items():
        if isinstance(media, dict):
            content[str(media_type)] = _build_media_type(media)
    return Response(description=response.get("description"), content=content)


def _build_media_type(media: dict[str, Any]) -> MediaType:
    """Build a :class:`~specmock.models.MediaType`.

    ``example`` is only set when the key is present, so an authored
    ``example: null`` still counts as a literal example.
    """
    literal = Example(value=media["example"]) if "example" in media else None

    examples: dict[str, Union[Example, Reference]] = {}
    for name, node in (media.get("examples") or {}).items():
        built = _build_example_or_reference(node)
        if built is not None:
            examples[str(name)] = built

    return MediaType(
        example=literal,
        examples=examples,
        schema=_build_schema(media.get("schema")),
    )


def _build_example_or_reference(node: Any) -> Union[Example, Reference, None]:
    if _is_reference(node):
        return Reference(ref=node["$ref"])
    if not isinstance(node, dict):
        return None
    return Example(
        summary=node.get("summary"),
        description=node.get("description"),
        value=node.get("value"),
        external_value=node.get("externalValue"),
    )


def _build_schema(node: Any) -> Union[Reference, dict[str, Any], None]:
    """Keep schemas raw; only a top-level ``$ref`` becomes a Reference."""
    if _is_reference(node):
        return Reference(ref=node["$ref"])
    if isinstance(node, dict):
        return node
    return None


def _build_components(components: dict[str, Any]) -> Components:
    """Build the component registry from the ``components`` object.

    Only the sections the engine reads are kept: ``responses``,
    ``examples`` and ``schemas``.
    """
    responses: dict[str, Union[Response, Reference]] = {}
    for name, node in (components.get("responses") or {}).items():
        built = _build_response_or_reference(node)
        if built is not None:
            responses[str(name)] = built

    examples: dict[str, Union[Example, Reference]] = {}
    for name, node in (components.get("examples") or {}).items():
        built = _build_example_or_reference(node)
        if built is not None:
            examples[str(name)] = built

    schemas: dict[str, Union[Reference, dict[str, Any]]] = {}
    for name, node in (components.get("schemas") or {}).items():
        built = _build_schema(node)
        if built is not None:
            schemas[str(name)] = built

    return Components(responses=responses, examples=examples, schemas=schemas)
