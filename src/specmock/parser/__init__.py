"""OpenAPI document loading -- read the source and build the document model.

This sub-package turns a raw OpenAPI 3.x document (JSON or YAML, local file,
remote URL, or stdin) into the immutable :class:`~specmock.models.Document`
the resolution engine reads.

Typical usage::

    from specmock.parser import load_document

    document = load_document("tests/fixtures/petstore.yaml")

Sub-modules:

* :mod:`~specmock.parser.loader` -- I/O layer plus format detection and
  OpenAPI version validation.
* :mod:`~specmock.parser.builder` -- Walks the raw dict and produces the
  :class:`~specmock.models.Document`, keeping ``$ref`` pointers as
  :class:`~specmock.models.Reference` values.
"""

from __future__ import annotations

from specmock.models import Document
from specmock.parser.builder import build_document
from specmock.parser.loader import load_spec, validate_openapi_version

__all__ = ["load_spec", "validate_openapi_version", "build_document", "load_document"]


def load_document(source: str) -> Document:
    """Load, validate, and build a :class:`~specmock.models.Document` from *source*.

    Raises:
        SpecParseError: If the source cannot be read, parsed, or is not
            an OpenAPI 3.x document.
    """
    raw = load_spec(source)
    version = validate_openapi_version(raw)
    return build_document(raw, version)
