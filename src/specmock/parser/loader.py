"""Read OpenAPI documents from a URL, local file, or stdin.

This module is the only place specmock performs I/O on the document source.
It turns the source into a plain ``dict`` (JSON or YAML, detected from the
file extension, the HTTP ``Content-Type``, or by trial) and checks that the
document declares an OpenAPI 3.x version.

Public functions:

* :func:`load_spec` -- Load and parse a document from any supported source.
* :func:`validate_openapi_version` -- Reject Swagger 2.x and non-3.x documents.

The raw dict is then handed to :func:`~specmock.parser.builder.build_document`.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from specmock.exceptions import SpecParseError

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


def load_spec(source: str, timeout: float = 30.0) -> dict[str, Any]:
    """Load an OpenAPI document from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.
        timeout: Seconds to wait when fetching a URL.

    Returns:
        The parsed document as a dictionary.

    Raises:
        SpecParseError: If the source cannot be read or parsed.
    """
    if source == "-":
        logger.debug("Reading OpenAPI document from stdin")
        content, hint = _read_stdin(), ""
    elif source.startswith(("http://", "https://")):
        logger.debug("Fetching OpenAPI document from %s", source)
        content, hint = _fetch_url(source, timeout)
    else:
        logger.debug("Reading OpenAPI document from %s", source)
        content, hint = _read_file(source)

    if not content.strip():
        raise SpecParseError(f"OpenAPI document is empty: {source}")

    return _parse_content(content, hint=hint)


def _read_stdin() -> str:
    try:
        return sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc


def _fetch_url(url: str, timeout: float) -> tuple[str, str]:
    """Fetch *url* and return its body plus a format hint from ``Content-Type``."""
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch document from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"
    return response.text, hint


def _read_file(path: str) -> tuple[str, str]:
    """Read a local file and return its text plus a format hint from the suffix."""
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"OpenAPI document not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read {path}: {exc}") from exc

    suffix = file_path.suffix.lower()
    if suffix == ".json":
        return content, "json"
    if suffix in _YAML_SUFFIXES:
        return content, "yaml"
    return content, ""


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    JSON is tried first unless *hint* is ``"yaml"``; valid JSON is also
    valid YAML, but the JSON parser gives sharper error messages. An
    explicit ``"json"`` hint disables the YAML fallback.

    Raises:
        SpecParseError: If the content is neither, or is not a mapping.
    """
    errors: list[str] = []

    if hint != "yaml":
        try:
            return _require_mapping(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            errors.append(f"JSON error: {exc}")

    try:
        return _require_mapping(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        errors.append(f"YAML error: {exc}")

    raise SpecParseError(
        "Failed to parse document as JSON or YAML\n  " + "\n  ".join(errors)
    )


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise SpecParseError(f"OpenAPI document must be an object (got {kind})")
    return result


def validate_openapi_version(spec: dict[str, Any]) -> str:
    """Validate and return the OpenAPI version string.

    Any ``3.x`` version is accepted. Swagger 2.x documents, documents with
    no ``openapi`` field, and other major versions are rejected.

    Raises:
        SpecParseError: If the version is missing or unsupported.
    """
    if "swagger" in spec:
        raise SpecParseError(
            f"Swagger {spec['swagger']} is not supported. "
            "Convert the document to OpenAPI 3.x first "
            "(e.g. with https://converter.swagger.io)."
        )

    openapi_version = spec.get("openapi")
    if openapi_version is None:
        raise SpecParseError(
            "Missing 'openapi' field. Is this an OpenAPI 3.x document?"
        )

    version_str = str(openapi_version)
    if not version_str.startswith("3."):
        raise SpecParseError(
            f"Unsupported OpenAPI version: {version_str}. Only 3.x is supported."
        )
    return version_str
