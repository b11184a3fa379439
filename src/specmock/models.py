"""Canonical Pydantic models shared across all specmock modules.

This is the single source of truth for data shapes in the project. The models
fall into three groups:

**Document models** -- the immutable in-memory form of an OpenAPI document,
built once by :func:`~specmock.parser.builder.build_document` and only ever
read afterwards:
    :class:`HTTPMethod`, :class:`Reference`, :class:`Example`,
    :class:`MediaType`, :class:`Response`, :class:`Operation`,
    :class:`PathEntry`, :class:`Components`, and :class:`Document`.

**Request model** -- what the HTTP boundary hands to the engine:
    :class:`MockRequest`.

**Configuration model** -- :class:`ServerConfig`, resolved by
:func:`~specmock.config.resolve_server_config`.

Document models are declared with ``frozen=True``. Handler threads share a
single :class:`Document`, and no code path is allowed to mutate it.
"""

from __future__ import annotations

import datetime
import enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


_FROZEN = ConfigDict(frozen=True)

# Prefix of internal component pointers, e.g. ``#/components/responses/NotFound``.
_COMPONENTS_POINTER = "#/components/"


def json_default(value: Any) -> str:
    """``json.dumps`` hook for the date and time values YAML loads from unquoted timestamps."""
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


# --- Document Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised by OpenAPI 3.x path-item objects.

    Used as the key of :attr:`PathEntry.operations`, so adding a verb never
    changes the shape of the model.
    """

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"

    @classmethod
    def parse(cls, token: str) -> Optional["HTTPMethod"]:
        """Return the method for *token* (case-insensitive), or ``None`` if unknown."""
        try:
            return cls(token.strip().lower())
        except ValueError:
            return None


class Reference(BaseModel):
    """A ``$ref`` pointer standing in for an inline object.

    Only internal pointers into ``#/components/<section>/<name>`` can be
    resolved. Anything else (external files, URLs, pointers elsewhere in the
    document) keeps ``section`` and ``name`` as ``None`` and resolves to
    nothing.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ref: str = Field(alias="$ref")

    @property
    def section(self) -> Optional[str]:
        """Component section the pointer targets (``responses``, ``examples``, ...)."""
        parts = self._parts()
        return parts[0] if parts else None

    @property
    def name(self) -> Optional[str]:
        """Component name the pointer targets."""
        parts = self._parts()
        return parts[1] if parts else None

    def _parts(self) -> Optional[tuple[str, str]]:
        if not self.ref.startswith(_COMPONENTS_POINTER):
            return None
        segments = self.ref[len(_COMPONENTS_POINTER):].split("/")
        if len(segments) != 2 or not all(segments):
            return None
        # RFC 6901 escaping
        section, name = (s.replace("~1", "/").replace("~0", "~") for s in segments)
        return section, name


class Example(BaseModel):
    """An OpenAPI *Example Object*. ``value`` may legitimately be ``None``."""

    model_config = _FROZEN

    summary: Optional[str] = None
    description: Optional[str] = None
    value: Any = None
    external_value: Optional[str] = None


class MediaType(BaseModel):
    """Example data attached to one content type of a response.

    ``example`` holds the single literal example (wrapped in an
    :class:`Example` so a literal ``null`` differs from "not given");
    ``examples`` holds the named collection in document order.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    example: Optional[Example] = None
    examples: dict[str, Union[Example, Reference]] = Field(default_factory=dict)
    schema_: Optional[Union[Reference, dict[str, Any]]] = Field(
        default=None, alias="schema"
    )


class Response(BaseModel):
    """An OpenAPI *Response Object*, keyed by content type."""

    model_config = _FROZEN

    description: Optional[str] = None
    content: dict[str, MediaType] = Field(default_factory=dict)


class Operation(BaseModel):
    """One HTTP method on one path.

    ``responses`` keys are status-code strings (``"200"``, ``"404"``,
    ``"default"``). Integer keys from YAML are normalised when the document
    is built.
    """

    model_config = _FROZEN

    operation_id: Optional[str] = None
    summary: Optional[str] = None
    responses: dict[str, Union[Response, Reference]] = Field(default_factory=dict)


class PathEntry(BaseModel):
    """A path template and the operations declared on it."""

    model_config = _FROZEN

    template: str
    operations: dict[HTTPMethod, Operation] = Field(default_factory=dict)


class Components(BaseModel):
    """The component registry that ``$ref`` pointers are looked up in.

    A flat by-name table per section; references are never embedded as
    object pointers, so documents with cyclic references still load.
    """

    model_config = _FROZEN

    responses: dict[str, Union[Response, Reference]] = Field(default_factory=dict)
    examples: dict[str, Union[Example, Reference]] = Field(default_factory=dict)
    schemas: dict[str, Union[Reference, dict[str, Any]]] = Field(default_factory=dict)

    def lookup(self, section: str, reference: Reference) -> Any:
        """Return the entry *reference* names in *section*, or ``None``.

        A pointer into a different section than the one requested never
        matches, so a response reference cannot be satisfied by an example.
        """
        if reference.section != section or reference.name is None:
            return None
        table: dict[str, Any] = getattr(self, section, None) or {}
        return table.get(reference.name)


class Document(BaseModel):
    """Complete in-memory representation of an OpenAPI document.

    ``paths`` preserves document order, which is the order the path matcher
    tries templates in.
    """

    model_config = _FROZEN

    openapi_version: str
    title: str = "Untitled API"
    version: str = "0.0.0"
    paths: dict[str, PathEntry] = Field(default_factory=dict)
    components: Components = Field(default_factory=Components)


# --- Request Model ---


class MockRequest(BaseModel):
    """A normalised request as seen by the resolution engine.

    ``path`` is already percent-decoded and stripped of any status prefix;
    ``query`` is the raw query string without the leading ``?``.
    """

    model_config = _FROZEN

    method: HTTPMethod = HTTPMethod.GET
    path: str
    query: str = ""
    content_type: str = "application/json"
    status: int = 200
    headers: dict[str, str] = Field(default_factory=dict)


# --- Configuration ---


class ServerConfig(BaseModel):
    """Effective settings for one mock server instance.

    See :func:`~specmock.config.resolve_server_config` for the precedence
    chain that produces it.
    """

    spec: Optional[str] = Field(
        default=None, description="File path, URL, or '-' for the OpenAPI document"
    )
    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=8080, ge=0, le=65535, description="TCP port to bind")
    media_type: str = Field(
        default="application/json",
        description="Media type served when the request has no Content-Type",
    )
    default_status: int = Field(
        default=200, ge=100, le=599, description="Status used without a status prefix"
    )
