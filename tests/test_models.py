"""Tests for specmock.models."""

from __future__ import annotations

import datetime

import pytest
import yaml
from pydantic import ValidationError

from specmock.models import (
    Components,
    Example,
    HTTPMethod,
    MediaType,
    MockRequest,
    Reference,
    Response,
    ServerConfig,
    json_default,
)


class TestHTTPMethod:
    @pytest.mark.parametrize(
        "token, expected",
        [
            ("GET", HTTPMethod.GET),
            ("get", HTTPMethod.GET),
            (" Patch ", HTTPMethod.PATCH),
            ("TRACE", HTTPMethod.TRACE),
        ],
    )
    def test_parse_known(self, token: str, expected: HTTPMethod) -> None:
        assert HTTPMethod.parse(token) is expected

    @pytest.mark.parametrize("token", ["CONNECT", "FETCH", ""])
    def test_parse_unknown(self, token: str) -> None:
        assert HTTPMethod.parse(token) is None

    def test_eight_methods(self) -> None:
        assert len(HTTPMethod) == 8


class TestReference:
    def test_alias(self) -> None:
        ref = Reference.model_validate({"$ref": "#/components/examples/Kitty"})
        assert ref.ref == "#/components/examples/Kitty"

    def test_components_pointer(self) -> None:
        ref = Reference(ref="#/components/responses/NotFound")
        assert ref.section == "responses"
        assert ref.name == "NotFound"

    def test_escaped_name(self) -> None:
        ref = Reference(ref="#/components/examples/a~1b~0c")
        assert ref.name == "a/b~c"

    @pytest.mark.parametrize(
        "pointer",
        [
            "other.yaml#/components/examples/Kitty",
            "https://example.com/spec.yaml#/components/examples/Kitty",
            "#/paths/~1pets",
            "#/components/examples",
            "#/components/examples/Kitty/value",
        ],
    )
    def test_unresolvable_pointers(self, pointer: str) -> None:
        ref = Reference(ref=pointer)
        assert ref.section is None
        assert ref.name is None


class TestComponents:
    def test_lookup(self) -> None:
        kitty = Example(value={"name": "kitty"})
        components = Components(examples={"Kitty": kitty})
        assert components.lookup("examples", Reference(ref="#/components/examples/Kitty")) == kitty

    def test_lookup_wrong_section(self) -> None:
        components = Components(examples={"Kitty": Example(value=1)})
        ref = Reference(ref="#/components/examples/Kitty")
        assert components.lookup("responses", ref) is None

    def test_lookup_missing(self) -> None:
        ref = Reference(ref="#/components/responses/Nope")
        assert Components().lookup("responses", ref) is None


class TestMediaType:
    def test_schema_alias(self) -> None:
        media = MediaType.model_validate({"schema": {"type": "string"}})
        assert media.schema_ == {"type": "string"}

    def test_defaults(self) -> None:
        media = MediaType()
        assert media.example is None
        assert media.examples == {}
        assert media.schema_ is None

    def test_frozen(self) -> None:
        response = Response(description="ok")
        with pytest.raises(ValidationError):
            response.description = "changed"  # type: ignore[misc]


class TestMockRequest:
    def test_defaults(self) -> None:
        request = MockRequest(path="/pets")
        assert request.method is HTTPMethod.GET
        assert request.status == 200
        assert request.query == ""
        assert request.content_type == "application/json"
        assert request.headers == {}


class TestServerConfig:
    def test_defaults(self) -> None:
        config = ServerConfig()
        assert config.spec is None
        assert config.host == "0.0.0.0"
        assert config.port == 8080
        assert config.media_type == "application/json"
        assert config.default_status == 200

    @pytest.mark.parametrize("port", [-1, 65536])
    def test_port_range(self, port: int) -> None:
        with pytest.raises(ValidationError):
            ServerConfig(port=port)

    @pytest.mark.parametrize("status", [99, 600])
    def test_default_status_range(self, status: int) -> None:
        with pytest.raises(ValidationError):
            ServerConfig(default_status=status)


class TestJsonDefault:
    def test_yaml_timestamp(self) -> None:
        value = yaml.safe_load("createdAt: 2024-01-01T00:00:00Z")["createdAt"]
        assert isinstance(value, datetime.datetime)
        assert json_default(value) == "2024-01-01T00:00:00+00:00"

    def test_yaml_date(self) -> None:
        value = yaml.safe_load("day: 2024-01-31")["day"]
        assert json_default(value) == "2024-01-31"

    def test_other_values_are_stringified(self) -> None:
        assert json_default({1}) == "{1}"
        assert json_default(b"raw") == "b'raw'"
