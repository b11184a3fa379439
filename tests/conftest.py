"""Shared test fixtures for specmock.

Provides reusable fixtures for loading the petstore fixture, building small
in-memory documents, isolating configuration, managing output state, and
running CLI commands. These fixtures are automatically discovered by pytest.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import pytest
import yaml

from specmock.models import Document
from specmock.output import reset_output
from specmock.parser.builder import build_document


FIXTURES_DIR = Path(__file__).parent / "fixtures"
PETSTORE_PATH = FIXTURES_DIR / "petstore.yaml"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When CliRunner swaps those streams for a test, the
    cached references go stale, so a fresh manager is forced for the next
    test.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_path() -> Path:
    return PETSTORE_PATH


@pytest.fixture
def petstore_raw() -> dict[str, Any]:
    """Load the raw petstore YAML fixture as a dict."""
    with open(PETSTORE_PATH, encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def petstore(petstore_raw: dict[str, Any]) -> Document:
    """The petstore fixture built into a Document."""
    return build_document(petstore_raw, "3.0.3")


def make_document(paths: dict[str, Any], components: Optional[dict[str, Any]] = None) -> Document:
    """Build a Document from a ``paths`` dict (and optional ``components``)."""
    raw: dict[str, Any] = {
        "openapi": "3.0.3",
        "info": {"title": "Test", "version": "1.0"},
        "paths": paths,
    }
    if components is not None:
        raw["components"] = components
    return build_document(raw, "3.0.3")


def json_examples(examples: dict[str, Any], status: str = "200") -> dict[str, Any]:
    """A ``GET /pets`` path item whose *status* response has named examples."""
    return {
        "/pets": {
            "get": {
                "responses": {
                    status: {
                        "description": "ok",
                        "content": {
                            "application/json": {
                                "examples": {
                                    name: {"value": value} for name, value in examples.items()
                                }
                            }
                        },
                    }
                }
            }
        }
    }


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_DATA_HOME into tmp_path, clears all SPECMOCK_* variables and
    changes the working directory to tmp_path so no ``specmock.json`` from
    the real checkout leaks in.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in [
        "SPECMOCK_SPEC",
        "SPECMOCK_HOST",
        "SPECMOCK_PORT",
        "SPECMOCK_MEDIA_TYPE",
        "SPECMOCK_DEFAULT_STATUS",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


# ---------------------------------------------------------------------------
# Builder helpers exposed as fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def document_from():
    """Factory fixture: ``document_from(paths, components=None) -> Document``."""
    return make_document


@pytest.fixture
def examples_path_item():
    """Factory fixture: ``examples_path_item(examples, status="200") -> paths``."""
    return json_examples
