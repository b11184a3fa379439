"""Tests for specmock.engine.matcher."""

from __future__ import annotations

import pytest

from specmock.engine.matcher import is_placeholder, match_path, split_path, template_matches
from specmock.models import Document


# ---------------------------------------------------------------------------
# split_path / is_placeholder
# ---------------------------------------------------------------------------


class TestSplitPath:
    def test_drops_leading_and_trailing_slashes(self) -> None:
        assert split_path("/pets/") == ["pets"]

    def test_drops_doubled_slashes(self) -> None:
        assert split_path("//pets//1") == ["pets", "1"]

    def test_root_is_empty(self) -> None:
        assert split_path("/") == []


class TestIsPlaceholder:
    @pytest.mark.parametrize("segment", ["{petId}", "{id}", "{owner_id}"])
    def test_braced_segments(self, segment: str) -> None:
        assert is_placeholder(segment)

    @pytest.mark.parametrize("segment", ["pets", "{}", "{a}b", "x{a}", "{a"])
    def test_other_segments(self, segment: str) -> None:
        assert not is_placeholder(segment)


# ---------------------------------------------------------------------------
# template_matches
# ---------------------------------------------------------------------------


class TestTemplateMatches:
    """Literal and parameterised template matching."""

    def test_literal_equal(self) -> None:
        assert template_matches("/pets", "/pets")

    def test_literal_ignores_empty_segments(self) -> None:
        assert template_matches("/pets/", "pets")
        assert template_matches("/pets", "//pets/")

    def test_literal_is_case_sensitive(self) -> None:
        assert not template_matches("/pets", "/Pets")

    def test_no_percent_decoding(self) -> None:
        assert not template_matches("/pet food", "/pet%20food")

    @pytest.mark.parametrize("path", ["/pets/123", "/pets/abc", "/pets/{petId}"])
    def test_parameter_matches_any_value(self, path: str) -> None:
        assert template_matches("/pets/{petId}", path)

    @pytest.mark.parametrize("path", ["/pets", "/pets/123/x", "/"])
    def test_segment_count_must_agree(self, path: str) -> None:
        assert not template_matches("/pets/{petId}", path)

    def test_literal_segment_after_parameter(self) -> None:
        assert template_matches("/owners/{id}/pets", "/owners/3/pets")
        assert not template_matches("/owners/{id}/pets", "/owners/3/toys")


# ---------------------------------------------------------------------------
# match_path
# ---------------------------------------------------------------------------


class TestMatchPath:
    """Document-level lookup over the petstore fixture."""

    def test_literal_path(self, petstore: Document) -> None:
        entry = match_path(petstore, "/pets")
        assert entry is not None
        assert entry.template == "/pets"

    def test_parameterised_path(self, petstore: Document) -> None:
        entry = match_path(petstore, "/pets/42")
        assert entry is not None
        assert entry.template == "/pets/{petId}"

    def test_two_parameters(self, petstore: Document) -> None:
        entry = match_path(petstore, "/owners/3/pets/7")
        assert entry is not None
        assert entry.template == "/owners/{ownerId}/pets/{petId}"

    def test_no_match(self, petstore: Document) -> None:
        assert match_path(petstore, "/notfound") is None
        assert match_path(petstore, "/pets/1/extra") is None

    def test_first_template_in_document_order_wins(self, document_from) -> None:
        ok = {"get": {"responses": {}}}
        document = document_from({"/items/{a}": ok, "/items/{b}": ok, "/items/special": ok})
        entry = match_path(document, "/items/special")
        assert entry is not None
        assert entry.template == "/items/{a}"
