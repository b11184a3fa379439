"""Tests for specmock.engine.selector."""

from __future__ import annotations

import pytest

from specmock.engine.selector import resolve_response, select_operation
from specmock.exceptions import NotFoundError, ResponseNotFound
from specmock.models import Document, HTTPMethod


# ---------------------------------------------------------------------------
# select_operation
# ---------------------------------------------------------------------------


class TestSelectOperation:
    def test_declared_method(self, petstore: Document) -> None:
        operation = select_operation(petstore.paths["/pets"], HTTPMethod.GET)
        assert operation is not None
        assert operation.operation_id == "listPets"

    def test_other_declared_method(self, petstore: Document) -> None:
        operation = select_operation(petstore.paths["/pets"], HTTPMethod.POST)
        assert operation is not None
        assert operation.operation_id == "createPets"

    @pytest.mark.parametrize("method", [HTTPMethod.PUT, HTTPMethod.PATCH, HTTPMethod.TRACE])
    def test_undeclared_method(self, petstore: Document, method: HTTPMethod) -> None:
        assert select_operation(petstore.paths["/pets"], method) is None


# ---------------------------------------------------------------------------
# resolve_response
# ---------------------------------------------------------------------------


class TestResolveResponse:
    """Status lookup and reference following."""

    @pytest.fixture
    def show_pet(self, petstore: Document):
        return petstore.paths["/pets/{petId}"].operations[HTTPMethod.GET]

    def test_integer_status(self, petstore: Document, show_pet) -> None:
        response = resolve_response(petstore, show_pet, 200)
        assert response.description == "Expected response to a valid request"

    def test_string_status(self, petstore: Document, show_pet) -> None:
        response = resolve_response(petstore, show_pet, "401")
        assert response.description == "Unauthorized"

    def test_404_is_not_the_200_response(self, petstore: Document, show_pet) -> None:
        ok = resolve_response(petstore, show_pet, 200)
        not_found = resolve_response(petstore, show_pet, 404)
        assert not_found != ok

    def test_undeclared_status(self, petstore: Document, show_pet) -> None:
        with pytest.raises(ResponseNotFound, match="500"):
            resolve_response(petstore, show_pet, 500)

    def test_no_fallback_to_default_key(self, document_from) -> None:
        document = document_from(
            {"/x": {"get": {"responses": {"default": {"description": "fallback"}}}}}
        )
        operation = document.paths["/x"].operations[HTTPMethod.GET]
        with pytest.raises(ResponseNotFound):
            resolve_response(document, operation, 200)
        assert resolve_response(document, operation, "default").description == "fallback"

    def test_reference_two_levels_deep(self, petstore: Document, show_pet) -> None:
        response = resolve_response(petstore, show_pet, 404)
        assert response.description == "Pet not found"

    def test_cyclic_reference(self, petstore: Document, show_pet) -> None:
        with pytest.raises(ResponseNotFound, match="could not be resolved"):
            resolve_response(petstore, show_pet, 409)

    def test_missing_component(self, document_from) -> None:
        document = document_from(
            {"/x": {"get": {"responses": {"200": {"$ref": "#/components/responses/Gone"}}}}}
        )
        operation = document.paths["/x"].operations[HTTPMethod.GET]
        with pytest.raises(ResponseNotFound):
            resolve_response(document, operation, 200)

    def test_error_is_a_not_found(self, petstore: Document, show_pet) -> None:
        with pytest.raises(NotFoundError):
            resolve_response(petstore, show_pet, 418)
