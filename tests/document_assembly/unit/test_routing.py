"""Router tests."""

from __future__ import annotations

import pytest
from openapi_builder.document_assembly.api_document import OpenAPIDocument
from openapi_builder.document_assembly.document_models import Info, InvalidDocumentError
from openapi_builder.document_assembly.routing import Router, join_path_parts


def _document() -> OpenAPIDocument:
    return OpenAPIDocument(Info(title="Library", version="v1"))


@pytest.mark.parametrize(
    ("parts", "expected"),
    [
        (("/books", "/"), "/books"),
        (("/books", "/{id}", ""), "/books/{id}"),
        (("/a//", "b/"), "/a/b"),
        (("", "/books"), "/books"),
        (("/", ""), "/"),
        ((), ""),
    ],
)
def test_join_path_parts_cleans_result(parts: tuple[str, ...], expected: str) -> None:
    assert join_path_parts(*parts) == expected


def test_nested_routes_inherit_path_prefix_params_and_tags() -> None:
    document = _document()

    def books(router: Router) -> None:
        router.with_tags("books")
        router.get("/", "List books")

        def single(router: Router) -> None:
            router.with_path_param("id", "ID of the book")
            router.with_tags("single")
            router.get("", "Get single book")

        router.route("/{id}", single)

    Router(document).route("/books", books)

    assert list(document.paths) == ["/books", "/books/{id}"]
    listing = document.paths["/books"].operations["get"]
    single = document.paths["/books/{id}"]
    assert listing.tags == ["books"]
    assert listing.summary == "List books"
    assert single.operations["get"].tags == ["single", "books"]
    assert [param.to_dict() for param in single.parameters] == [
        {
            "name": "id",
            "in": "path",
            "description": "ID of the book",
            "required": True,
            "schema": {"type": "string"},
        }
    ]
    assert document.paths["/books"].parameters == []


def test_methods_on_one_path_share_the_path_item() -> None:
    document = _document()
    router = Router(document)

    router.get("/books")
    router.post("/books")
    router.delete("/books/")

    assert list(document.paths) == ["/books"]
    assert list(document.paths["/books"].operations) == ["get", "post", "delete"]


def test_route_returns_parent_router_for_chaining() -> None:
    document = _document()
    router = Router(document)

    assert router.route("/a").route("/b") is router
    assert router.root is document


def test_router_requires_document() -> None:
    with pytest.raises(InvalidDocumentError):
        Router(None)  # type: ignore[arg-type]
