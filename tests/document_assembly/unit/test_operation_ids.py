"""Operation id generation tests."""

from __future__ import annotations

import pytest
from openapi_builder.document_assembly.operation_ids import default_operation_id


@pytest.mark.parametrize(
    ("method", "path", "expected"),
    [
        ("get", "/books/", "getBooks"),
        ("get", "/books/{id}", "getBooksById"),
        ("get", "/a/{a-id}/b/{b-id}", "getAByA-IdBByB-Id"),
        ("POST", "/books", "postBooks"),
        ("delete", "/user_accounts/{account_id}", "deleteUser_accountsByAccount_id"),
        ("get", "/", "get"),
    ],
)
def test_default_operation_id(method: str, path: str, expected: str) -> None:
    assert default_operation_id(method, path) == expected
