"""Nested routers sharing path prefixes, parameters and tags."""

from __future__ import annotations

import posixpath
from collections.abc import Callable, Iterator

from .api_document import OpenAPIDocument
from .document_models import InvalidDocumentError, Param, new_path_param
from .operations import ApiPath, Operation


class Router:
    """A slice of the path tree.

    Parameters and tags added to a router are inherited by every path created
    below it; add them before declaring operations.
    """

    def __init__(
        self, root: OpenAPIDocument, *, parent: Router | None = None, path: str = ""
    ) -> None:
        if root is None:
            raise InvalidDocumentError("router requires a document root")
        self._root = root
        self._parent = parent
        self._path = path
        self._tags: list[str] = []
        self._params: list[Param] = []
        self._paths: dict[str, ApiPath] = {}
        self._sub_routes: dict[str, Router] = {}

    @property
    def root(self) -> OpenAPIDocument:
        return self._root

    def route(self, path: str, build: Callable[[Router], None] | None = None) -> Router:
        """Create a sub router for `path` and hand it to `build`; returns this router."""
        sub = Router(self._root, parent=self, path=path)
        self._sub_routes[path] = sub
        if build is not None:
            build(sub)
        return self

    def get(self, path: str, summary: str = "", description: str = "") -> Operation:
        return self.method("get", path, summary, description)

    def put(self, path: str, summary: str = "", description: str = "") -> Operation:
        return self.method("put", path, summary, description)

    def post(self, path: str, summary: str = "", description: str = "") -> Operation:
        return self.method("post", path, summary, description)

    def delete(self, path: str, summary: str = "", description: str = "") -> Operation:
        return self.method("delete", path, summary, description)

    def head(self, path: str, summary: str = "", description: str = "") -> Operation:
        return self.method("head", path, summary, description)

    def patch(self, path: str, summary: str = "", description: str = "") -> Operation:
        return self.method("patch", path, summary, description)

    def method(self, method: str, path: str, summary: str = "", description: str = "") -> Operation:
        """Add an operation on `path` relative to this router."""
        api_path = self._paths.get(path)
        if api_path is None:
            api_path = self._find_or_create_path(path)
            self._paths[path] = api_path

        tags = [tag for router in self._lineage() for tag in router._tags]
        operation = api_path.add_operation(method)
        operation.summary = summary
        operation.description = description
        return operation.with_tags(*tags)

    def with_param(self, param: Param) -> Router:
        self._params.append(param)
        return self

    def with_path_param(self, name: str, description: str = "") -> Router:
        return self.with_param(new_path_param(name, description))

    def with_tags(self, *tags: str) -> Router:
        self._tags.extend(tags)
        return self

    def _find_or_create_path(self, path: str) -> ApiPath:
        lineage = list(self._lineage())
        segments = [path, *(router._path for router in lineage)]
        full_path = join_path_parts(*reversed(segments))
        existing = self._root.paths.get(full_path)
        if existing is not None:
            return existing
        api_path = ApiPath(
            root=self._root,
            path=full_path,
            parameters=[param for router in lineage for param in router._params],
        )
        self._root.paths[full_path] = api_path
        return api_path

    def _lineage(self) -> Iterator[Router]:
        router: Router | None = self
        while router is not None:
            yield router
            router = router._parent


def join_path_parts(*parts: str) -> str:
    """Join URL path segments and clean the result (duplicate and trailing slashes)."""
    joined = "/".join(part for part in parts if part)
    if not joined:
        return ""
    cleaned = posixpath.normpath(joined)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned
