"""Schema node entities and their serialized form."""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from dataclasses import dataclass, field, replace
from typing import Any, Protocol

SCHEMA_REF_PREFIX = "#/components/schemas/"

SUPPORTED_FORMATS: tuple[str, ...] = (
    "int32",
    "int64",
    "float",
    "double",
    "byte",
    "binary",
    "date",
    "date-time",
    "password",
)


class EmptyCompositionError(ValueError):
    """Raised when a composition keyword is built without alternatives."""


class SchemaLookup(Protocol):
    """Anything able to resolve a registered schema by key."""

    def get(self, key: str) -> Schema | None: ...


@dataclass(frozen=True)
class RequiredFlag:
    """Whole-value required marker (`required: true|false`)."""

    value: bool


@dataclass(frozen=True)
class RequiredNames:
    """Required property names of an object schema."""

    names: tuple[str, ...]

    def appended(self, name: str) -> RequiredNames:
        return RequiredNames(names=self.names + (name,))


RequiredSpec = RequiredFlag | RequiredNames


# pylint: disable=too-many-instance-attributes
@dataclass(eq=False)
class Schema:
    """One node of a schema tree, either an inline shape or a `$ref` pointer."""

    type: str = ""
    format: str = ""
    all_of: list[Schema] = field(default_factory=list)
    one_of: list[Schema] = field(default_factory=list)
    any_of: list[Schema] = field(default_factory=list)
    not_: Schema | None = None
    items: Schema | None = None
    properties: dict[str, Schema] = field(default_factory=dict)
    additional_properties: Schema | None = None
    description: str = ""
    default: Any = None
    maximum: int | float | None = None
    minimum: int | float | None = None
    max_length: int | None = None
    min_length: int | None = None
    pattern: str = ""
    required: RequiredSpec | None = None
    enum: list[str] = field(default_factory=list)
    ref: str = ""
    key: str = field(default="", repr=False, compare=False)
    root: SchemaLookup | None = field(default=None, repr=False, compare=False)

    @classmethod
    def reference_to(cls, key: str, root: SchemaLookup | None = None) -> Schema:
        """Build a pointer node for a registered component key."""
        return cls(ref=SCHEMA_REF_PREFIX + key, key=key, root=root)

    @property
    def is_reference(self) -> bool:
        return bool(self.ref)

    def resolve(self) -> Schema:
        """Return the registered node this reference points to, or the node itself."""
        if not self.ref:
            return self
        if self.root is None:
            raise LookupError(f"Reference {self.ref} is not bound to a document.")
        target = self.root.get(self.key)
        if target is None:
            raise LookupError(f"Reference {self.ref} does not resolve to a schema.")
        return target

    def set_root(self, root: SchemaLookup) -> None:
        """Bind this node and every child node to the owning document."""
        if self.root is not None:
            return
        self.root = root
        for child in self._children():
            child.set_root(root)

    def clone(self) -> Schema:
        """Return an unbound copy of this tree with the same content.

        Reference nodes keep their key and are bound again by `set_root`.
        """
        return replace(
            self,
            all_of=[child.clone() for child in self.all_of],
            one_of=[child.clone() for child in self.one_of],
            any_of=[child.clone() for child in self.any_of],
            not_=_clone_optional(self.not_),
            items=_clone_optional(self.items),
            properties={name: child.clone() for name, child in self.properties.items()},
            additional_properties=_clone_optional(self.additional_properties),
            default=deepcopy(self.default),
            enum=list(self.enum),
            root=None,
        )

    def _children(self) -> list[Schema]:
        children = [*self.all_of, *self.one_of, *self.any_of, *self.properties.values()]
        children.extend(
            child
            for child in (self.not_, self.items, self.additional_properties)
            if child is not None
        )
        return children

    def with_description(self, description: str) -> Schema:
        self.description = description
        return self

    def with_property(self, name: str, required: bool, prop: Schema) -> Schema:
        """Add a property; a required one is appended to the required names."""
        self.properties[name] = prop
        if required:
            if isinstance(self.required, RequiredNames):
                self.required = self.required.appended(name)
            else:
                self.required = RequiredNames(names=(name,))
        return self

    def with_basic_property(
        self, name: str, prop_type: str, description: str, required: bool
    ) -> Schema:
        return self.with_property(name, required, Schema(type=prop_type, description=description))

    def with_required(self, required: bool) -> Schema:
        """Mark the whole value as required or not, replacing any property names."""
        self.required = RequiredFlag(value=required)
        return self

    def with_one_of(self, *alternatives: Schema) -> Schema:
        if not alternatives:
            raise EmptyCompositionError("oneOf has no alternatives")
        self.one_of.extend(alternatives)
        return self

    def with_any_of(self, *alternatives: Schema) -> Schema:
        if not alternatives:
            raise EmptyCompositionError("anyOf has no alternatives")
        self.any_of.extend(alternatives)
        return self

    def with_all_of(self, *parts: Schema) -> Schema:
        if not parts:
            raise EmptyCompositionError("allOf has no parts")
        self.all_of.extend(parts)
        return self

    def with_not(self, schema: Schema) -> Schema:
        self.not_ = schema
        return self

    def with_items(self, schema: Schema) -> Schema:
        self.items = schema
        return self

    def to_dict(self) -> dict[str, Any]:
        """Render the node, omitting empty fields; references render as `$ref` only."""
        if self.ref:
            return {"$ref": self.ref}
        rendered: dict[str, Any] = {}
        _put(rendered, "type", self.type)
        _put(rendered, "format", self.format)
        _put(rendered, "allOf", [child.to_dict() for child in self.all_of])
        _put(rendered, "oneOf", [child.to_dict() for child in self.one_of])
        _put(rendered, "anyOf", [child.to_dict() for child in self.any_of])
        if self.not_ is not None:
            rendered["not"] = self.not_.to_dict()
        if self.items is not None:
            rendered["items"] = self.items.to_dict()
        _put(rendered, "properties", {k: v.to_dict() for k, v in self.properties.items()})
        if self.additional_properties is not None:
            rendered["additionalProperties"] = self.additional_properties.to_dict()
        _put(rendered, "description", self.description)
        if self.default is not None:
            rendered["default"] = self.default
        for name, value in (
            ("maximum", self.maximum),
            ("minimum", self.minimum),
            ("maxLength", self.max_length),
            ("minLength", self.min_length),
        ):
            if value is not None:
                rendered[name] = value
        _put(rendered, "pattern", self.pattern)
        if isinstance(self.required, RequiredNames):
            rendered["required"] = list(self.required.names)
        elif isinstance(self.required, RequiredFlag):
            rendered["required"] = self.required.value
        _put(rendered, "enum", list(self.enum))
        return rendered

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Schema:
        """Read a rendered node back; a `$ref` mapping yields a pure reference."""
        ref = data.get("$ref")
        if isinstance(ref, str) and ref:
            key = ref[len(SCHEMA_REF_PREFIX) :] if ref.startswith(SCHEMA_REF_PREFIX) else ""
            return cls(ref=ref, key=key)

        required_raw = data.get("required")
        required: RequiredSpec | None = None
        if isinstance(required_raw, bool):
            required = RequiredFlag(value=required_raw)
        elif isinstance(required_raw, list):
            required = RequiredNames(names=tuple(str(name) for name in required_raw))

        return cls(
            type=data.get("type", ""),
            format=data.get("format", ""),
            all_of=[cls.from_dict(child) for child in data.get("allOf", [])],
            one_of=[cls.from_dict(child) for child in data.get("oneOf", [])],
            any_of=[cls.from_dict(child) for child in data.get("anyOf", [])],
            not_=_optional_child(cls, data.get("not")),
            items=_optional_child(cls, data.get("items")),
            properties={k: cls.from_dict(v) for k, v in data.get("properties", {}).items()},
            additional_properties=_optional_child(cls, data.get("additionalProperties")),
            description=data.get("description", ""),
            default=data.get("default"),
            maximum=data.get("maximum"),
            minimum=data.get("minimum"),
            max_length=data.get("maxLength"),
            min_length=data.get("minLength"),
            pattern=data.get("pattern", ""),
            required=required,
            enum=list(data.get("enum", [])),
        )


def _put(rendered: dict[str, Any], name: str, value: Any) -> None:
    if value:
        rendered[name] = value


def _optional_child(cls: type[Schema], value: Any) -> Schema | None:
    if isinstance(value, Mapping):
        return cls.from_dict(value)
    return None


def _clone_optional(schema: Schema | None) -> Schema | None:
    return schema.clone() if schema is not None else None
