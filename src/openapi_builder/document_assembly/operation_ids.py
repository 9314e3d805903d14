"""Operation id generation."""

from __future__ import annotations

from collections.abc import Callable

OperationIdGenerator = Callable[[str, str], str]


def default_operation_id(method: str, path: str) -> str:
    """Join the lower-case method with title-cased path segments.

    Templated segments are introduced by `By`: `get /books/{id}` → `getBooksById`.
    """
    parts = [method.lower()]
    for segment in path.split("/"):
        name = segment.strip("{}")
        if name != segment:
            parts.append("By")
        parts.append(_title(name))
    return "".join(parts)


def _title(word: str) -> str:
    # Only the first letter of each word changes; word boundaries are separators.
    chars = []
    previous = " "
    for char in word:
        chars.append(char.upper() if _is_separator(previous) else char)
        previous = char
    return "".join(chars)


def _is_separator(char: str) -> bool:
    if char.isascii():
        return not (char.isalnum() or char == "_")
    if char.isalnum():
        return False
    return char.isspace()
