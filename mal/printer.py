"""Printer: value tree back to mal source text."""

from typing import Iterable

from .types import Boolean, HashMap, Int, Keyword, List, Nil, String, Symbol, Value, Vector

_ESCAPES = str.maketrans({'"': '\\"', "\\": "\\\\", "\n": "\\n"})


def escape_string(s: str) -> str:
    return s.translate(_ESCAPES)


def _join(items: Iterable[Value]) -> str:
    return " ".join(pr_str(v, False) for v in items)


def pr_str(value: Value, pretty: bool = False) -> str:
    """Render `value` as text.

    With `pretty` set, a string atom is emitted raw instead of quoted and
    escaped. Nested elements of collections are always rendered non-pretty,
    so only the non-pretty form reads back to an equal value.
    """
    if isinstance(value, Symbol):
        return value.name
    if isinstance(value, Keyword):
        return f":{value.name}"
    if isinstance(value, String):
        if pretty:
            return value.value
        return f'"{escape_string(value.value)}"'
    if isinstance(value, Int):
        return str(value.value)
    if isinstance(value, Nil):
        return "nil"
    if isinstance(value, Boolean):
        return "true" if value.value else "false"
    # Vector subclasses List, so it is checked first.
    if isinstance(value, Vector):
        return f"[{_join(value.items)}]"
    if isinstance(value, List):
        return f"({_join(value.items)})"
    if isinstance(value, HashMap):
        flat = []
        for k, v in value.items.items():
            flat.append(k)
            flat.append(v)
        return "{" + _join(flat) + "}"
    raise TypeError(f"cannot print {type(value).__name__}")
