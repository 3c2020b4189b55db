# app/forms/form_parser.py

import re
from typing import Any, Iterable

from app.core.config import MAX_ATTRIBUTES_PER_PRODUCT, MAX_LINE_ITEMS

_TOKEN = re.compile(r"([^\[\].]+)|\[(\d{1,9})\]")

# Indexed groups are materialized as lists, so an index is also a size.
MAX_FORM_INDEX = max(MAX_LINE_ITEMS, MAX_ATTRIBUTES_PER_PRODUCT)


class FormParseError(ValueError):
    pass


def split_field_name(name: str) -> list[str | int]:
    """``items[0].attributes[1].key`` -> ``["items", 0, "attributes", 1, "key"]``"""
    path: list[str | int] = []
    consumed = 0
    for match in _TOKEN.finditer(name):
        gap = name[consumed:match.start()]
        if gap not in ("", "."):
            raise FormParseError(f"Malformed field name: {name!r}")
        key, index = match.groups()
        path.append(int(index) if index is not None else key)
        consumed = match.end()

    if not path or consumed != len(name):
        raise FormParseError(f"Malformed field name: {name!r}")
    return path


def _normalize(value: Any) -> Any:
    if isinstance(value, str):
        return value if value.strip() else None
    return value


def _assign(root: dict, path: list[str | int], value: Any) -> None:
    node: dict = root
    for step, next_step in zip(path, path[1:]):
        child = node.get(step)
        if child is None:
            child = {}
            node[step] = child
        elif not isinstance(child, dict):
            raise FormParseError("Field is both a value and a group")
        node = child

    last = path[-1]
    if last in node:
        current = node[last]
        if isinstance(current, dict):
            raise FormParseError("Field is both a value and a group")
        # Repeated plain keys (multi-selects) collapse into a list.
        node[last] = current + [value] if isinstance(current, list) else [current, value]
    else:
        node[last] = value


def _finalize(node: Any) -> Any:
    if not isinstance(node, dict):
        return node

    if node and all(isinstance(k, int) for k in node):
        size = max(node) + 1
        return [_finalize(node.get(i)) for i in range(size)]

    if any(isinstance(k, int) for k in node):
        raise FormParseError("Cannot mix indexed and named fields in one group")

    return {k: _finalize(v) for k, v in node.items()}


def _coerce_numbers(node: Any, numeric_fields: frozenset[str]) -> Any:
    if isinstance(node, list):
        return [_coerce_numbers(n, numeric_fields) for n in node]
    if not isinstance(node, dict):
        return node

    out = {}
    for key, value in node.items():
        if key in numeric_fields and isinstance(value, str):
            out[key] = _to_number(value)
        else:
            out[key] = _coerce_numbers(value, numeric_fields)
    return out


def _to_number(raw: str) -> Any:
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        # Left as-is so the schema reports "must be a number".
        return raw


def parse_form(
    items: Iterable[tuple[str, Any]],
    numeric_fields: Iterable[str] = (),
    max_index: int = MAX_FORM_INDEX,
) -> dict[str, Any]:
    """Rebuild nested form state from flat ``name=value`` pairs.

    Indexed names become lists (gaps filled with ``None``), dotted names
    become dicts, and blank strings are treated as missing values. Any
    index at or above ``max_index`` raises ``FormParseError``.
    """
    root: dict = {}
    for name, value in items:
        path = split_field_name(name)
        if any(isinstance(step, int) and step >= max_index for step in path):
            raise FormParseError(f"Index out of range in field name: {name!r}")
        _assign(root, path, _normalize(value))

    return _coerce_numbers(_finalize(root), frozenset(numeric_fields))
