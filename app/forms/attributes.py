# app/forms/attributes.py

from typing import Iterable, Mapping, Any


def _text(pair: Any, field: str) -> str:
    if isinstance(pair, Mapping):
        value = pair.get(field)
    else:
        value = getattr(pair, field, None)
    return "" if value is None else str(value).strip()


def to_pairs(mapping: Mapping[str, Any] | None) -> list[dict[str, str]]:
    """Expand a stored attribute mapping into editable ``{key, value}`` rows."""
    if not mapping:
        return []
    return [{"key": key, "value": value} for key, value in mapping.items()]


def to_mapping(pairs: Iterable[Any] | None) -> dict[str, str]:
    """Collapse form rows into a key-unique mapping.

    Rows with a blank key or value are dropped and later rows overwrite
    earlier ones with the same key. Callers that must reject duplicates
    validate before getting here.
    """
    mapping: dict[str, str] = {}
    for pair in pairs or []:
        key = _text(pair, "key")
        value = _text(pair, "value")
        if not key or not value:
            continue
        mapping[key] = value
    return mapping


def to_mapping_or_none(pairs: Iterable[Any] | None) -> dict[str, str] | None:
    mapping = to_mapping(pairs)
    return mapping or None
