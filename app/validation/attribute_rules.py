# app/validation/attribute_rules.py

from typing import Any, Iterable, List

from app.validation.snapshot import fold_name

MSG_ATTRIBUTE_KEY_REPEATED = "Attribute keys must be unique."


def _key(pair: Any) -> str:
    if isinstance(pair, dict):
        return fold_name(pair.get("key"))
    return fold_name(getattr(pair, "key", None))


def duplicate_key_indexes(pairs: Iterable[Any], limit: int) -> List[int]:
    """Indexes (below ``limit``) whose key repeats an earlier row's key.

    Keys compare trimmed and case-insensitively; blank keys never count.
    """
    seen: set[str] = set()
    repeated: List[int] = []
    for index, pair in enumerate(list(pairs)[:limit]):
        key = _key(pair)
        if not key:
            continue
        if key in seen:
            repeated.append(index)
        seen.add(key)
    return repeated
