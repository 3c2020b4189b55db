# app/forms/field_errors.py

from typing import Iterable, Sequence

FieldPath = Sequence[str | int]


def format_path(path: FieldPath) -> str:
    """``("items", 0, "key")`` -> ``"items[0].key"``; empty path -> form level."""
    out = ""
    for step in path:
        if isinstance(step, int):
            out += f"[{step}]"
        elif out:
            out += f".{step}"
        else:
            out = str(step)
    return out


class FieldErrors:
    """Ordered collection of messages keyed by rendered field path."""

    def __init__(self):
        self._errors: dict[str, list[str]] = {}

    def add(self, path: FieldPath, message: str) -> None:
        messages = self._errors.setdefault(format_path(path), [])
        if message not in messages:
            messages.append(message)

    def extend_from_pydantic(self, errors: Iterable[dict]) -> None:
        for err in errors:
            # Drop the synthetic step pydantic adds for union / after-validator errors.
            loc = [step for step in err.get("loc", ()) if not _is_synthetic(step)]
            self.add(loc, _clean_message(err.get("msg", "Invalid value")))

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __contains__(self, path: str) -> bool:
        return path in self._errors

    def as_dict(self) -> dict[str, list[str]]:
        return {path: list(messages) for path, messages in self._errors.items()}


def _is_synthetic(step) -> bool:
    return isinstance(step, str) and (
        step.startswith("function-") or step in {"str", "int", "literal['new']"}
    )


def _clean_message(message: str) -> str:
    # pydantic prefixes custom ValueError messages with "Value error, "
    prefix = "Value error, "
    return message[len(prefix):] if message.startswith(prefix) else message
