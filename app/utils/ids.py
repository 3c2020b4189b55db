# app/utils/ids.py
import uuid


def generate_uuid() -> str:
    return str(uuid.uuid4())


def is_uuid(value) -> bool:
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True
