# app/forms/request_body.py

from typing import Any, Dict, Iterable

from fastapi import Request

from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.forms.form_parser import FormParseError, parse_form


async def read_submission(
    request: Request,
    numeric_fields: Iterable[str] = (),
) -> Dict[str, Any]:
    """Nested submission from either a JSON body or an encoded HTML form."""
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        body = await request.json()
        if not isinstance(body, dict):
            raise AppException(400, "Expected a JSON object", ErrorCode.VALIDATION_ERROR)
        return body

    form = await request.form()
    try:
        return parse_form(
            ((name, value) for name, value in form.multi_items() if isinstance(value, str)),
            numeric_fields=numeric_fields,
        )
    except FormParseError as exc:
        raise AppException(400, str(exc), ErrorCode.VALIDATION_ERROR)
