from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.forms.field_errors import FieldErrors
from app.utils.logger import get_logger

logger = get_logger(__name__)

REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}


def _error_body(message: str, error_code: ErrorCode, details=None) -> dict:
    return {
        "success": False,
        "message": message,
        "error_code": error_code,
        "details": jsonable_encoder(details),
    }


# -------------------------
# APP EXCEPTIONS
# -------------------------
async def app_exception_handler(request: Request, exc: AppException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail, exc.error_code, exc.details),
    )


# -------------------------
# FASTAPI VALIDATION
# -------------------------
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    # Same reply shape as a rejected form: field path -> messages.
    errors = FieldErrors()
    errors.extend_from_pydantic(
        {**err, "loc": [step for step in err["loc"] if step not in REQUEST_PARTS]}
        for err in exc.errors()
    )

    return JSONResponse(
        status_code=422,
        content=_error_body(
            "Invalid request data",
            ErrorCode.VALIDATION_ERROR,
            {"status": "failure", "field_errors": errors.as_dict()},
        ),
    )


# -------------------------
# HTTP EXCEPTIONS (mapped)
# -------------------------
HTTP_STATUS_TO_ERROR_CODE = {
    400: ErrorCode.VALIDATION_ERROR,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.VALIDATION_ERROR,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION_ERROR,
}


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
):
    error_code = HTTP_STATUS_TO_ERROR_CODE.get(
        exc.status_code,
        ErrorCode.INTERNAL_ERROR,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail, error_code),
    )


# -------------------------
# DB INTEGRITY ERRORS
# -------------------------
async def integrity_error_handler(
    request: Request, exc: IntegrityError
):
    reason = str(exc.orig).lower()

    if "uq_products_name_lower" in reason or "products.name" in reason:
        message, error_code = "Product name already exists", ErrorCode.PRODUCT_NAME_EXISTS
    elif "foreign key" in reason:
        message, error_code = "Record is still referenced elsewhere", ErrorCode.ENTITY_IN_USE
    else:
        message, error_code = "Database constraint violation", ErrorCode.CONFLICT

    logger.warning(
        "Integrity error on %s %s: %s", request.method, request.url.path, reason
    )

    return JSONResponse(
        status_code=409,
        content=_error_body(message, error_code),
    )


# -------------------------
# LAST RESORT
# -------------------------
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=500,
        content=_error_body(
            "Something went wrong. Please try again.",
            ErrorCode.INTERNAL_ERROR,
        ),
    )
