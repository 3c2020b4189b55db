# app/services/quotations/quotation_submission.py
#
# Received -> Parsed -> Validated -> Persisted -> Responded for one quotation
# form submission. Parsing from the wire happens in app.forms; this module
# owns validation against a fresh snapshot and the hand-off to persistence.

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants.error_codes import ErrorCode
from app.core.exceptions import NotFoundError, PersistenceError
from app.models.quotations.quotation_request_models import QuotationRequest
from app.services.quotations.quotation_persistence import commit_quotation
from app.utils.ids import generate_uuid
from app.utils.logger import get_logger
from app.validation.quotation_validator import build_quotation_validator
from app.validation.snapshot import load_quotation_snapshot

logger = get_logger(__name__)

QUOTATION_NUMERIC_FIELDS = ("quotation_request_line_item_quantity",)


class SubmissionReply(BaseModel):
    status: Literal["success", "failure", "error"]
    quotation_id: Optional[str] = None
    field_errors: Dict[str, List[str]] = Field(default_factory=dict)
    form_errors: List[str] = Field(default_factory=list)
    # Submitted values echoed back so the form can be redisplayed.
    values: Dict[str, Any] = Field(default_factory=dict)


async def ensure_quotation_exists(db: AsyncSession, quotation_id: str) -> None:
    exists = await db.scalar(
        select(QuotationRequest.id).where(QuotationRequest.id == quotation_id)
    )
    if not exists:
        raise NotFoundError("Quotation not found", ErrorCode.QUOTATION_NOT_FOUND)


async def submit_quotation(
    db: AsyncSession,
    payload: Dict[str, Any],
    quotation_id: Optional[str] = None,
) -> SubmissionReply:
    """Validate a parsed quotation form and persist it when it is valid.

    ``quotation_id`` switches to edit mode; the quotation must exist.
    Raises ``NotFoundError`` for a missing quotation; validation and save
    failures come back as a reply so the caller can redisplay the form.
    """
    is_edit = quotation_id is not None
    if is_edit:
        await ensure_quotation_exists(db, quotation_id)

    snapshot = await load_quotation_snapshot(db)
    result = build_quotation_validator(snapshot).validate(payload)

    if not result.ok:
        logger.info(
            "Quotation submission rejected",
            extra={"fields": sorted(result.field_errors)},
        )
        return SubmissionReply(
            status="failure",
            quotation_id=quotation_id,
            field_errors=result.field_errors,
            values=payload,
        )

    target_id = quotation_id or generate_uuid()

    try:
        await commit_quotation(db, target_id, result.value, is_edit=is_edit)
    except PersistenceError as exc:
        return SubmissionReply(
            status="error",
            quotation_id=quotation_id,
            form_errors=[exc.detail],
            values=payload,
        )

    return SubmissionReply(status="success", quotation_id=target_id, values=payload)
