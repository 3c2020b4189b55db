# app/routers/quotations/quotation_router.py

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.exceptions import FormValidationError, PersistenceError
from app.forms.request_body import read_submission
from app.schemas.quotations.quotation_schemas import (
    QuotationOut,
    QuotationListData,
    QuotationFormState,
    QuotationFormOptions,
    QuotationSaved,
)
from app.services.quotations.quotation_service import (
    get_quotation,
    get_quotation_form_state,
    get_quotation_form_options,
    list_quotations,
    delete_quotation,
)
from app.services.quotations.quotation_submission import (
    QUOTATION_NUMERIC_FIELDS,
    SubmissionReply,
    submit_quotation,
)
from app.utils.response import (
    APIResponse,
    FORM_ERROR_RESPONSES,
    flash_redirect,
    success_response,
)
from app.utils.logger import get_logger

router = APIRouter(prefix="/quotations", tags=["Quotations"])
logger = get_logger(__name__)

QUOTATIONS_PAGE = "/quotations"


def _saved(reply: SubmissionReply, message: str) -> dict:
    if reply.status == "failure":
        raise FormValidationError(details=reply.model_dump(mode="json"))
    if reply.status == "error":
        raise PersistenceError(
            message=reply.form_errors[0],
            details=reply.model_dump(mode="json"),
        )

    data = QuotationSaved(
        quotation_id=reply.quotation_id,
        redirect_to=flash_redirect(QUOTATIONS_PAGE, message),
    )
    return success_response(message, data)


# ---------------- LIST ----------------
@router.get("/", response_model=APIResponse[QuotationListData])
async def list_quotations_api(
    db: AsyncSession = Depends(get_db),
    search: str | None = Query(None, description="Search by ref, vessel or company"),
    company_id: str | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    sort_by: str = Query("created_at"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
):
    data = await list_quotations(
        db=db,
        search=search,
        company_id=company_id,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        order=order,
    )
    return success_response("Quotations fetched successfully", data)


# Declared before /{quotation_id} so the literal path wins.
@router.get("/form-options", response_model=APIResponse[QuotationFormOptions])
async def quotation_form_options_api(db: AsyncSession = Depends(get_db)):
    data = await get_quotation_form_options(db)
    return success_response("Form options fetched successfully", data)


# ---------------- CREATE ----------------
@router.post(
    "/",
    response_model=APIResponse[QuotationSaved],
    status_code=201,
    responses=FORM_ERROR_RESPONSES,
)
async def create_quotation_api(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    payload = await read_submission(request, QUOTATION_NUMERIC_FIELDS)
    logger.info("Create quotation", extra={"ref": payload.get("quotation_request_ref")})
    reply = await submit_quotation(db, payload)
    return _saved(reply, "Quotation created successfully!")


# ---------------- GET ----------------
@router.get("/{quotation_id}", response_model=APIResponse[QuotationOut])
async def get_quotation_api(
    quotation_id: str,
    db: AsyncSession = Depends(get_db),
):
    data = await get_quotation(db, quotation_id)
    return success_response("Quotation fetched successfully", data)


@router.get("/{quotation_id}/form", response_model=APIResponse[QuotationFormState])
async def get_quotation_form_api(
    quotation_id: str,
    db: AsyncSession = Depends(get_db),
):
    data = await get_quotation_form_state(db, quotation_id)
    return success_response("Quotation form fetched successfully", data)


# ---------------- UPDATE ----------------
@router.put(
    "/{quotation_id}",
    response_model=APIResponse[QuotationSaved],
    responses=FORM_ERROR_RESPONSES,
)
async def update_quotation_api(
    quotation_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    payload = await read_submission(request, QUOTATION_NUMERIC_FIELDS)
    logger.info("Update quotation", extra={"quotation_id": quotation_id})
    reply = await submit_quotation(db, payload, quotation_id)
    return _saved(reply, "Quotation updated successfully!")


# ---------------- DELETE ----------------
@router.delete("/{quotation_id}", response_model=APIResponse[QuotationOut])
async def delete_quotation_api(
    quotation_id: str,
    db: AsyncSession = Depends(get_db),
):
    data = await delete_quotation(db, quotation_id)
    return success_response("Quotation deleted successfully", data)
