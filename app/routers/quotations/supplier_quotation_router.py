# app/routers/quotations/supplier_quotation_router.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.quotations.supplier_quotation_schemas import (
    SupplierQuotationOut,
    SupplierQuotationListData,
)
from app.services.quotations.supplier_quotation_service import (
    get_supplier_quotation,
    list_supplier_quotations,
)
from app.utils.response import APIResponse, success_response

router = APIRouter(prefix="/supplier-quotations", tags=["Supplier Quotations"])


@router.get("/", response_model=APIResponse[SupplierQuotationListData])
async def list_supplier_quotations_api(
    db: AsyncSession = Depends(get_db),
    quotation_id: str | None = Query(None),
    line_item_id: str | None = Query(None),
    company_id: str | None = Query(None),
    accepted: bool | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    sort_by: str = Query("created_at"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
):
    data = await list_supplier_quotations(
        db=db,
        quotation_id=quotation_id,
        line_item_id=line_item_id,
        company_id=company_id,
        accepted=accepted,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        order=order,
    )
    return success_response("Supplier quotations fetched successfully", data)


@router.get("/{supplier_quotation_id}", response_model=APIResponse[SupplierQuotationOut])
async def get_supplier_quotation_api(
    supplier_quotation_id: str,
    db: AsyncSession = Depends(get_db),
):
    data = await get_supplier_quotation(db, supplier_quotation_id)
    return success_response("Supplier quotation fetched successfully", data)
