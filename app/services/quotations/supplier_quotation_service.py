from sqlalchemy import select, func, asc, desc
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.quotations.quotation_request_models import QuotationRequestLineItem
from app.models.quotations.supplier_quotation_models import SupplierQuotation
from app.schemas.quotations.supplier_quotation_schemas import (
    SupplierQuotationOut,
    SupplierQuotationListData,
)
from app.core.exceptions import AppException, NotFoundError
from app.constants.error_codes import ErrorCode
from app.utils.decimal_utils import to_decimal, compute_margin, margin_percent

ALLOWED_SORT_FIELDS = {
    "created_at": SupplierQuotation.created_at,
    "supplier_price": SupplierQuotation.supplier_price,
    "client_price": SupplierQuotation.client_price,
    "supplier_date": SupplierQuotation.supplier_date,
    "status": SupplierQuotation.status,
}


def map_supplier_quotation(sq: SupplierQuotation) -> SupplierQuotationOut:
    return SupplierQuotationOut(
        id=sq.id,
        line_item_id=sq.line_item_id,
        company_id=sq.company_id,
        company_name=sq.company.name if sq.company else None,
        supplier_date=sq.supplier_date,
        supplier_price=to_decimal(sq.supplier_price),
        lead_time=sq.lead_time,
        client_date=sq.client_date,
        client_price=to_decimal(sq.client_price),
        margin=compute_margin(sq.client_price, sq.supplier_price),
        margin_percent=margin_percent(sq.client_price, sq.supplier_price),
        accepted=sq.accepted,
        status=sq.status,
        created_at=sq.created_at,
    )


async def get_supplier_quotation(db: AsyncSession, supplier_quotation_id: str) -> SupplierQuotationOut:
    sq = await db.get(SupplierQuotation, supplier_quotation_id)
    if not sq:
        raise NotFoundError(
            "Supplier quotation not found",
            ErrorCode.SUPPLIER_QUOTATION_NOT_FOUND,
        )
    return map_supplier_quotation(sq)


async def list_supplier_quotations(
    *,
    db: AsyncSession,
    quotation_id: str | None,
    line_item_id: str | None,
    company_id: str | None,
    accepted: bool | None,
    page: int,
    page_size: int,
    sort_by: str,
    order: str,
) -> SupplierQuotationListData:
    filters = []

    if quotation_id:
        filters.append(
            SupplierQuotation.line_item_id.in_(
                select(QuotationRequestLineItem.id).where(
                    QuotationRequestLineItem.quotation_request_id == quotation_id
                )
            )
        )

    if line_item_id:
        filters.append(SupplierQuotation.line_item_id == line_item_id)

    if company_id:
        filters.append(SupplierQuotation.company_id == company_id)

    if accepted is not None:
        filters.append(SupplierQuotation.accepted.is_(accepted))

    sort_col = ALLOWED_SORT_FIELDS.get(sort_by)
    if sort_col is None:
        raise AppException(400, "Invalid sort field", ErrorCode.VALIDATION_ERROR)

    order_by = desc(sort_col) if order == "desc" else asc(sort_col)

    rows = (
        await db.scalars(
            select(SupplierQuotation)
            .where(*filters)
            .order_by(order_by)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
    ).all()

    total = await db.scalar(
        select(func.count()).select_from(
            select(SupplierQuotation.id).where(*filters).subquery()
        )
    )

    return SupplierQuotationListData(
        total=total or 0,
        items=[map_supplier_quotation(sq) for sq in rows],
    )
