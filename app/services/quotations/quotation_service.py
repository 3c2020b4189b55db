from sqlalchemy import select, func, asc, desc, delete, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.masters.company_models import Company
from app.models.masters.employee_models import Employee
from app.models.masters.product_models import Product
from app.models.masters.product_category_models import ProductCategory
from app.models.quotations.quotation_request_models import (
    QuotationRequest,
    QuotationRequestLineItem,
)
from app.schemas.quotations.quotation_schemas import (
    QuotationOut,
    QuotationLineItemOut,
    QuotationListData,
    QuotationListItem,
    QuotationFormState,
    QuotationLineItemFormState,
    QuotationFormOptions,
    CompanyOption,
    EmployeeOption,
    AttributedOption,
)
from app.core.exceptions import AppException, NotFoundError
from app.constants.error_codes import ErrorCode
from app.forms.attributes import to_pairs
from app.services.quotations.supplier_quotation_service import map_supplier_quotation
from app.utils.logger import get_logger

logger = get_logger(__name__)

ALLOWED_SORT_FIELDS = {
    "created_at": QuotationRequest.created_at,
    "ref": QuotationRequest.ref,
    "request_date": QuotationRequest.request_date,
    "vessel": QuotationRequest.vessel,
}


async def _get_quotation_with_items(
    db: AsyncSession,
    quotation_id: str,
) -> QuotationRequest:
    result = await db.execute(
        select(QuotationRequest)
        .options(
            selectinload(QuotationRequest.line_items)
            .selectinload(QuotationRequestLineItem.product),
        )
        .where(QuotationRequest.id == quotation_id)
        .execution_options(populate_existing=True)
    )
    q = result.scalar_one_or_none()
    if not q:
        raise NotFoundError("Quotation not found", ErrorCode.QUOTATION_NOT_FOUND)
    return q


def _map_line_item(item: QuotationRequestLineItem) -> QuotationLineItemOut:
    return QuotationLineItemOut(
        id=item.id,
        product_id=item.product_id,
        product_name=item.product.name,
        product_ref_number=item.product.ref_number,
        quantity=item.quantity,
        attributes=item.attributes,
        attribute_pairs=to_pairs(item.attributes),
        supplier_quotations=[map_supplier_quotation(sq) for sq in item.supplier_quotations],
    )


def _map_quotation(q: QuotationRequest) -> QuotationOut:
    return QuotationOut(
        id=q.id,
        ref=q.ref,
        request_date=q.request_date,
        vessel=q.vessel,
        company_id=q.company_id,
        company_name=q.company.name if q.company else None,
        employee_id=q.employee_id,
        employee_name=q.employee.name if q.employee else None,
        created_at=q.created_at,
        updated_at=q.updated_at,
        line_items=[_map_line_item(i) for i in q.line_items],
    )


# ---------------- GET ----------------
async def get_quotation(db: AsyncSession, quotation_id: str) -> QuotationOut:
    q = await _get_quotation_with_items(db, quotation_id)
    return _map_quotation(q)


async def get_quotation_form_state(db: AsyncSession, quotation_id: str) -> QuotationFormState:
    q = await _get_quotation_with_items(db, quotation_id)
    return QuotationFormState(
        quotation_request_ref=q.ref,
        quotation_request_date=q.request_date,
        quotation_request_vessel=q.vessel,
        company_id=q.company_id,
        employee_id=q.employee_id,
        quotation_request_line_items=[
            QuotationLineItemFormState(
                quotation_request_line_item_id=i.id,
                product_id=i.product_id,
                quotation_request_line_item_quantity=i.quantity,
                attributes=to_pairs(i.attributes),
            )
            for i in q.line_items
        ],
    )


async def get_quotation_form_options(db: AsyncSession) -> QuotationFormOptions:
    companies = (await db.execute(
        select(Company.id, Company.name, Company.type).order_by(Company.name)
    )).all()
    employees = (await db.execute(
        select(Employee.id, Employee.name, Employee.company_id).order_by(Employee.name)
    )).all()
    categories = (await db.execute(
        select(ProductCategory.id, ProductCategory.name, ProductCategory.attributes)
        .order_by(ProductCategory.name)
    )).all()
    products = (await db.execute(
        select(Product.id, Product.name, Product.attributes).order_by(Product.name)
    )).all()

    return QuotationFormOptions(
        companies=[CompanyOption(id=r.id, name=r.name, type=r.type) for r in companies],
        employees=[
            EmployeeOption(id=r.id, name=r.name, company_id=r.company_id)
            for r in employees
        ],
        product_categories=[
            AttributedOption(id=r.id, name=r.name, attribute_pairs=to_pairs(r.attributes))
            for r in categories
        ],
        # Seeds the attribute rows of a line item when a product is picked.
        products=[
            AttributedOption(id=r.id, name=r.name, attribute_pairs=to_pairs(r.attributes))
            for r in products
        ],
    )


# ---------------- LIST ----------------
async def list_quotations(
    *,
    db: AsyncSession,
    search: str | None,
    company_id: str | None,
    page: int,
    page_size: int,
    sort_by: str,
    order: str,
) -> QuotationListData:
    filters = []

    if search:
        filters.append(
            or_(
                QuotationRequest.ref.ilike(f"%{search}%"),
                QuotationRequest.vessel.ilike(f"%{search}%"),
                Company.name.ilike(f"%{search}%"),
            )
        )

    if company_id:
        filters.append(QuotationRequest.company_id == company_id)

    sort_col = ALLOWED_SORT_FIELDS.get(sort_by)
    if sort_col is None:
        raise AppException(400, "Invalid sort field", ErrorCode.VALIDATION_ERROR)

    order_by = desc(sort_col) if order == "desc" else asc(sort_col)

    items_count = (
        select(func.count(QuotationRequestLineItem.id))
        .where(QuotationRequestLineItem.quotation_request_id == QuotationRequest.id)
        .correlate(QuotationRequest)
        .scalar_subquery()
    )

    rows = (
        await db.execute(
            select(
                QuotationRequest.id,
                QuotationRequest.ref,
                QuotationRequest.request_date,
                QuotationRequest.vessel,
                QuotationRequest.company_id,
                Company.name.label("company_name"),
                QuotationRequest.employee_id,
                Employee.name.label("employee_name"),
                items_count.label("items_count"),
                QuotationRequest.created_at,
            )
            .join(Company, Company.id == QuotationRequest.company_id)
            .join(Employee, Employee.id == QuotationRequest.employee_id)
            .where(*filters)
            .order_by(order_by)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
    ).all()

    total = await db.scalar(
        select(func.count()).select_from(
            select(QuotationRequest.id)
            .join(Company, Company.id == QuotationRequest.company_id)
            .where(*filters)
            .subquery()
        )
    )

    return QuotationListData(
        total=total or 0,
        items=[
            QuotationListItem(
                id=r.id,
                ref=r.ref,
                request_date=r.request_date,
                vessel=r.vessel,
                company_id=r.company_id,
                company_name=r.company_name,
                employee_id=r.employee_id,
                employee_name=r.employee_name,
                items_count=r.items_count,
                created_at=r.created_at,
            )
            for r in rows
        ],
    )


# ---------------- DELETE ----------------
async def delete_quotation(db: AsyncSession, quotation_id: str) -> QuotationOut:
    q = await _get_quotation_with_items(db, quotation_id)
    result = _map_quotation(q)

    await db.execute(delete(QuotationRequest).where(QuotationRequest.id == quotation_id))
    await db.commit()

    logger.info("Quotation deleted", extra={"quotation_id": quotation_id})
    return result
