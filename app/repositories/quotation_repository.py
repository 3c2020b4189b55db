# app/repositories/quotation_repository.py
#
# Storage primitives for quotation submissions. Every write helper flushes so
# constraint violations surface inside the caller's transaction.

from typing import Any, Awaitable, Callable, Dict, Set, TypeVar

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import noload

from app.models.masters.company_models import Company
from app.models.masters.employee_models import Employee
from app.models.masters.product_models import Product
from app.models.masters.product_category_models import ProductCategory
from app.models.quotations.quotation_request_models import (
    QuotationRequest,
    QuotationRequestLineItem,
)
from app.utils.ids import generate_uuid

T = TypeVar("T")


# =====================================================
# READS (validation snapshot)
# =====================================================
async def find_products(db: AsyncSession):
    stmt = select(Product.id, Product.name, Product.attributes).order_by(Product.name)
    return (await db.execute(stmt)).all()


async def find_category_ids(db: AsyncSession) -> Set[str]:
    return set((await db.scalars(select(ProductCategory.id))).all())


async def find_company_ids(db: AsyncSession) -> Set[str]:
    return set((await db.scalars(select(Company.id))).all())


async def find_employee_companies(db: AsyncSession) -> Dict[str, str]:
    rows = (await db.execute(select(Employee.id, Employee.company_id))).all()
    return {r.id: r.company_id for r in rows}


# =====================================================
# WRITES
# =====================================================
async def create_product(db: AsyncSession, data: Dict[str, Any]) -> Product:
    product = Product(id=generate_uuid(), **data)
    db.add(product)
    await db.flush()
    return product


async def upsert_quotation(
    db: AsyncSession,
    quotation_id: str,
    data: Dict[str, Any],
) -> QuotationRequest:
    quotation = await db.get(
        QuotationRequest,
        quotation_id,
        options=[noload(QuotationRequest.line_items)],
    )
    if quotation is None:
        quotation = QuotationRequest(id=quotation_id, **data)
        db.add(quotation)
    else:
        for field, value in data.items():
            setattr(quotation, field, value)

    await db.flush()
    return quotation


async def delete_line_items(db: AsyncSession, quotation_id: str) -> int:
    result = await db.execute(
        delete(QuotationRequestLineItem)
        .where(QuotationRequestLineItem.quotation_request_id == quotation_id)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount or 0


async def create_line_item(
    db: AsyncSession,
    data: Dict[str, Any],
) -> QuotationRequestLineItem:
    item = QuotationRequestLineItem(id=generate_uuid(), **data)
    db.add(item)
    await db.flush()
    return item


# =====================================================
# TRANSACTION BOUNDARY
# =====================================================
async def run_in_transaction(
    db: AsyncSession,
    fn: Callable[[AsyncSession], Awaitable[T]],
) -> T:
    """Run ``fn`` in one transaction: commit on return, roll back on raise."""
    if db.in_transaction():
        # Close the read-only transaction opened by earlier snapshot queries.
        await db.commit()

    async with db.begin():
        return await fn(db)
