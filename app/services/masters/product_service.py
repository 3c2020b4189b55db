# app/services/masters/product_service.py

from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, asc, desc, or_
from sqlalchemy.exc import IntegrityError

from app.models.masters.product_models import Product
from app.schemas.masters.product_schemas import (
    ProductFormIn,
    ProductOut,
    ProductListData,
)
from app.core.exceptions import AppException, FormValidationError, NotFoundError
from app.constants.error_codes import ErrorCode
from app.forms.attributes import to_mapping_or_none, to_pairs
from app.utils.logger import get_logger
from app.validation.product_validator import MSG_NAME_TAKEN, build_product_validator
from app.validation.snapshot import load_product_snapshot

logger = get_logger(__name__)

ALLOWED_SORT_FIELDS = {
    "created_at": Product.created_at,
    "name": Product.name,
    "ref_number": Product.ref_number,
}


def _map_product(product: Product) -> ProductOut:
    return ProductOut(
        id=product.id,
        name=product.name,
        ref_number=product.ref_number,
        description=product.description,
        attributes=product.attributes,
        attribute_pairs=to_pairs(product.attributes),
        category_id=product.category_id,
        category_name=product.category.name if product.category else None,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


async def _get_product_or_404(db: AsyncSession, product_id: str) -> Product:
    product = await db.get(Product, product_id)
    if not product:
        raise NotFoundError("Product not found", ErrorCode.PRODUCT_NOT_FOUND)
    return product


async def _validate(
    db: AsyncSession,
    payload: Dict[str, Any],
    product_id: Optional[str] = None,
) -> ProductFormIn:
    snapshot = await load_product_snapshot(db)
    result = build_product_validator(snapshot, product_id).validate(payload)
    if not result.ok:
        raise FormValidationError(
            details={
                "status": "failure",
                "field_errors": result.field_errors,
                "form_errors": [],
                "values": payload,
            }
        )
    return result.value


def _apply(product: Product, form: ProductFormIn) -> None:
    product.name = form.product_name
    product.ref_number = form.product_ref_number
    product.description = form.product_description
    product.attributes = to_mapping_or_none(form.product_attributes)
    product.category_id = form.product_category_id


async def _commit_product(db: AsyncSession, product: Product) -> None:
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent save of the same name.
        await db.rollback()
        raise AppException(409, MSG_NAME_TAKEN, ErrorCode.PRODUCT_NAME_EXISTS)
    await db.refresh(product)
    await db.refresh(product, attribute_names=["category"])


# ---------------- CREATE ----------------
async def create_product(db: AsyncSession, payload: Dict[str, Any]) -> ProductOut:
    form = await _validate(db, payload)

    product = Product()
    _apply(product, form)
    db.add(product)

    await _commit_product(db, product)

    logger.info("Product created", extra={"product_id": product.id})
    return _map_product(product)


# ---------------- GET ----------------
async def get_product(db: AsyncSession, product_id: str) -> ProductOut:
    return _map_product(await _get_product_or_404(db, product_id))


# ---------------- LIST ----------------
async def list_products(
    *,
    db: AsyncSession,
    search: str | None,
    category_id: str | None,
    page: int,
    page_size: int,
    sort_by: str,
    order: str,
) -> ProductListData:
    filters = []

    if search:
        filters.append(
            or_(
                Product.name.ilike(f"%{search}%"),
                Product.description.ilike(f"%{search}%"),
            )
        )

    if category_id:
        filters.append(Product.category_id == category_id)

    sort_col = ALLOWED_SORT_FIELDS.get(sort_by)
    if sort_col is None:
        raise AppException(400, "Invalid sort field", ErrorCode.VALIDATION_ERROR)

    order_by = desc(sort_col) if order == "desc" else asc(sort_col)

    rows = (
        await db.scalars(
            select(Product)
            .where(*filters)
            .order_by(order_by)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
    ).all()

    total = await db.scalar(
        select(func.count()).select_from(
            select(Product.id).where(*filters).subquery()
        )
    )

    return ProductListData(
        total=total or 0,
        items=[_map_product(p) for p in rows],
    )


# ---------------- UPDATE ----------------
async def update_product(
    db: AsyncSession,
    product_id: str,
    payload: Dict[str, Any],
) -> ProductOut:
    product = await _get_product_or_404(db, product_id)
    form = await _validate(db, payload, product_id)

    _apply(product, form)
    await _commit_product(db, product)

    logger.info("Product updated", extra={"product_id": product_id})
    return _map_product(product)


# ---------------- DELETE ----------------
async def delete_product(db: AsyncSession, product_id: str) -> ProductOut:
    product = await _get_product_or_404(db, product_id)
    result = _map_product(product)

    await db.delete(product)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise AppException(
            409,
            "Product is used by quotation line items",
            ErrorCode.ENTITY_IN_USE,
        )

    logger.info("Product deleted", extra={"product_id": product_id})
    return result
