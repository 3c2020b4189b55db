# app/services/masters/product_category_service.py

from sqlalchemy import select, func, asc, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import MAX_ATTRIBUTES_PER_PRODUCT
from app.models.masters.product_category_models import ProductCategory
from app.schemas.masters.product_category_schemas import (
    ProductCategoryIn,
    ProductCategoryOut,
    ProductCategoryListData,
)
from app.core.exceptions import AppException, FormValidationError, NotFoundError
from app.constants.error_codes import ErrorCode
from app.forms.attributes import to_mapping_or_none, to_pairs
from app.forms.field_errors import FieldErrors
from app.utils.logger import get_logger
from app.validation.attribute_rules import MSG_ATTRIBUTE_KEY_REPEATED, duplicate_key_indexes

logger = get_logger(__name__)

ALLOWED_SORT_FIELDS = {
    "name": ProductCategory.name,
    "created_at": ProductCategory.created_at,
}


def _map_category(category: ProductCategory) -> ProductCategoryOut:
    return ProductCategoryOut(
        id=category.id,
        name=category.name,
        attributes=category.attributes,
        attribute_pairs=to_pairs(category.attributes),
        created_at=category.created_at,
        updated_at=category.updated_at,
    )


async def _get_category_or_404(db: AsyncSession, category_id: str) -> ProductCategory:
    category = await db.get(ProductCategory, category_id)
    if not category:
        raise NotFoundError(
            "Product category not found",
            ErrorCode.PRODUCT_CATEGORY_NOT_FOUND,
        )
    return category


def _attributes_or_raise(payload: ProductCategoryIn) -> dict | None:
    errors = FieldErrors()
    for i in duplicate_key_indexes(payload.attributes, MAX_ATTRIBUTES_PER_PRODUCT):
        errors.add(["attributes", i, "key"], MSG_ATTRIBUTE_KEY_REPEATED)
    if errors:
        raise FormValidationError(
            details={"status": "failure", "field_errors": errors.as_dict()}
        )
    return to_mapping_or_none(payload.attributes)


# ---------------- CREATE ----------------
async def create_category(
    db: AsyncSession,
    payload: ProductCategoryIn,
) -> ProductCategoryOut:
    category = ProductCategory(
        name=payload.name.strip(),
        attributes=_attributes_or_raise(payload),
    )
    db.add(category)
    await db.commit()
    await db.refresh(category)

    logger.info("Product category created", extra={"category_id": category.id})
    return _map_category(category)


# ---------------- GET ----------------
async def get_category(db: AsyncSession, category_id: str) -> ProductCategoryOut:
    return _map_category(await _get_category_or_404(db, category_id))


# ---------------- LIST ----------------
async def list_categories(
    *,
    db: AsyncSession,
    search: str | None,
    page: int,
    page_size: int,
    sort_by: str,
    order: str,
) -> ProductCategoryListData:
    filters = []
    if search:
        filters.append(ProductCategory.name.ilike(f"%{search}%"))

    sort_col = ALLOWED_SORT_FIELDS.get(sort_by)
    if sort_col is None:
        raise AppException(400, "Invalid sort field", ErrorCode.VALIDATION_ERROR)

    order_by = desc(sort_col) if order == "desc" else asc(sort_col)

    rows = (
        await db.scalars(
            select(ProductCategory)
            .where(*filters)
            .order_by(order_by)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
    ).all()

    total = await db.scalar(
        select(func.count()).select_from(
            select(ProductCategory.id).where(*filters).subquery()
        )
    )

    return ProductCategoryListData(
        total=total or 0,
        items=[_map_category(c) for c in rows],
    )


# ---------------- UPDATE ----------------
async def update_category(
    db: AsyncSession,
    category_id: str,
    payload: ProductCategoryIn,
) -> ProductCategoryOut:
    category = await _get_category_or_404(db, category_id)

    category.name = payload.name.strip()
    category.attributes = _attributes_or_raise(payload)

    await db.commit()
    await db.refresh(category)
    return _map_category(category)


# ---------------- DELETE ----------------
async def delete_category(db: AsyncSession, category_id: str) -> ProductCategoryOut:
    category = await _get_category_or_404(db, category_id)
    result = _map_category(category)

    await db.delete(category)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise AppException(
            409,
            "Product category is still used by products",
            ErrorCode.ENTITY_IN_USE,
        )

    logger.info("Product category deleted", extra={"category_id": category_id})
    return result
