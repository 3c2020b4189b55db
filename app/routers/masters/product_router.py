# app/routers/masters/product_router.py

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.forms.request_body import read_submission
from app.schemas.masters.product_schemas import ProductOut, ProductListData
from app.services.masters.product_service import (
    create_product,
    list_products,
    get_product,
    update_product,
    delete_product,
)
from app.utils.response import APIResponse, FORM_ERROR_RESPONSES, success_response
from app.utils.logger import get_logger

router = APIRouter(prefix="/products", tags=["Products"])
logger = get_logger(__name__)

PRODUCT_NUMERIC_FIELDS = ("product_ref_number",)


@router.post(
    "/",
    response_model=APIResponse[ProductOut],
    status_code=201,
    responses=FORM_ERROR_RESPONSES,
)
async def create_product_api(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    payload = await read_submission(request, PRODUCT_NUMERIC_FIELDS)
    logger.info("Create product", extra={"product_name": payload.get("product_name")})
    product = await create_product(db, payload)
    return success_response("Product created successfully", product)


@router.get("/", response_model=APIResponse[ProductListData])
async def list_products_api(
    db: AsyncSession = Depends(get_db),
    search: str | None = Query(None, description="Search by name or description"),
    category_id: str | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    sort_by: str = Query("created_at"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
):
    data = await list_products(
        db=db,
        search=search,
        category_id=category_id,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        order=order,
    )
    return success_response("Products fetched successfully", data)


@router.get("/{product_id}", response_model=APIResponse[ProductOut])
async def get_product_api(
    product_id: str,
    db: AsyncSession = Depends(get_db),
):
    product = await get_product(db, product_id)
    return success_response("Product fetched successfully", product)


@router.put(
    "/{product_id}",
    response_model=APIResponse[ProductOut],
    responses=FORM_ERROR_RESPONSES,
)
async def update_product_api(
    product_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    payload = await read_submission(request, PRODUCT_NUMERIC_FIELDS)
    product = await update_product(db, product_id, payload)
    return success_response("Product updated successfully", product)


@router.delete("/{product_id}", response_model=APIResponse[ProductOut])
async def delete_product_api(
    product_id: str,
    db: AsyncSession = Depends(get_db),
):
    product = await delete_product(db, product_id)
    return success_response("Product deleted successfully", product)
