# app/routers/masters/product_category_router.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.masters.product_category_schemas import (
    ProductCategoryIn,
    ProductCategoryOut,
    ProductCategoryListData,
)
from app.services.masters.product_category_service import (
    create_category,
    list_categories,
    get_category,
    update_category,
    delete_category,
)
from app.utils.response import APIResponse, success_response

router = APIRouter(prefix="/product-categories", tags=["Product Categories"])


@router.post("/", response_model=APIResponse[ProductCategoryOut], status_code=201)
async def create_category_api(
    payload: ProductCategoryIn,
    db: AsyncSession = Depends(get_db),
):
    category = await create_category(db, payload)
    return success_response("Product category created successfully", category)


@router.get("/", response_model=APIResponse[ProductCategoryListData])
async def list_categories_api(
    db: AsyncSession = Depends(get_db),
    search: str | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    sort_by: str = Query("name"),
    order: str = Query("asc", pattern="^(asc|desc)$"),
):
    data = await list_categories(
        db=db,
        search=search,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        order=order,
    )
    return success_response("Product categories fetched successfully", data)


@router.get("/{category_id}", response_model=APIResponse[ProductCategoryOut])
async def get_category_api(
    category_id: str,
    db: AsyncSession = Depends(get_db),
):
    category = await get_category(db, category_id)
    return success_response("Product category fetched successfully", category)


@router.put("/{category_id}", response_model=APIResponse[ProductCategoryOut])
async def update_category_api(
    category_id: str,
    payload: ProductCategoryIn,
    db: AsyncSession = Depends(get_db),
):
    category = await update_category(db, category_id, payload)
    return success_response("Product category updated successfully", category)


@router.delete("/{category_id}", response_model=APIResponse[ProductCategoryOut])
async def delete_category_api(
    category_id: str,
    db: AsyncSession = Depends(get_db),
):
    category = await delete_category(db, category_id)
    return success_response("Product category deleted successfully", category)
