# app/routers/masters/company_router.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.models.enums.company_type import CompanyType
from app.schemas.masters.company_schemas import (
    CompanyIn,
    CompanyOut,
    CompanyListData,
)
from app.services.masters.company_service import (
    create_company,
    list_companies,
    get_company,
    update_company,
    delete_company,
)
from app.utils.response import APIResponse, success_response
from app.utils.logger import get_logger

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = get_logger(__name__)


@router.post("/", response_model=APIResponse[CompanyOut], status_code=201)
async def create_company_api(
    payload: CompanyIn,
    db: AsyncSession = Depends(get_db),
):
    logger.info("Create company", extra={"company_name": payload.name})
    company = await create_company(db, payload)
    return success_response("Company created successfully", company)


@router.get("/", response_model=APIResponse[CompanyListData])
async def list_companies_api(
    db: AsyncSession = Depends(get_db),
    search: str | None = Query(None, description="Search by name, email or country"),
    type: int | None = Query(None, ge=1, le=3, description="1 two-way, 2 supplier, 3 client"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    sort_by: str = Query("name"),
    order: str = Query("asc", pattern="^(asc|desc)$"),
):
    data = await list_companies(
        db=db,
        search=search,
        company_type=CompanyType(type) if type is not None else None,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        order=order,
    )
    return success_response("Companies fetched successfully", data)


@router.get("/{company_id}", response_model=APIResponse[CompanyOut])
async def get_company_api(
    company_id: str,
    db: AsyncSession = Depends(get_db),
):
    company = await get_company(db, company_id)
    return success_response("Company fetched successfully", company)


@router.put("/{company_id}", response_model=APIResponse[CompanyOut])
async def update_company_api(
    company_id: str,
    payload: CompanyIn,
    db: AsyncSession = Depends(get_db),
):
    company = await update_company(db, company_id, payload)
    return success_response("Company updated successfully", company)


@router.delete("/{company_id}", response_model=APIResponse[CompanyOut])
async def delete_company_api(
    company_id: str,
    db: AsyncSession = Depends(get_db),
):
    company = await delete_company(db, company_id)
    return success_response("Company deleted successfully", company)
