# app/services/masters/company_service.py

from sqlalchemy import select, func, asc, desc, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.masters.company_models import Company
from app.models.enums.company_type import CompanyType
from app.schemas.masters.company_schemas import (
    CompanyIn,
    CompanyOut,
    CompanyListData,
)
from app.core.exceptions import AppException, NotFoundError
from app.constants.error_codes import ErrorCode
from app.utils.logger import get_logger

logger = get_logger(__name__)

ALLOWED_SORT_FIELDS = {
    "name": Company.name,
    "email": Company.email,
    "country": Company.country,
    "type": Company.type,
    "created_at": Company.created_at,
}


def _map_company(company: Company) -> CompanyOut:
    return CompanyOut(
        id=company.id,
        name=company.name,
        email=company.email,
        phone=company.phone,
        address=company.address,
        country=company.country,
        type=company.type,
        created_at=company.created_at,
        updated_at=company.updated_at,
    )


async def _get_company_or_404(db: AsyncSession, company_id: str) -> Company:
    company = await db.get(Company, company_id)
    if not company:
        raise NotFoundError("Company not found", ErrorCode.COMPANY_NOT_FOUND)
    return company


# ---------------- CREATE ----------------
async def create_company(db: AsyncSession, payload: CompanyIn) -> CompanyOut:
    company = Company(
        name=payload.name.strip(),
        email=payload.email,
        phone=payload.phone,
        address=payload.display_address(),
        country=payload.country.strip(),
        type=payload.type,
    )
    db.add(company)
    await db.commit()
    await db.refresh(company)

    logger.info("Company created", extra={"company_id": company.id})
    return _map_company(company)


# ---------------- GET ----------------
async def get_company(db: AsyncSession, company_id: str) -> CompanyOut:
    return _map_company(await _get_company_or_404(db, company_id))


# ---------------- LIST ----------------
async def list_companies(
    *,
    db: AsyncSession,
    search: str | None,
    company_type: CompanyType | None,
    page: int,
    page_size: int,
    sort_by: str,
    order: str,
) -> CompanyListData:
    filters = []

    if search:
        filters.append(
            or_(
                Company.name.ilike(f"%{search}%"),
                Company.email.ilike(f"%{search}%"),
                Company.country.ilike(f"%{search}%"),
            )
        )

    if company_type is not None:
        filters.append(Company.type == company_type)

    sort_col = ALLOWED_SORT_FIELDS.get(sort_by)
    if sort_col is None:
        raise AppException(400, "Invalid sort field", ErrorCode.VALIDATION_ERROR)

    order_by = desc(sort_col) if order == "desc" else asc(sort_col)

    rows = (
        await db.scalars(
            select(Company)
            .where(*filters)
            .order_by(order_by)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
    ).all()

    total = await db.scalar(
        select(func.count()).select_from(
            select(Company.id).where(*filters).subquery()
        )
    )

    return CompanyListData(
        total=total or 0,
        items=[_map_company(c) for c in rows],
    )


# ---------------- UPDATE ----------------
async def update_company(
    db: AsyncSession,
    company_id: str,
    payload: CompanyIn,
) -> CompanyOut:
    company = await _get_company_or_404(db, company_id)

    company.name = payload.name.strip()
    company.email = payload.email
    company.phone = payload.phone
    company.address = payload.display_address()
    company.country = payload.country.strip()
    company.type = payload.type

    await db.commit()
    await db.refresh(company)
    return _map_company(company)


# ---------------- DELETE ----------------
async def delete_company(db: AsyncSession, company_id: str) -> CompanyOut:
    company = await _get_company_or_404(db, company_id)
    result = _map_company(company)

    await db.delete(company)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise AppException(
            409,
            "Company is still referenced by employees or quotations",
            ErrorCode.ENTITY_IN_USE,
        )

    logger.info("Company deleted", extra={"company_id": company_id})
    return result
