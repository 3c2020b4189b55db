# app/services/masters/employee_service.py

from sqlalchemy import select, func, asc, desc, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.masters.company_models import Company
from app.models.masters.employee_models import Employee
from app.schemas.masters.employee_schemas import (
    EmployeeIn,
    EmployeeOut,
    EmployeeListData,
)
from app.core.exceptions import AppException, NotFoundError
from app.constants.error_codes import ErrorCode
from app.utils.logger import get_logger

logger = get_logger(__name__)

ALLOWED_SORT_FIELDS = {
    "name": Employee.name,
    "email": Employee.email,
    "position": Employee.position,
    "created_at": Employee.created_at,
}


def split_name(name: str) -> tuple[str, str]:
    first, _, last = (name or "").strip().partition(" ")
    return first, last.strip()


def _map_employee(employee: Employee) -> EmployeeOut:
    first_name, last_name = split_name(employee.name)
    return EmployeeOut(
        id=employee.id,
        name=employee.name,
        first_name=first_name,
        last_name=last_name,
        mobile=employee.mobile,
        email=employee.email,
        employee_position=employee.employee_position,
        position=employee.position,
        company_id=employee.company_id,
        company_name=employee.company.name if employee.company else None,
        created_at=employee.created_at,
        updated_at=employee.updated_at,
    )


async def _get_employee_or_404(db: AsyncSession, employee_id: str) -> Employee:
    employee = await db.get(Employee, employee_id)
    if not employee:
        raise NotFoundError("Employee not found", ErrorCode.EMPLOYEE_NOT_FOUND)
    return employee


async def _ensure_company(db: AsyncSession, company_id: str) -> None:
    exists = await db.scalar(select(Company.id).where(Company.id == company_id))
    if not exists:
        raise NotFoundError("Company not found", ErrorCode.COMPANY_NOT_FOUND)


def _apply(employee: Employee, payload: EmployeeIn) -> None:
    employee.name = payload.full_name()
    employee.mobile = payload.employee_mobile
    employee.email = payload.employee_email
    employee.employee_position = payload.employee_position
    employee.position = payload.position
    employee.company_id = payload.company_id


# ---------------- CREATE ----------------
async def create_employee(db: AsyncSession, payload: EmployeeIn) -> EmployeeOut:
    await _ensure_company(db, payload.company_id)

    employee = Employee()
    _apply(employee, payload)
    db.add(employee)

    await db.commit()
    await db.refresh(employee)
    await db.refresh(employee, attribute_names=["company"])

    logger.info("Employee created", extra={"employee_id": employee.id})
    return _map_employee(employee)


# ---------------- GET ----------------
async def get_employee(db: AsyncSession, employee_id: str) -> EmployeeOut:
    return _map_employee(await _get_employee_or_404(db, employee_id))


# ---------------- LIST ----------------
async def list_employees(
    *,
    db: AsyncSession,
    search: str | None,
    company_id: str | None,
    page: int,
    page_size: int,
    sort_by: str,
    order: str,
) -> EmployeeListData:
    filters = []

    if search:
        filters.append(
            or_(
                Employee.name.ilike(f"%{search}%"),
                Employee.email.ilike(f"%{search}%"),
            )
        )

    if company_id:
        filters.append(Employee.company_id == company_id)

    sort_col = ALLOWED_SORT_FIELDS.get(sort_by)
    if sort_col is None:
        raise AppException(400, "Invalid sort field", ErrorCode.VALIDATION_ERROR)

    order_by = desc(sort_col) if order == "desc" else asc(sort_col)

    rows = (
        await db.scalars(
            select(Employee)
            .where(*filters)
            .order_by(order_by)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
    ).all()

    total = await db.scalar(
        select(func.count()).select_from(
            select(Employee.id).where(*filters).subquery()
        )
    )

    return EmployeeListData(
        total=total or 0,
        items=[_map_employee(e) for e in rows],
    )


# ---------------- UPDATE ----------------
async def update_employee(
    db: AsyncSession,
    employee_id: str,
    payload: EmployeeIn,
) -> EmployeeOut:
    employee = await _get_employee_or_404(db, employee_id)
    await _ensure_company(db, payload.company_id)

    _apply(employee, payload)

    await db.commit()
    await db.refresh(employee)
    await db.refresh(employee, attribute_names=["company"])
    return _map_employee(employee)


# ---------------- DELETE ----------------
async def delete_employee(db: AsyncSession, employee_id: str) -> EmployeeOut:
    employee = await _get_employee_or_404(db, employee_id)
    result = _map_employee(employee)

    await db.delete(employee)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise AppException(
            409,
            "Employee is still referenced by quotations",
            ErrorCode.ENTITY_IN_USE,
        )

    logger.info("Employee deleted", extra={"employee_id": employee_id})
    return result
