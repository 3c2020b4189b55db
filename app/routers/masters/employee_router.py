# app/routers/masters/employee_router.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.masters.employee_schemas import (
    EmployeeIn,
    EmployeeOut,
    EmployeeListData,
)
from app.services.masters.employee_service import (
    create_employee,
    list_employees,
    get_employee,
    update_employee,
    delete_employee,
)
from app.utils.response import APIResponse, success_response

router = APIRouter(prefix="/employees", tags=["Employees"])


@router.post("/", response_model=APIResponse[EmployeeOut], status_code=201)
async def create_employee_api(
    payload: EmployeeIn,
    db: AsyncSession = Depends(get_db),
):
    employee = await create_employee(db, payload)
    return success_response("Employee created successfully", employee)


@router.get("/", response_model=APIResponse[EmployeeListData])
async def list_employees_api(
    db: AsyncSession = Depends(get_db),
    search: str | None = Query(None, description="Search by name or email"),
    company_id: str | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    sort_by: str = Query("name"),
    order: str = Query("asc", pattern="^(asc|desc)$"),
):
    data = await list_employees(
        db=db,
        search=search,
        company_id=company_id,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        order=order,
    )
    return success_response("Employees fetched successfully", data)


@router.get("/{employee_id}", response_model=APIResponse[EmployeeOut])
async def get_employee_api(
    employee_id: str,
    db: AsyncSession = Depends(get_db),
):
    employee = await get_employee(db, employee_id)
    return success_response("Employee fetched successfully", employee)


@router.put("/{employee_id}", response_model=APIResponse[EmployeeOut])
async def update_employee_api(
    employee_id: str,
    payload: EmployeeIn,
    db: AsyncSession = Depends(get_db),
):
    employee = await update_employee(db, employee_id, payload)
    return success_response("Employee updated successfully", employee)


@router.delete("/{employee_id}", response_model=APIResponse[EmployeeOut])
async def delete_employee_api(
    employee_id: str,
    db: AsyncSession = Depends(get_db),
):
    employee = await delete_employee(db, employee_id)
    return success_response("Employee deleted successfully", employee)
