import os

# Config is read at import time.
os.environ["APP_ENV"] = "development"
os.environ["DB_TYPE"] = "sqlite"

from types import SimpleNamespace

import httpx
import pytest

from app.core.db import Database
from app.models.enums.company_type import CompanyType
from app.models.masters.company_models import Company
from app.models.masters.employee_models import Employee
from app.models.masters.product_category_models import ProductCategory
from app.models.masters.product_models import Product
from main import create_app


@pytest.fixture()
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'dashboard.db'}")
    db.connect()
    await db.create_all()
    try:
        yield db
    finally:
        await db.dispose()


@pytest.fixture()
async def session(database):
    async with database.session() as s:
        yield s


@pytest.fixture()
async def client(database):
    app = create_app(database)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture()
async def seeded(database):
    """Two companies, an employee of the client, one category and two products."""
    async with database.session() as s:
        client_co = Company(
            name="Blue Anchor Shipping",
            email="ops@blueanchor.com",
            phone="+30 210 555 0101",
            address="12 Akti Miaouli, Piraeus, 185 38",
            country="Greece",
            type=CompanyType.client,
        )
        supplier_co = Company(
            name="Harbour Chandlers",
            email="sales@harbourchandlers.com",
            phone="+44 23 8055 0199",
            address="4 Dock Gate, Southampton, SO14 3GG",
            country="United Kingdom",
            type=CompanyType.supplier,
        )
        s.add_all([client_co, supplier_co])
        await s.flush()

        employee = Employee(
            name="Maria Papadopoulou",
            mobile="+30 690 000 0001",
            email="maria@blueanchor.com",
            employee_position="Purchasing",
            position="Superintendent",
            company_id=client_co.id,
        )
        other_employee = Employee(
            name="Tom Rigby",
            mobile="+44 7700 900123",
            email="tom@harbourchandlers.com",
            employee_position="Sales",
            position="Account Manager",
            company_id=supplier_co.id,
        )
        category = ProductCategory(
            name="Deck Supplies",
            attributes={"Size": "", "Colour": ""},
        )
        s.add_all([employee, other_employee, category])
        await s.flush()

        rope = Product(
            name="Mooring Rope",
            ref_number=1001,
            description="Polypropylene, 3 strand",
            attributes={"Diameter": "24mm"},
            category_id=category.id,
        )
        paint = Product(
            name="Marine Paint",
            ref_number=1002,
            attributes=None,
            category_id=category.id,
        )
        s.add_all([rope, paint])
        await s.commit()

        return SimpleNamespace(
            client_id=client_co.id,
            supplier_id=supplier_co.id,
            employee_id=employee.id,
            other_employee_id=other_employee.id,
            category_id=category.id,
            rope_id=rope.id,
            paint_id=paint.id,
        )


@pytest.fixture()
def quotation_payload(seeded):
    """Builds a valid nested quotation submission; override keys per test."""

    def build(line_items=None, **overrides):
        payload = {
            "quotation_request_ref": "QR-2024-001",
            "quotation_request_date": "2024-03-15",
            "quotation_request_vessel": "MV Aegean Star",
            "company_id": seeded.client_id,
            "employee_id": seeded.employee_id,
            "quotation_request_line_items": line_items
            if line_items is not None
            else [
                {
                    "product_id": seeded.rope_id,
                    "quotation_request_line_item_quantity": 4,
                    "attributes": [{"key": "Diameter", "value": "24mm"}],
                }
            ],
        }
        payload.update(overrides)
        return payload

    return build


def new_product_item(name, category_id, quantity=1, ref="12-A", attributes=None):
    return {
        "product_id": "new",
        "new_product_name": name,
        "new_product_ref": ref,
        "new_product_description": f"{name} for deck maintenance",
        "new_product_category_id": category_id,
        "quotation_request_line_item_quantity": quantity,
        "attributes": attributes or [],
    }
