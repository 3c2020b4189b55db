# app/validation/snapshot.py

from typing import Any, Dict, List, Optional, Set

from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories import quotation_repository as repo


def fold_name(name: Optional[str]) -> str:
    """Normalized form used by every case-insensitive uniqueness check."""
    return (name or "").strip().lower()


class ExistingProduct(BaseModel):
    id: str
    name: str
    attributes: Optional[Dict[str, Any]] = None


class ProductSnapshot(BaseModel):
    """Point-in-time view of persisted products for uniqueness checks.

    Reads are not locked; the unique index on products is the real guard.
    """

    existing_products: List[ExistingProduct] = Field(default_factory=list)
    category_ids: Set[str] = Field(default_factory=set)

    @property
    def existing_product_names(self) -> Set[str]:
        return {fold_name(p.name) for p in self.existing_products}

    def names_by_id(self) -> Dict[str, str]:
        return {p.id: p.name for p in self.existing_products}


class QuotationSnapshot(ProductSnapshot):
    company_ids: Set[str] = Field(default_factory=set)
    employee_companies: Dict[str, str] = Field(default_factory=dict)


async def load_product_snapshot(db: AsyncSession) -> ProductSnapshot:
    products = await repo.find_products(db)
    return ProductSnapshot(
        existing_products=[
            ExistingProduct(id=p.id, name=p.name, attributes=p.attributes)
            for p in products
        ],
        category_ids=await repo.find_category_ids(db),
    )


async def load_quotation_snapshot(db: AsyncSession) -> QuotationSnapshot:
    products = await repo.find_products(db)
    return QuotationSnapshot(
        existing_products=[
            ExistingProduct(id=p.id, name=p.name, attributes=p.attributes)
            for p in products
        ],
        category_ids=await repo.find_category_ids(db),
        company_ids=await repo.find_company_ids(db),
        employee_companies=await repo.find_employee_companies(db),
    )
