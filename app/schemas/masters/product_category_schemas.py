# app/schemas/masters/product_category_schemas.py

from pydantic import BaseModel, Field
from typing import Any, Dict, Optional, List
from datetime import datetime

from app.schemas.masters.product_schemas import AttributePairOut
from app.schemas.quotations.quotation_form_schemas import AttributePairIn


class ProductCategoryIn(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    attributes: List[AttributePairIn] = Field(default_factory=list)


class ProductCategoryOut(BaseModel):
    id: str
    name: str
    attributes: Optional[Dict[str, Any]]
    attribute_pairs: List[AttributePairOut]

    created_at: datetime
    updated_at: Optional[datetime]


class ProductCategoryListData(BaseModel):
    total: int
    items: List[ProductCategoryOut]
