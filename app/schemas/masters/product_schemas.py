# app/schemas/masters/product_schemas.py

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, Optional, List
from datetime import datetime

from app.schemas.quotations.quotation_form_schemas import AttributePairIn


class AttributePairOut(BaseModel):
    key: str
    value: Any


# =====================================================
# FORM PAYLOAD (CREATE / UPDATE)
# =====================================================

class ProductFormIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    product_name: Optional[str] = Field(default=None, validate_default=True)
    product_ref_number: Optional[int] = Field(default=None, validate_default=True)
    product_description: Optional[str] = Field(default=None, max_length=500)
    product_attributes: List[AttributePairIn] = Field(default_factory=list)
    product_category_id: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("product_name")
    @classmethod
    def _name(cls, v):
        text = (v or "").strip()
        if not text:
            raise ValueError("Product name is required")
        if len(text) < 2:
            raise ValueError("Must be min 2 chars")
        if len(text) > 100:
            raise ValueError("Must be max 100 chars")
        return text

    @field_validator("product_ref_number")
    @classmethod
    def _ref(cls, v):
        if v is None:
            raise ValueError("Product reference number is required")
        if v <= 0:
            raise ValueError("Must be a positive number")
        return v

    @field_validator("product_description", mode="before")
    @classmethod
    def _description(cls, v):
        if v is None:
            return None
        return str(v).strip() or None

    @field_validator("product_attributes", mode="before")
    @classmethod
    def _attributes(cls, v):
        if v is None:
            return []
        if isinstance(v, list):
            return [row if row is not None else {} for row in v]
        return v

    @field_validator("product_category_id")
    @classmethod
    def _category(cls, v):
        if not v or not str(v).strip():
            raise ValueError("Product category ID is required")
        return str(v).strip()


# =====================================================
# RESPONSES
# =====================================================

class ProductOut(BaseModel):
    id: str
    name: str
    ref_number: int
    description: Optional[str]
    attributes: Optional[Dict[str, Any]]
    attribute_pairs: List[AttributePairOut]
    category_id: str
    category_name: Optional[str]

    created_at: datetime
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class ProductListData(BaseModel):
    total: int
    items: List[ProductOut]
