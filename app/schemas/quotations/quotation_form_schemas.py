# app/schemas/quotations/quotation_form_schemas.py

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.config import MAX_LINE_ITEMS
from app.utils.ids import is_uuid

NEW_PRODUCT = "new"


def _required_text(
    value: Optional[str],
    *,
    required: str,
    min_len: int = 1,
    max_len: int | None = None,
    too_short: str | None = None,
    too_long: str | None = None,
) -> str:
    if value is None or not str(value).strip():
        raise ValueError(required)
    text = str(value).strip()
    if len(text) < min_len:
        raise ValueError(too_short or required)
    if max_len is not None and len(text) > max_len:
        raise ValueError(too_long or f"Must be max {max_len} characters")
    return text


def _required_uuid(value: Optional[str], *, required: str, invalid: str) -> str:
    if value is None or not str(value).strip():
        raise ValueError(required)
    if not is_uuid(str(value).strip()):
        raise ValueError(invalid)
    return str(value).strip()


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


# =====================================================
# LINE ITEM ATTRIBUTES
# =====================================================

class AttributePairIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    key: Optional[str] = Field(default=None, max_length=100)
    value: Optional[str] = Field(default=None, max_length=500)

    @field_validator("key", "value", mode="before")
    @classmethod
    def _stringify(cls, v):
        if v is None:
            return None
        return str(v)


# =====================================================
# LINE ITEMS
# =====================================================

class QuotationLineItemIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Present when editing; never reused, line items are recreated on save.
    quotation_request_line_item_id: Optional[str] = None

    product_id: Optional[str] = Field(default=None, validate_default=True)
    quotation_request_line_item_quantity: Optional[int] = Field(
        default=None, validate_default=True
    )

    new_product_name: Optional[str] = None
    new_product_ref: Optional[str] = None
    new_product_description: Optional[str] = Field(default=None, max_length=500)
    new_product_category_id: Optional[str] = None

    attributes: List[AttributePairIn] = Field(default_factory=list)

    @field_validator("product_id")
    @classmethod
    def _product_id(cls, v):
        if v is not None and str(v).strip() == NEW_PRODUCT:
            return NEW_PRODUCT
        return _required_uuid(
            v,
            required="Please select a product",
            invalid="Invalid product selection",
        )

    @field_validator("quotation_request_line_item_quantity")
    @classmethod
    def _quantity(cls, v):
        if v is None:
            raise ValueError("Quantity is required")
        if v < 1:
            raise ValueError("Quantity must be at least 1")
        if v > 10000:
            raise ValueError("Quantity cannot exceed 10,000")
        return v

    @field_validator(
        "new_product_name",
        "new_product_ref",
        "new_product_description",
        "new_product_category_id",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, v):
        if v is None:
            return None
        return _optional_text(str(v))

    @field_validator("attributes", mode="before")
    @classmethod
    def _attributes(cls, v):
        if v is None:
            return []
        # Sparse form indexes leave holes; an empty row is just an unused row.
        if isinstance(v, list):
            return [row if row is not None else {} for row in v]
        return v

    @property
    def is_new_product(self) -> bool:
        return self.product_id == NEW_PRODUCT


# =====================================================
# QUOTATION FORM
# =====================================================

class QuotationFormIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    quotation_request_ref: Optional[str] = Field(default=None, validate_default=True)
    quotation_request_date: Optional[date] = Field(default=None, validate_default=True)
    quotation_request_vessel: Optional[str] = Field(default=None, validate_default=True)
    company_id: Optional[str] = Field(default=None, validate_default=True)
    employee_id: Optional[str] = Field(default=None, validate_default=True)
    quotation_request_line_items: Optional[List[QuotationLineItemIn]] = Field(
        default=None, validate_default=True
    )

    @field_validator("quotation_request_ref")
    @classmethod
    def _ref(cls, v):
        return _required_text(
            v,
            required="Reference is required",
            max_len=50,
            too_long="Reference must be max 50 characters",
        )

    @field_validator("quotation_request_date", mode="before")
    @classmethod
    def _date(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("Date is required")
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, date):
            return v
        text = str(v).strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            raise ValueError("Please enter a valid date")

    @field_validator("quotation_request_vessel")
    @classmethod
    def _vessel(cls, v):
        return _required_text(
            v,
            required="Vessel name is required",
            min_len=2,
            max_len=100,
            too_short="Vessel name must be at least 2 characters",
            too_long="Vessel name must be max 100 characters",
        )

    @field_validator("company_id")
    @classmethod
    def _company(cls, v):
        return _required_uuid(
            v, required="Please select a company", invalid="Invalid company selection"
        )

    @field_validator("employee_id")
    @classmethod
    def _employee(cls, v):
        return _required_uuid(
            v, required="Please select an employee", invalid="Invalid employee selection"
        )

    @field_validator("quotation_request_line_items")
    @classmethod
    def _line_items(cls, v):
        if not v:
            raise ValueError("At least one line item is required")
        if len(v) > MAX_LINE_ITEMS:
            raise ValueError(f"Cannot exceed {MAX_LINE_ITEMS} line items")
        return v
