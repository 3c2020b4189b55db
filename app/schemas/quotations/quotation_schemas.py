from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from datetime import datetime, date

from app.models.enums.company_type import CompanyType
from app.schemas.masters.product_schemas import AttributePairOut
from app.schemas.quotations.supplier_quotation_schemas import SupplierQuotationOut

# =====================================================
# LINE ITEM RESPONSES
# =====================================================

class QuotationLineItemOut(BaseModel):
    id: str
    product_id: str
    product_name: str
    product_ref_number: int
    quantity: int
    attributes: Optional[Dict[str, Any]]
    attribute_pairs: List[AttributePairOut]
    supplier_quotations: List[SupplierQuotationOut]


# =====================================================
# QUOTATION DETAIL
# =====================================================

class QuotationOut(BaseModel):
    id: str
    ref: str
    request_date: date
    vessel: str

    company_id: str
    company_name: Optional[str]
    employee_id: str
    employee_name: Optional[str]

    created_at: datetime
    updated_at: Optional[datetime]

    line_items: List[QuotationLineItemOut]


# =====================================================
# QUOTATION LIST RESPONSE
# =====================================================

class QuotationListItem(BaseModel):
    id: str
    ref: str
    request_date: date
    vessel: str
    company_id: str
    company_name: str
    employee_id: str
    employee_name: str
    items_count: int
    created_at: datetime


class QuotationListData(BaseModel):
    total: int
    items: List[QuotationListItem]


# =====================================================
# FORM STATE (defaults + select options)
# =====================================================

class QuotationLineItemFormState(BaseModel):
    quotation_request_line_item_id: str
    product_id: str
    quotation_request_line_item_quantity: int
    attributes: List[AttributePairOut]


class QuotationFormState(BaseModel):
    quotation_request_ref: str
    quotation_request_date: date
    quotation_request_vessel: str
    company_id: str
    employee_id: str
    quotation_request_line_items: List[QuotationLineItemFormState]


class CompanyOption(BaseModel):
    id: str
    name: str
    type: CompanyType


class EmployeeOption(BaseModel):
    id: str
    name: str
    company_id: str


class AttributedOption(BaseModel):
    id: str
    name: str
    attribute_pairs: List[AttributePairOut]


class QuotationFormOptions(BaseModel):
    companies: List[CompanyOption]
    employees: List[EmployeeOption]
    product_categories: List[AttributedOption]
    products: List[AttributedOption]


# =====================================================
# SUBMISSION RESULT
# =====================================================

class QuotationSaved(BaseModel):
    quotation_id: str
    redirect_to: str
