from pydantic import BaseModel
from typing import List, Optional
from decimal import Decimal
from datetime import date, datetime


class SupplierQuotationOut(BaseModel):
    id: str
    line_item_id: str
    company_id: str
    company_name: Optional[str]

    supplier_date: Optional[date]
    supplier_price: Decimal
    lead_time: Optional[date]
    client_date: Optional[date]
    client_price: Decimal
    margin: Decimal
    margin_percent: Optional[Decimal]
    accepted: bool
    status: int

    created_at: datetime


class SupplierQuotationListData(BaseModel):
    total: int
    items: List[SupplierQuotationOut]
