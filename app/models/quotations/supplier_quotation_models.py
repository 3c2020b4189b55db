from decimal import Decimal
from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, Boolean, Date, CheckConstraint
from sqlalchemy.orm import relationship
from app.core.db import Base
from app.models.base.mixins import TimestampMixin
from app.utils.ids import generate_uuid


class SupplierQuotation(Base, TimestampMixin):
    """Supplier pricing for one line item. Read-only inside this service."""

    __tablename__ = "supplier_quotations"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    line_item_id = Column(String(36), ForeignKey("quotation_request_line_items.id", ondelete="CASCADE"), nullable=False, index=True)
    company_id = Column(String(36), ForeignKey("companies.id", ondelete="RESTRICT"), nullable=False, index=True)

    supplier_date = Column(Date, nullable=True)
    supplier_price = Column(Numeric(12, 2), nullable=False, default=Decimal("0.00"))
    lead_time = Column(Date, nullable=True)
    client_date = Column(Date, nullable=True)
    client_price = Column(Numeric(12, 2), nullable=False, default=Decimal("0.00"))
    accepted = Column(Boolean, nullable=False, default=False)
    status = Column(Integer, nullable=False, default=0)

    line_item = relationship("QuotationRequestLineItem", back_populates="supplier_quotations", lazy="selectin")
    company = relationship("Company", lazy="selectin")

    __table_args__ = (
        CheckConstraint("supplier_price >= 0 AND client_price >= 0", name="ck_supplier_quotation_prices_non_negative"),
    )

    def __repr__(self):
        return f"<SupplierQuotation id={self.id} line_item_id={self.line_item_id} company_id={self.company_id}>"
