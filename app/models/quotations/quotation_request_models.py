from sqlalchemy import Column, Integer, String, ForeignKey, JSON, Date, CheckConstraint, Index
from sqlalchemy.orm import relationship
from app.core.db import Base
from app.models.base.mixins import TimestampMixin
from app.utils.ids import generate_uuid


class QuotationRequest(Base, TimestampMixin):
    __tablename__ = "quotation_requests"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    ref = Column(String(50), nullable=False, index=True)
    request_date = Column(Date, nullable=False, index=True)
    vessel = Column(String(100), nullable=False)
    company_id = Column(String(36), ForeignKey("companies.id", ondelete="RESTRICT"), nullable=False, index=True)
    employee_id = Column(String(36), ForeignKey("employees.id", ondelete="RESTRICT"), nullable=False, index=True)

    company = relationship("Company", lazy="selectin")
    employee = relationship("Employee", lazy="selectin")
    line_items = relationship(
        "QuotationRequestLineItem",
        back_populates="quotation_request",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="QuotationRequestLineItem.position",
        lazy="selectin",
    )

    __table_args__ = (Index("ix_quotation_request_company_date", "company_id", "request_date"),)

    def __repr__(self):
        return f"<QuotationRequest {self.ref} vessel={self.vessel}>"


class QuotationRequestLineItem(Base, TimestampMixin):
    __tablename__ = "quotation_request_line_items"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    quotation_request_id = Column(String(36), ForeignKey("quotation_requests.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    attributes = Column(JSON, nullable=True)
    position = Column(Integer, nullable=False, default=0)

    quotation_request = relationship("QuotationRequest", back_populates="line_items", lazy="selectin")
    product = relationship("Product", lazy="selectin")
    supplier_quotations = relationship(
        "SupplierQuotation",
        back_populates="line_item",
        passive_deletes=True,
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("quantity >= 1 AND quantity <= 10000", name="ck_line_item_quantity_range"),
    )

    def __repr__(self):
        return f"<QuotationRequestLineItem id={self.id} product_id={self.product_id} qty={self.quantity}>"
