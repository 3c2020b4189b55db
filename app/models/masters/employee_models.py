from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
from app.core.db import Base
from app.models.base.mixins import TimestampMixin
from app.utils.ids import generate_uuid


class Employee(Base, TimestampMixin):
    __tablename__ = "employees"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(101), nullable=False, index=True)
    mobile = Column(String(30), nullable=False)
    email = Column(String(100), nullable=False, index=True)
    # Both position columns come from the legacy dashboard; see DESIGN.md.
    employee_position = Column(String(100), nullable=False)
    position = Column(String(100), nullable=False)
    company_id = Column(String(36), ForeignKey("companies.id", ondelete="RESTRICT"), nullable=False, index=True)

    company = relationship("Company", lazy="selectin")

    def __repr__(self):
        return f"<Employee id={self.id} name={self.name} company_id={self.company_id}>"
