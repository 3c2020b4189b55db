from sqlalchemy import Column, String, Enum, Index
from app.core.db import Base
from app.models.base.mixins import TimestampMixin
from app.models.enums.company_type import CompanyType
from app.utils.ids import generate_uuid


class Company(Base, TimestampMixin):
    __tablename__ = "companies"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False, index=True)
    email = Column(String(100), nullable=False, index=True)
    phone = Column(String(20), nullable=False)
    address = Column(String(500), nullable=False)
    country = Column(String(100), nullable=False)
    type = Column(Enum(CompanyType), nullable=False, default=CompanyType.client, index=True)

    __table_args__ = (Index("ix_company_name_type", "name", "type"),)

    def __repr__(self):
        return f"<Company id={self.id} name={self.name} type={self.type}>"
