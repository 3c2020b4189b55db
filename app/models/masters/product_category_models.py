from sqlalchemy import Column, String, JSON
from app.core.db import Base
from app.models.base.mixins import TimestampMixin
from app.utils.ids import generate_uuid


class ProductCategory(Base, TimestampMixin):
    __tablename__ = "product_categories"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False, index=True)
    attributes = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<ProductCategory id={self.id} name={self.name}>"
