from sqlalchemy import Column, Integer, String, ForeignKey, Index, JSON, func
from sqlalchemy.orm import relationship
from app.core.db import Base
from app.models.base.mixins import TimestampMixin
from app.utils.ids import generate_uuid


class Product(Base, TimestampMixin):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False, index=True)
    ref_number = Column(Integer, nullable=False, default=0, index=True)
    description = Column(String(500), nullable=True)
    attributes = Column(JSON, nullable=True)
    category_id = Column(String(36), ForeignKey("product_categories.id", ondelete="RESTRICT"), nullable=False, index=True)

    category = relationship("ProductCategory", lazy="selectin")

    def __repr__(self):
        return f"<Product id={self.id} ref={self.ref_number} name={self.name}>"


# Authoritative guard for product-name uniqueness (case-insensitive).
Index("uq_products_name_lower", func.lower(Product.name), unique=True)
