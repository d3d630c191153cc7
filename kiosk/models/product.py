"""Product model."""
from sqlalchemy import Column, Integer, String, CheckConstraint
from sqlalchemy.orm import relationship
from kiosk.database import Base
from kiosk.models.columns import BigIntPK


class Product(Base):
    """Product model."""

    __tablename__ = 'product'

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    barcode = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=False)
    stock = Column(Integer, nullable=False, default=0, server_default='0')
    cost_price = Column(Integer, nullable=False, default=0, server_default='0')
    sale_price = Column(Integer, nullable=False, default=0, server_default='0')

    # Relationships
    lines = relationship('SaleLine', back_populates='product', passive_deletes=True)

    __table_args__ = (
        CheckConstraint('stock >= 0', name='ck_product_stock_non_negative'),
        CheckConstraint('cost_price >= 0', name='ck_product_cost_price_non_negative'),
        CheckConstraint('sale_price >= 0', name='ck_product_sale_price_non_negative'),
    )

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', barcode='{self.barcode}')>"
