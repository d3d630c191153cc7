"""Sale Line model (product <-> sale join)."""
from sqlalchemy import Column, Integer, ForeignKey, Index
from sqlalchemy.orm import relationship
from kiosk.database import Base
from kiosk.models.columns import BigIntPK


class SaleLine(Base):
    """One product's participation in a sale."""

    __tablename__ = 'product_sale'

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    sale_id = Column(
        BigIntPK,
        ForeignKey('sale.id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False
    )
    product_id = Column(
        BigIntPK,
        ForeignKey('product.id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False
    )
    quantity = Column(Integer, nullable=False, default=1)

    # Relationships
    sale = relationship('Sale', back_populates='lines')
    product = relationship('Product', back_populates='lines')

    __table_args__ = (
        Index('ix_product_sale_sale_id', 'sale_id'),
        Index('ix_product_sale_product_id', 'product_id'),
    )

    def __repr__(self):
        return f"<SaleLine(id={self.id}, sale_id={self.sale_id}, product_id={self.product_id}, quantity={self.quantity})>"
