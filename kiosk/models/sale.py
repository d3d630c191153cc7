"""Sale model."""
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from kiosk.database import Base
from kiosk.models.columns import BigIntPK


def _utcnow():
    return datetime.now(timezone.utc)


class Sale(Base):
    """Sale header. Immutable once created."""

    __tablename__ = 'sale'

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    # Number of lines in the sale, not units
    quantity = Column(Integer, nullable=False, default=1)
    total = Column(Integer, nullable=False, default=0)
    is_cash = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, server_default=func.now())

    # Relationships
    lines = relationship(
        'SaleLine',
        back_populates='sale',
        cascade='all, delete-orphan',
        passive_deletes=True,
        order_by='SaleLine.id'
    )

    @property
    def products(self):
        """Distinct products on the sale, in line order."""
        seen = {}
        for line in self.lines:
            if line.product_id not in seen:
                seen[line.product_id] = line.product
        return list(seen.values())

    def __repr__(self):
        return f"<Sale(id={self.id}, total={self.total}, quantity={self.quantity})>"
