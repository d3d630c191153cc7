"""Models package - exports all SQLAlchemy models."""
from kiosk.models.product import Product
from kiosk.models.sale import Sale
from kiosk.models.sale_line import SaleLine

__all__ = ['Product', 'Sale', 'SaleLine']
