"""
Unit tests for SQLAlchemy models.
"""

import pytest
from sqlalchemy.exc import IntegrityError
from kiosk.models import Product, Sale, SaleLine


class TestProductModel:
    """Tests for Product model."""

    def test_create_product(self, session):
        product = Product(barcode='123', name='gum', stock=10, cost_price=5, sale_price=10)
        session.add(product)
        session.commit()

        assert product.id is not None
        assert product.stock == 10

    def test_barcode_unique(self, session, gum):
        session.add(Product(barcode=gum.barcode, name='Duplicate', stock=1, cost_price=1, sale_price=1))

        with pytest.raises(IntegrityError):
            session.commit()

    def test_stock_cannot_be_negative(self, session, gum):
        gum.stock = -1

        with pytest.raises(IntegrityError):
            session.commit()


class TestSaleModel:
    """Tests for Sale and SaleLine models."""

    def test_products_are_distinct_in_line_order(self, session, make_product):
        gum = make_product(barcode='1')
        soda = make_product(barcode='2', name='soda')
        sale = Sale(quantity=3, total=0, is_cash=True)
        sale.lines = [
            SaleLine(product=soda, quantity=1),
            SaleLine(product=gum, quantity=1),
            SaleLine(product=soda, quantity=2),
        ]
        session.add(sale)
        session.commit()

        assert [p.id for p in sale.products] == [soda.id, gum.id]
        assert sale.created_at is not None
