"""
Unit tests for request validation and response views.
"""
from datetime import datetime, timezone, timedelta

import pytest

from kiosk.exceptions import ValidationError
from kiosk.schemas import SaleItem, SaleCreate, ProductCreate, ProductUpdate, SaleOut, to_json
from kiosk.utils.formatters import format_timestamp
from kiosk.utils.validation import parse_body, parse_id, parse_with_products


class TestSaleCreate:
    """Validation of the sale creation body."""

    def test_valid_body(self):
        payload = parse_body(SaleCreate, {'products': [{'id': 1, 'quantity': 3}], 'isCash': True}, 'bad')

        assert payload.is_cash is True
        assert payload.products[0].product_id == 1
        assert payload.products[0].quantity == 3

    @pytest.mark.parametrize('body', [
        {'products': [], 'isCash': True},
        {'products': [{'id': 1, 'quantity': 0}], 'isCash': True},
        {'products': [{'id': 1, 'quantity': -2}], 'isCash': True},
        {'products': [{'id': '1', 'quantity': 1}], 'isCash': True},
        {'products': [{'id': 1}], 'isCash': True},
        {'products': [{'id': 1, 'quantity': 1, 'price': 5}], 'isCash': True},
        {'products': [{'id': 1, 'quantity': 1}], 'isCash': 'yes'},
        {'products': [{'id': 1, 'quantity': 1}]},
        {'products': [{'id': 2 ** 63, 'quantity': 1}], 'isCash': True},
        [],
        None,
    ])
    def test_invalid_bodies(self, body):
        with pytest.raises(ValidationError) as excinfo:
            parse_body(SaleCreate, body, 'Error en propiedad de venta')

        assert excinfo.value.status_code == 400
        assert excinfo.value.cause


class TestProductSchemas:
    """Validation of product bodies."""

    def test_create_uses_camel_case_prices(self):
        payload = ProductCreate.model_validate({
            'barcode': '123', 'name': 'gum', 'stock': 10, 'costPrice': 5, 'salePrice': 10
        })

        assert payload.model_dump() == {
            'barcode': '123', 'name': 'gum', 'stock': 10, 'cost_price': 5, 'sale_price': 10
        }

    @pytest.mark.parametrize('changes', [
        {'barcode': ''},
        {'name': ''},
        {'stock': -1},
        {'salePrice': 1.5},
        {'stock': 2 ** 31},
        {'costPrice': 2 ** 40},
    ])
    def test_invalid_product(self, changes):
        body = {'barcode': '123', 'name': 'gum', 'stock': 10, 'costPrice': 5, 'salePrice': 10}
        body.update(changes)

        with pytest.raises(ValidationError):
            parse_body(ProductCreate, body, 'bad product')

    def test_update_requires_id(self):
        body = {'barcode': '123', 'name': 'gum', 'stock': 10, 'costPrice': 5, 'salePrice': 10}

        with pytest.raises(ValidationError):
            parse_body(ProductUpdate, body, 'bad product')
        assert parse_body(ProductUpdate, dict(body, id=4), 'bad product').id == 4
        with pytest.raises(ValidationError):
            parse_body(ProductUpdate, dict(body, id=2 ** 63), 'bad product')

    def test_models_accept_field_names_and_reject_unknown_keys(self):
        for schema in (SaleItem, SaleCreate, ProductCreate, ProductUpdate):
            assert schema.model_config['populate_by_name'] is True
            assert schema.model_config['extra'] == 'forbid'


class TestParams:
    """Path and flag parameters."""

    def test_parse_id(self):
        assert parse_id('42') == 42
        assert parse_id(str(2 ** 63 - 1)) == 2 ** 63 - 1
        for value in ('abc', '-1', '', '4.2', '²', '٣', str(2 ** 63)):
            with pytest.raises(ValidationError):
                parse_id(value)

    def test_parse_with_products(self):
        assert parse_with_products('1') is True
        assert parse_with_products('0') is False
        assert parse_with_products(1) is True
        assert parse_with_products(False) is False
        assert parse_with_products(None) is False
        with pytest.raises(ValidationError):
            parse_with_products('2')


class TestSaleView:
    """Outward representation of a sale."""

    def test_timestamp_has_no_zone_designator(self):
        value = datetime(2024, 5, 1, 9, 30, 15, 250000, tzinfo=timezone(timedelta(hours=-3)))

        assert format_timestamp(value) == '2024-05-01T12:30:15.250'
        assert format_timestamp(datetime(2024, 5, 1, 12, 30)) == '2024-05-01T12:30:00.000'

    def test_header_json(self):
        view = SaleOut(
            id=1, quantity=1, total=30, is_cash=True,
            created_at=datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        )

        assert to_json(view) == {
            'id': 1, 'quantity': 1, 'total': 30, 'isCash': True, 'createdAt': '2024-05-01T12:30:00.000'
        }
