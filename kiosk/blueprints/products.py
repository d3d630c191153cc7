"""Catalog blueprint: JSON API for products."""
from flask import Blueprint, request
from kiosk.database import get_session
from kiosk.schemas import ProductCreate, ProductUpdate, to_json
from kiosk.services import product_service
from kiosk.utils.responses import success_response
from kiosk.utils.validation import parse_body, parse_id, parse_barcode

products_bp = Blueprint('products', __name__, url_prefix='/api/product')

PRODUCT_SHAPE_MESSAGE = (
    "Las propiedades del objeto son incorrectos. La estructura debe ser: 'id' (opcional | numérico), "
    "'barcode' (string), 'name' (string), 'stock' (numérico), 'costPrice' (numérico), 'salePrice' (numérico)."
)


@products_bp.route('/create', methods=['POST'])
def save_product():
    payload = parse_body(ProductCreate, request.get_json(silent=True), PRODUCT_SHAPE_MESSAGE)
    product = product_service.save_product(get_session(), payload)
    return success_response('Producto creado exitosamente.', to_json(product), 201)


@products_bp.route('/update', methods=['PUT'])
def update_product():
    payload = parse_body(ProductUpdate, request.get_json(silent=True), PRODUCT_SHAPE_MESSAGE)
    product = product_service.update_product(get_session(), payload)
    return success_response('Producto actualizado correctamente.', to_json(product))


@products_bp.route('/find/all', methods=['GET'])
def find_products():
    products = product_service.find_products(get_session())
    return success_response('Productos encontrados.', [to_json(p) for p in products])


@products_bp.route('/find/id/<product_id>', methods=['GET'])
def find_product_by_id(product_id):
    product = product_service.find_product_by_id(get_session(), parse_id(product_id))
    return success_response('Producto encontrado.', to_json(product))


@products_bp.route('/find/barcode/<barcode>', methods=['GET'])
def find_product_by_barcode(barcode):
    product = product_service.find_product_by_barcode(get_session(), parse_barcode(barcode))
    return success_response('Producto encontrado.', to_json(product))


@products_bp.route('/find/name/<name>', methods=['GET'])
def find_products_by_name(name):
    products = product_service.find_products_by_name(get_session(), name)
    return success_response('Productos encontrados.', [to_json(p) for p in products])


@products_bp.route('/delete/id/<product_id>', methods=['DELETE'])
def delete_product_by_id(product_id):
    affected_rows = product_service.delete_product_by_id(get_session(), parse_id(product_id))
    return success_response('Producto eliminado.', {'affectedRows': affected_rows})


@products_bp.route('/delete/barcode/<barcode>', methods=['DELETE'])
def delete_product_by_barcode(barcode):
    affected_rows = product_service.delete_product_by_barcode(get_session(), parse_barcode(barcode))
    return success_response('Producto eliminado.', {'affectedRows': affected_rows})
