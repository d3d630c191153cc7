"""Sales blueprint: JSON API for creating, listing and deleting sales."""
from flask import Blueprint, request
from kiosk.database import get_session
from kiosk.schemas import SaleCreate, to_json
from kiosk.services import sales_service
from kiosk.utils.responses import success_response
from kiosk.utils.validation import parse_body, parse_id, parse_with_products

sales_bp = Blueprint('sales', __name__, url_prefix='/api/sale')

SALE_SHAPE_MESSAGE = (
    "Error en propiedad de venta, debe contener una propiedad 'products' "
    "(lista de objetos con 'id' y 'quantity' numéricos) y una propiedad 'isCash' (booleana)."
)


@sales_bp.route('/create', methods=['POST'])
def create_sale():
    """Create a sale from {products: [{id, quantity}], isCash}."""
    payload = parse_body(SaleCreate, request.get_json(silent=True), SALE_SHAPE_MESSAGE)
    sale = sales_service.create_sale(get_session(), payload.products, payload.is_cash)
    return success_response('Venta creada con éxito.', to_json(sale))


@sales_bp.route('/find/all/<with_products>', methods=['GET'])
def find_sales(with_products):
    include = parse_with_products(with_products)
    sales = sales_service.find_sales(get_session(), include)
    return success_response('Ventas encontradas.', [to_json(sale) for sale in sales])


@sales_bp.route('/find/id/<sale_id>', methods=['GET'])
def find_sale_by_id(sale_id):
    """withProducts may come in the JSON body or the query string."""
    sale_id = parse_id(sale_id)
    body = request.get_json(silent=True) or {}
    flag = body.get('withProducts') if isinstance(body, dict) else None
    if flag is None:
        flag = request.args.get('withProducts')
    sale = sales_service.find_sale_by_id(get_session(), sale_id, parse_with_products(flag))
    return success_response('Venta encontrada.', to_json(sale))


@sales_bp.route('/delete/id/<sale_id>', methods=['DELETE'])
def delete_sale_by_id(sale_id):
    sale_id = parse_id(sale_id)
    affected_rows = sales_service.delete_sale_by_id(get_session(), sale_id)
    return success_response('Venta eliminada.', {'affectedRows': affected_rows})
