"""Product store.

Every function receives the SQLAlchemy session that owns the current
transaction. Functions flush but never commit; the calling service decides
when the unit of work ends.
"""
from typing import Dict, List, Optional, Any
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from kiosk.models import Product
from kiosk.exceptions import DuplicateKeyError, StorageError

UPDATABLE_FIELDS = ('barcode', 'name', 'stock', 'cost_price', 'sale_price')

UNIQUE_VIOLATION_SQLSTATE = '23505'


def _is_unique_violation(error: IntegrityError) -> bool:
    """Tell a unique-constraint failure apart from other integrity errors."""
    sqlstate = getattr(error.orig, 'sqlstate', None) or getattr(error.orig, 'pgcode', None)
    if sqlstate:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE
    return 'unique' in str(error.orig).lower()


def _translate_integrity_error(error: IntegrityError):
    if _is_unique_violation(error):
        return DuplicateKeyError(
            "El producto ya existe. Violación de restricción única.",
            cause=str(error.orig)
        )
    return StorageError("Error de integridad al guardar el producto.", cause=str(error.orig))


def create(session, fields: Dict[str, Any]) -> Product:
    """Insert a product and flush so its id is assigned."""
    product = Product(**{key: fields[key] for key in UPDATABLE_FIELDS if key in fields})
    session.add(product)
    try:
        session.flush()
    except IntegrityError as e:
        raise _translate_integrity_error(e) from e
    except SQLAlchemyError as e:
        raise StorageError("Error al guardar el producto.", cause=str(e)) from e
    return product


def update_by_id(session, product_id: int, fields: Dict[str, Any], expected_stock: Optional[int] = None) -> int:
    """
    Update a product in place and return the number of rows actually changed.

    The row only matches when at least one supplied column differs from what is
    stored, so both a stale id and an identical record yield 0. When
    expected_stock is given the update also requires the stored stock to still
    equal it (compare-and-set).
    """
    values = {key: fields[key] for key in UPDATABLE_FIELDS if key in fields}
    if not values:
        return 0

    query = session.query(Product).filter(
        Product.id == product_id,
        or_(*[getattr(Product, key) != value for key, value in values.items()])
    )
    if expected_stock is not None:
        query = query.filter(Product.stock == expected_stock)

    try:
        return query.update(values, synchronize_session='fetch')
    except IntegrityError as e:
        raise _translate_integrity_error(e) from e
    except SQLAlchemyError as e:
        raise StorageError("Error al actualizar el producto.", cause=str(e)) from e


def find_all(session) -> List[Product]:
    try:
        return session.query(Product).order_by(Product.id).all()
    except SQLAlchemyError as e:
        raise StorageError("Error al consultar los productos.", cause=str(e)) from e


def find_by_id(session, product_id: int, for_update: bool = False) -> Optional[Product]:
    """
    Get a product by primary key.

    With for_update the row is locked until the transaction ends and the
    instance is refreshed from the database even if already in the session.
    """
    query = session.query(Product).filter(Product.id == product_id)
    if for_update:
        query = query.with_for_update().populate_existing()
    try:
        return query.one_or_none()
    except SQLAlchemyError as e:
        raise StorageError("Error al consultar el producto.", cause=str(e)) from e


def find_by_barcode(session, barcode: str) -> List[Product]:
    try:
        return session.query(Product).filter(Product.barcode == barcode).all()
    except SQLAlchemyError as e:
        raise StorageError("Error al consultar el producto.", cause=str(e)) from e


def find_by_name_substring(session, text: str) -> List[Product]:
    """Case-insensitive substring search on the product name."""
    try:
        return (
            session.query(Product)
            .filter(func.lower(Product.name).contains(text.lower(), autoescape=True))
            .order_by(Product.name, Product.id)
            .all()
        )
    except SQLAlchemyError as e:
        raise StorageError("Error al consultar los productos.", cause=str(e)) from e


def delete_by_id(session, product_id: int) -> int:
    try:
        return session.query(Product).filter(Product.id == product_id).delete(synchronize_session='fetch')
    except SQLAlchemyError as e:
        raise StorageError("Error al eliminar el producto.", cause=str(e)) from e


def delete_by_barcode(session, barcode: str) -> int:
    try:
        return session.query(Product).filter(Product.barcode == barcode).delete(synchronize_session='fetch')
    except SQLAlchemyError as e:
        raise StorageError("Error al eliminar el producto.", cause=str(e)) from e
