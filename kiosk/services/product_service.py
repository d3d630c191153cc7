"""Catalog service: product CRUD on top of the product store."""
import logging
from typing import List
from sqlalchemy.exc import SQLAlchemyError
from kiosk.repositories import product_repository
from kiosk.exceptions import KioskError, NotFoundError, NotModifiedError, StorageError
from kiosk.schemas import ProductCreate, ProductUpdate, ProductOut

logger = logging.getLogger(__name__)


def _commit(session, message):
    try:
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise StorageError(message, cause=str(e)) from e


def save_product(session, data: ProductCreate) -> ProductOut:
    """Create a product. A repeated barcode raises DuplicateKeyError."""
    try:
        product = product_repository.create(session, data.model_dump())
    except KioskError:
        session.rollback()
        raise
    _commit(session, "Error al guardar el producto.")
    logger.info(f"Product #{product.id} created (barcode={product.barcode})")
    return ProductOut.model_validate(product)


def update_product(session, data: ProductUpdate) -> ProductOut:
    """
    Replace every field of an existing product.

    Raises:
        NotFoundError: no product has data.id
        NotModifiedError: the stored record already had these values
    """
    fields = data.model_dump(exclude={'id'})
    try:
        if product_repository.find_by_id(session, data.id) is None:
            raise NotFoundError(f"No existe el producto con el ID: {data.id}.")
        affected_rows = product_repository.update_by_id(session, data.id, fields)
        if affected_rows != 1:
            raise NotModifiedError("No se efectuaron cambios en el producto")
    except KioskError:
        session.rollback()
        raise
    _commit(session, "Error al actualizar el producto.")
    logger.info(f"Product #{data.id} updated")
    return ProductOut(id=data.id, **fields)


def find_products(session) -> List[ProductOut]:
    products = product_repository.find_all(session)
    if not products:
        raise NotFoundError("Lista de productos inexistente.")
    return [ProductOut.model_validate(p) for p in products]


def find_product_by_id(session, product_id: int) -> ProductOut:
    product = product_repository.find_by_id(session, product_id)
    if product is None:
        raise NotFoundError(f"No existe el producto con el ID: {product_id}.")
    return ProductOut.model_validate(product)


def find_product_by_barcode(session, barcode: str) -> ProductOut:
    products = product_repository.find_by_barcode(session, barcode)
    if len(products) != 1:
        raise NotFoundError(f"No existe el producto con el código: {barcode}.")
    return ProductOut.model_validate(products[0])


def find_products_by_name(session, name: str) -> List[ProductOut]:
    products = product_repository.find_by_name_substring(session, name)
    if not products:
        raise NotFoundError(f"No existen productos con el nombre: {name}.")
    return [ProductOut.model_validate(p) for p in products]


def delete_product_by_id(session, product_id: int) -> int:
    try:
        affected_rows = product_repository.delete_by_id(session, product_id)
        if affected_rows == 0:
            raise NotFoundError(f"No existe el producto con el ID: {product_id}.")
    except KioskError:
        session.rollback()
        raise
    _commit(session, "Error al eliminar el producto.")
    logger.info(f"Product #{product_id} deleted")
    return affected_rows


def delete_product_by_barcode(session, barcode: str) -> int:
    try:
        affected_rows = product_repository.delete_by_barcode(session, barcode)
        if affected_rows == 0:
            raise NotFoundError(f"No existe el producto con el código: {barcode}.")
    except KioskError:
        session.rollback()
        raise
    _commit(session, "Error al eliminar el producto.")
    logger.info(f"Product with barcode {barcode} deleted")
    return affected_rows
