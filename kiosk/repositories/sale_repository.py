"""Sale store: sale headers and their product lines."""
from typing import Dict, Iterable, List, Optional, Any, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload, joinedload
from kiosk.models import Sale, SaleLine
from kiosk.exceptions import StorageError


def _with_lines(query):
    return query.options(selectinload(Sale.lines).joinedload(SaleLine.product))


def create(session, header: Dict[str, Any]) -> Sale:
    """Insert a sale header ({quantity, total, is_cash}) and flush it."""
    sale = Sale(
        quantity=header['quantity'],
        total=header['total'],
        is_cash=header['is_cash']
    )
    session.add(sale)
    try:
        session.flush()
    except SQLAlchemyError as e:
        raise StorageError("Error al crear la venta.", cause=str(e)) from e
    return sale


def create_lines(session, sale_id: int, lines: Iterable[Tuple[int, int]]) -> List[SaleLine]:
    """Insert one join row per (product_id, quantity) pair."""
    sale_lines = [
        SaleLine(sale_id=sale_id, product_id=product_id, quantity=quantity)
        for product_id, quantity in lines
    ]
    session.add_all(sale_lines)
    try:
        session.flush()
    except SQLAlchemyError as e:
        raise StorageError("Error al registrar los productos de la venta.", cause=str(e)) from e
    return sale_lines


def list_all(session, include_lines: bool = False) -> List[Sale]:
    query = session.query(Sale).order_by(Sale.id)
    if include_lines:
        query = _with_lines(query)
    try:
        return query.all()
    except SQLAlchemyError as e:
        raise StorageError("Error al consultar las ventas.", cause=str(e)) from e


def find_by_id(session, sale_id: int, include_lines: bool = False) -> Optional[Sale]:
    query = session.query(Sale).filter(Sale.id == sale_id)
    if include_lines:
        query = _with_lines(query)
    try:
        return query.one_or_none()
    except SQLAlchemyError as e:
        raise StorageError("Error al consultar la venta.", cause=str(e)) from e


def find_lines(session, sale_id: int) -> List[SaleLine]:
    try:
        return (
            session.query(SaleLine)
            .options(joinedload(SaleLine.product))
            .filter(SaleLine.sale_id == sale_id)
            .order_by(SaleLine.id)
            .all()
        )
    except SQLAlchemyError as e:
        raise StorageError("Error al consultar los productos de la venta.", cause=str(e)) from e


def delete_by_id(session, sale_id: int) -> int:
    """Delete a sale header; its lines go with it through ON DELETE CASCADE."""
    try:
        return session.query(Sale).filter(Sale.id == sale_id).delete(synchronize_session='fetch')
    except SQLAlchemyError as e:
        raise StorageError("Error al eliminar la venta.", cause=str(e)) from e
