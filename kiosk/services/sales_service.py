"""
Sales service with transactional logic.
Handles sale creation, stock decrements and sale queries.
"""
import logging
from typing import List, Sequence
from sqlalchemy.exc import SQLAlchemyError
from kiosk.repositories import product_repository, sale_repository
from kiosk.exceptions import (
    KioskError, NotFoundError, ProductNotFoundError, InsufficientStockError,
    StockUpdateConflictError, StorageError
)
from kiosk.schemas import SaleItem, SaleOut, SaleDetailOut
from kiosk.metrics import sales_created_total, sale_failures_total

logger = logging.getLogger(__name__)


def create_sale(session, items: Sequence[SaleItem], is_cash: bool) -> SaleOut:
    """
    Create a sale and decrement stock as a single unit of work.

    Steps:
    1. Lock and read each product in the given order
    2. Check the requested quantity against stock
    3. Write the new stock (compare-and-set on the stock read in step 1)
    4. Insert the sale header with the line count and total
    5. Insert one product_sale row per item
    6. Commit

    Any failure rolls back every stock change and insert before the error is
    re-raised, so a failed call leaves no trace.

    Args:
        session: SQLAlchemy session; its transaction is the unit of work
        items: validated sale items (product_id, quantity > 0)
        is_cash: payment method flag

    Returns:
        SaleOut view of the created sale header

    Raises:
        ProductNotFoundError: an item references a missing product
        InsufficientStockError: an item asks for more units than available
        StockUpdateConflictError: the stock row changed under the transaction
        StorageError: any other database failure
    """
    # Leftovers from an earlier unit of work must not commit with the sale;
    # a no-op when no transaction is open
    session.rollback()

    logger.debug(f"Sale started: {len(items)} line(s), is_cash={is_cash}")
    try:
        sale_total = 0
        lines = []

        logger.debug("Sale validating stock")
        for item in items:
            product = product_repository.find_by_id(session, item.product_id, for_update=True)
            if product is None:
                raise ProductNotFoundError(item.product_id)

            current_stock = product.stock
            new_stock = current_stock - item.quantity
            if new_stock < 0:
                raise InsufficientStockError(product.name, item.quantity, current_stock)

            # Guards against a lost update when the isolation level does not
            # keep the row locked since the read above
            logger.debug(f"Sale decrementing product #{product.id}: {current_stock} -> {new_stock}")
            affected_rows = product_repository.update_by_id(
                session, product.id, {'stock': new_stock}, expected_stock=current_stock
            )
            if affected_rows < 1:
                raise StockUpdateConflictError(product.id)

            sale_total += product.sale_price * item.quantity
            lines.append((product.id, item.quantity))

        logger.debug("Sale persisting")
        sale = sale_repository.create(session, {
            'quantity': len(lines),
            'total': sale_total,
            'is_cash': is_cash,
        })
        sale_repository.create_lines(session, sale.id, lines)

        session.commit()

    except KioskError as e:
        session.rollback()
        sale_failures_total.labels(reason=e.name).inc()
        logger.warning(f"Sale rolled back ({e.name}): {e.message}")
        raise
    except SQLAlchemyError as e:
        session.rollback()
        sale_failures_total.labels(reason=StorageError.name).inc()
        logger.error(f"Sale rolled back (storage error): {e}")
        raise StorageError("Error al confirmar la venta.", cause=str(e)) from e

    sales_created_total.labels(payment='cash' if is_cash else 'other').inc()
    logger.info(f"Sale #{sale.id} committed: total={sale.total}, lines={sale.quantity}")
    return SaleOut.model_validate(sale)


def find_sales(session, with_products: bool = False) -> List[SaleOut]:
    """List every sale, optionally with its products, in one read transaction."""
    view = SaleDetailOut if with_products else SaleOut
    try:
        sales = sale_repository.list_all(session, include_lines=with_products)
        if not sales:
            raise NotFoundError("Lista de ventas vacía.")
        result = [view.model_validate(sale) for sale in sales]
        session.commit()
        return result
    except KioskError:
        session.rollback()
        raise
    except SQLAlchemyError as e:
        session.rollback()
        raise StorageError("Error al consultar las ventas.", cause=str(e)) from e


def find_sale_by_id(session, sale_id: int, with_products: bool = False) -> SaleOut:
    """Get one sale, optionally with its products, in one read transaction."""
    view = SaleDetailOut if with_products else SaleOut
    try:
        sale = sale_repository.find_by_id(session, sale_id, include_lines=with_products)
        if sale is None:
            raise NotFoundError(f"El ID de venta {sale_id} no existe.")
        result = view.model_validate(sale)
        session.commit()
        return result
    except KioskError:
        session.rollback()
        raise
    except SQLAlchemyError as e:
        session.rollback()
        raise StorageError("Error al consultar la venta.", cause=str(e)) from e


def delete_sale_by_id(session, sale_id: int) -> int:
    """
    Delete a sale header and its lines.

    Stock is not restored.
    """
    try:
        affected_rows = sale_repository.delete_by_id(session, sale_id)
        if affected_rows < 1:
            raise NotFoundError("No se encontró la venta a eliminar.")
        session.commit()
    except KioskError:
        session.rollback()
        raise
    except SQLAlchemyError as e:
        session.rollback()
        raise StorageError("Error al eliminar la venta.", cause=str(e)) from e

    logger.info(f"Sale #{sale_id} deleted (stock not restored)")
    return affected_rows
