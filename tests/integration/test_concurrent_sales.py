"""
Integration test for overlapping sales of the same product.

Each worker thread gets its own scoped session, like a request thread would.
"""
import threading

from kiosk import database
from kiosk.exceptions import KioskError, InsufficientStockError, StockUpdateConflictError
from kiosk.schemas import SaleItem
from kiosk.services import sales_service


def _run_concurrently(app, product_id, quantities):
    barrier = threading.Barrier(len(quantities))
    outcomes = []
    lock = threading.Lock()

    def worker(quantity):
        with app.app_context():
            session = database.get_session()
            barrier.wait()
            try:
                sale = sales_service.create_sale(
                    session, [SaleItem(product_id=product_id, quantity=quantity)], True
                )
                result = sale
            except KioskError as e:
                result = e
            finally:
                session.remove()
            with lock:
                outcomes.append(result)

    threads = [threading.Thread(target=worker, args=(quantity,)) for quantity in quantities]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)
    return outcomes


class TestConcurrentSales:
    """Two sales racing for the same stock."""

    def test_only_one_sale_wins_when_stock_is_short(self, app, make_product, stock_of):
        product = make_product(barcode='race', name='last units', stock=5, sale_price=10)

        outcomes = _run_concurrently(app, product.id, [3, 3])

        failures = [o for o in outcomes if isinstance(o, Exception)]
        successes = [o for o in outcomes if not isinstance(o, Exception)]
        assert len(outcomes) == 2
        assert len(successes) == 1
        assert len(failures) == 1
        assert isinstance(failures[0], (InsufficientStockError, StockUpdateConflictError))
        assert successes[0].total == 30
        assert stock_of(product.id) == 2

    def test_both_sales_succeed_when_stock_suffices(self, app, make_product, stock_of):
        product = make_product(barcode='plenty', name='plenty', stock=10, sale_price=10)

        outcomes = _run_concurrently(app, product.id, [4, 5])

        assert not any(isinstance(o, Exception) for o in outcomes)
        assert stock_of(product.id) == 1
