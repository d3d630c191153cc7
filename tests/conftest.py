import pytest

from kiosk import create_app, database
from kiosk.models import Product


@pytest.fixture(scope='function')
def app(tmp_path):
    """Create application instance backed by a fresh SQLite file."""
    app = create_app('config.TestingConfig', {
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'kiosk.db'}",
        'DB_LOCK_TIMEOUT': 30,
    })
    database.create_schema()
    yield app
    database.shutdown_db()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def session(app):
    """Thread-scoped database session, the same one request handlers use."""
    session = database.get_session()
    yield session
    session.rollback()
    session.remove()


@pytest.fixture(scope='function')
def make_product(session):
    """Factory for committed products."""
    def _make_product(barcode='123', name='gum', stock=10, cost_price=5, sale_price=10):
        product = Product(
            barcode=barcode,
            name=name,
            stock=stock,
            cost_price=cost_price,
            sale_price=sale_price
        )
        session.add(product)
        session.commit()
        return product
    return _make_product


@pytest.fixture(scope='function')
def gum(make_product):
    """The canonical product: 10 units of gum at 10 each."""
    return make_product()


@pytest.fixture(scope='function')
def stock_of(session):
    """Read stock straight from the table, bypassing the identity map."""
    def _stock_of(product_id):
        stock = session.query(Product.stock).filter(Product.id == product_id).scalar()
        session.commit()
        return stock
    return _stock_of
