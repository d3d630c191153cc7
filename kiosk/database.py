"""Database configuration and initialization."""
import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import scoped_session, sessionmaker, declarative_base

logger = logging.getLogger(__name__)

# Create SQLAlchemy base
Base = declarative_base()

# Global session and engine
engine = None
db_session = None


def _configure_sqlite(sqlite_engine):
    """Enable foreign keys and take the write lock when a transaction begins.

    pysqlite defers BEGIN until the first write, so two sales could both read
    the same stock before either one writes. BEGIN IMMEDIATE serialises writers
    from the first read instead, the SQLite counterpart of SELECT ... FOR UPDATE.
    """

    @event.listens_for(sqlite_engine, 'connect')
    def _on_connect(dbapi_connection, connection_record):
        # Stop pysqlite from emitting its own BEGIN
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()

    @event.listens_for(sqlite_engine, 'begin')
    def _on_begin(conn):
        conn.exec_driver_sql('BEGIN IMMEDIATE')


def init_db(app):
    """Initialize database connection."""
    global engine, db_session

    database_uri = app.config['SQLALCHEMY_DATABASE_URI']
    is_sqlite = database_uri.startswith('sqlite')

    engine_kwargs = {
        'echo': app.config.get('SQLALCHEMY_ECHO', False),
        'pool_pre_ping': True,  # Enable connection health checks
    }
    if is_sqlite:
        engine_kwargs['connect_args'] = {
            'check_same_thread': False,
            'timeout': app.config.get('DB_LOCK_TIMEOUT', 30),
        }
    else:
        engine_kwargs['pool_size'] = app.config.get('DB_POOL_SIZE', 10)
        engine_kwargs['max_overflow'] = app.config.get('DB_MAX_OVERFLOW', 20)

    engine = create_engine(database_uri, **engine_kwargs)
    if is_sqlite:
        _configure_sqlite(engine)

    db_session = scoped_session(
        sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    )

    app.extensions['kiosk.db'] = db_session

    # Register teardown
    @app.teardown_appcontext
    def shutdown_session(exception=None):
        """Close database session and rollback on error."""
        if exception:
            db_session.rollback()
        db_session.remove()

    logger.info(f"Database engine initialised for dialect '{engine.dialect.name}'")


def create_schema():
    """Create every table known to the models."""
    # Models register themselves on Base when imported
    import kiosk.models  # noqa: F401
    Base.metadata.create_all(bind=engine)


def drop_schema():
    """Drop every table known to the models."""
    import kiosk.models  # noqa: F401
    Base.metadata.drop_all(bind=engine)


def check_connection():
    """Return True when the database answers a trivial query."""
    try:
        with engine.connect() as connection:
            connection.execute(text('SELECT 1'))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return False


def shutdown_db():
    """Release every session and pooled connection."""
    global engine, db_session
    if db_session is not None:
        db_session.remove()
    if engine is not None:
        engine.dispose()
        logger.info("Database engine disposed")
    engine = None
    db_session = None


def get_session():
    """Get database session."""
    return db_session
