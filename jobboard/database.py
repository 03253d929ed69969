import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import DATABASE_URL

logger = logging.getLogger(__name__)

SQLITE_BUSY_TIMEOUT_SECONDS = 30

_SQLITE_PRAGMAS = (
    "PRAGMA journal_mode=WAL;",
    # Job deletion cascades to applications at the DB level.
    "PRAGMA foreign_keys=ON;",
    f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_SECONDS * 1000};",
)


def _apply_sqlite_pragmas(dbapi_connection, connection_record):  # noqa: ANN001
    cursor = dbapi_connection.cursor()
    try:
        for pragma in _SQLITE_PRAGMAS:
            cursor.execute(pragma)
    finally:
        cursor.close()


def normalize_url(url: str) -> URL:
    """Parse ``url``, reading a bare ``mysql://`` as the PyMySQL driver."""
    parsed = make_url(url.strip())
    if parsed.drivername == "mysql":
        parsed = parsed.set(drivername="mysql+pymysql")
    return parsed


def build_engine(url: str) -> Engine:
    """
    Engine for ``url`` with the per-backend settings the app relies on.

    SQLite connections may be shared across uvicorn's worker threads, wait on
    a busy database rather than fail with "database is locked", and enforce
    foreign keys.
    """
    parsed = normalize_url(url)
    if parsed.get_backend_name() != "sqlite":
        return create_engine(parsed, pool_pre_ping=True)

    engine = create_engine(
        parsed,
        connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT_SECONDS},
    )
    event.listen(engine, "connect", _apply_sqlite_pragmas)
    logger.debug("SQLite engine at %s", parsed.database)
    return engine


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create any missing tables."""
    from . import models  # noqa: F401  (registers the tables on Base.metadata)

    Base.metadata.create_all(bind=bind or engine)
