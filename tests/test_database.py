from sqlalchemy import text

from jobboard.database import normalize_url


def test_bare_mysql_url_uses_pymysql():
    url = normalize_url(" mysql://user:pw@db.internal:3306/jobs ")
    assert url.drivername == "mysql+pymysql"
    assert url.database == "jobs"


def test_other_urls_are_left_alone():
    assert normalize_url("sqlite:///dev.db").drivername == "sqlite"
    assert normalize_url("postgresql+psycopg://u@h/db").drivername == "postgresql+psycopg"


def test_sqlite_connections_enforce_foreign_keys(engine):
    with engine.connect() as conn:
        assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
        assert conn.execute(text("PRAGMA busy_timeout")).scalar() == 30000
        assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
