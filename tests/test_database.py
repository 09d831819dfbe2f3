import logging

from sqlalchemy import create_engine, text

from clinic.database import build_engine, log_slow_queries


def test_slow_queries_are_logged(caplog):
    engine = create_engine("sqlite://")
    log_slow_queries(engine, threshold=-1)

    with caplog.at_level(logging.WARNING, logger="clinic.database"):
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    assert any("Slow query" in record.getMessage() for record in caplog.records)
    engine.dispose()


def test_sqlite_engine_skips_pool_sizing():
    engine = build_engine("sqlite://")
    assert engine.dialect.name == "sqlite"
    engine.dispose()
