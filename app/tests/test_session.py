"""Tests for engine configuration."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.pool import StaticPool

from models import session
from models.tables import STUDENTS, Student


def test_build_engine_uses_configured_url(monkeypatch, db_path):
    monkeypatch.setattr(session, "DATABASE_URL", f"sqlite+pysqlite:///{db_path}")
    engine = session.build_engine()
    try:
        assert engine.url.database == str(db_path)
        assert not isinstance(engine.pool, StaticPool)
    finally:
        engine.dispose()


def test_build_engine_echo_setting(monkeypatch):
    monkeypatch.setattr(session, "DATABASE_ECHO", True)
    engine = session.build_engine("sqlite+pysqlite:///:memory:")
    try:
        assert engine.echo is True
    finally:
        engine.dispose()

    monkeypatch.setattr(session, "DATABASE_ECHO", False)
    quiet = session.build_engine("sqlite+pysqlite:///:memory:")
    try:
        assert quiet.echo is False
    finally:
        quiet.dispose()


def test_memory_engine_shares_one_connection():
    engine = session.build_engine("sqlite+pysqlite:///:memory:")
    try:
        assert isinstance(engine.pool, StaticPool)
        STUDENTS.ensure_table_exists(engine)
        Student(name="Ada").save(engine)
        with engine.connect() as connection:
            assert connection.execute(text("SELECT COUNT(*) FROM students")).scalar_one() == 1
    finally:
        engine.dispose()


def test_open_database_yields_working_engine(db_path):
    with session.open_database(f"sqlite+pysqlite:///{db_path}") as engine:
        STUDENTS.ensure_table_exists(engine)
        Student(name="Ada", bio="Logician", tagline="First programmer").save(engine)
    assert db_path.exists()
