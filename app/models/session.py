"""Engine configuration."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool


logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+pysqlite:///student.db")
DATABASE_ECHO = os.getenv("DATABASE_ECHO", "").lower() in {"1", "true", "yes"}


def _is_memory_sqlite(url: str) -> bool:
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


def build_engine(url: str | None = None) -> Engine:
    url = url or DATABASE_URL
    kwargs: dict[str, Any] = {"echo": DATABASE_ECHO, "future": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(url):
            kwargs["poolclass"] = StaticPool
    logger.debug("Creating engine for %s", make_url(url).render_as_string(hide_password=True))
    return create_engine(url, **kwargs)


@contextmanager
def open_database(url: str | None = None) -> Iterator[Engine]:
    engine = build_engine(url)
    try:
        yield engine
    finally:
        engine.dispose()
