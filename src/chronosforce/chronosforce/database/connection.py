from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection
from sqlalchemy.pool import StaticPool

from .schema import metadata

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    url: str
    echo: bool = False


class DatabaseConnection:
    """Engine owner and connection factory for the repositories.

    Note: Each thread has at most one open unit of work (see ``sql_base.db_transaction``);
    repositories called inside it reuse its connection.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._engine = create_engine(config.url, echo=config.echo, **_engine_options(config.url))
        self._local = threading.local()

    def connect(self) -> Connection:
        return self._engine.connect()

    def create_schema(self) -> None:
        metadata.create_all(self._engine)
        logger.info("database schema ready at %s", self._engine.url.render_as_string(hide_password=True))

    def dispose(self) -> None:
        self._engine.dispose()

    # Ambient unit of work, one per thread

    def current(self) -> Optional[Connection]:
        return getattr(self._local, "connection", None)

    def bind(self, conn: Optional[Connection]) -> None:
        self._local.connection = conn


def _engine_options(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True, "pool_recycle": 3600}
    # Scheduler jobs and request threads share the SQLite connection pool.
    options: dict = {"connect_args": {"check_same_thread": False}}
    if url in {"sqlite://", "sqlite:///:memory:"}:
        # One in-memory database must outlive individual connections.
        options["poolclass"] = StaticPool
    return options
