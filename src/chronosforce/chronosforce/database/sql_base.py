from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.engine import Connection, Result

from .connection import DatabaseConnection


@contextmanager
def db_transaction(conn_factory: DatabaseConnection) -> Iterator[Connection]:
    """Commit on success, roll back on error.

    Nested blocks join the outermost one, so several repository writes made
    inside it land together or not at all.
    """
    current = conn_factory.current()
    if current is not None:
        yield current
        return

    conn = conn_factory.connect()
    trans = conn.begin()
    conn_factory.bind(conn)
    try:
        yield conn
        trans.commit()
    except Exception:
        trans.rollback()
        raise
    finally:
        conn_factory.bind(None)
        conn.close()


def fetchone(result: Result) -> Optional[Dict[str, Any]]:
    row = result.mappings().first()
    return dict(row) if row else None


def fetchall(result: Result) -> List[Dict[str, Any]]:
    return [dict(row) for row in result.mappings().all()]

