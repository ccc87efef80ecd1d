from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Dict, Optional

import mysql.connector

from ..core.exceptions import StorageUnavailableError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, roll back on error.

    Driver errors surface as StorageUnavailableError so services never see
    mysql-connector types.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise StorageUnavailableError("Database connection failed") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise StorageUnavailableError("Database operation failed") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def load_json_column(value: Any, default: Any) -> Any:
    """Decode a JSON column.

    mysql-connector returns JSON columns as str, bytes or (rarely) already decoded.
    """

    if value is None:
        return default
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        if not value.strip():
            return default
        return json.loads(value)
    return value


def dump_json_column(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)
