from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

import mysql.connector

from ..core.exceptions import StorageError
from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().with_name("schema.sql")


def _iter_sql_statements(sql: str) -> Iterable[str]:
    """Split schema.sql on ';' outside quoted literals."""
    buf: list[str] = []
    quote: Optional[str] = None
    chars = iter(sql)

    for ch in chars:
        if ch == "\\":
            buf.append(ch)
            buf.append(next(chars, ""))
            continue
        if quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _factory(db_config: dict) -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_dict(db_config))


def ensure_database_exists(db_config: dict) -> None:
    factory = _factory(db_config)
    name = factory.config.database.replace("`", "")
    conn = factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def ensure_schema(db_config: dict, *, schema_path: Optional[str | Path] = None) -> None:
    """Create the database and both tables if absent.

    Only CREATE ... IF NOT EXISTS statements run, so this never touches existing data and
    several processes may run it at the same time.
    """
    path = Path(schema_path) if schema_path else SCHEMA_PATH
    sql = path.read_text(encoding="utf-8")

    try:
        ensure_database_exists(db_config)
        conn = _factory(db_config).connect()
        try:
            cur = conn.cursor()
            for stmt in _iter_sql_statements(sql):
                cur.execute(stmt)
            conn.commit()
        finally:
            conn.close()
    except mysql.connector.Error as e:
        raise StorageError("Falha ao preparar o schema") from e

    logger.info("schema ready on %s", db_config.get("database"))


def list_tables(db_config: dict) -> list[str]:
    conn = _factory(db_config).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
