from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import mysql.connector

from ..core.constants import DEFAULT_CONNECT_TIMEOUT_SECONDS, DEFAULT_STATEMENT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT_SECONDS
    statement_timeout: int = DEFAULT_STATEMENT_TIMEOUT_SECONDS

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "folha_escolar")),
            connect_timeout=int(db_config.get("connect_timeout", DEFAULT_CONNECT_TIMEOUT_SECONDS)),
            statement_timeout=int(db_config.get("statement_timeout", DEFAULT_STATEMENT_TIMEOUT_SECONDS)),
        )


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per unit of work; every connection is bounded by
    a connect timeout and session lock/statement timeouts.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance._config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self, *, with_database: bool = True):
        kwargs = dict(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            connection_timeout=int(self._config.connect_timeout),
            autocommit=False,
        )
        if with_database:
            kwargs["database"] = self._config.database
        conn = mysql.connector.connect(**kwargs)

        timeout = int(self._config.statement_timeout)
        try:
            cur = conn.cursor()
            try:
                cur.execute("SET SESSION innodb_lock_wait_timeout = %s", (timeout,))
                cur.execute("SET SESSION max_execution_time = %s", (timeout * 1000,))
            finally:
                cur.close()
        except mysql.connector.Error:
            conn.close()
            raise
        return conn

    def ping(self) -> bool:
        """True when a SELECT 1 round-trip succeeds."""
        try:
            conn = self.connect()
        except mysql.connector.Error as e:
            logger.warning("database ping failed: %s", e)
            return False
        try:
            cur = conn.cursor()
            cur.execute("SELECT 1")
            cur.fetchall()
            cur.close()
            return True
        except mysql.connector.Error as e:
            logger.warning("database ping failed: %s", e)
            return False
        finally:
            conn.close()
