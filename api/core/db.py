"""
Async database access (raw SQL) using asyncpg.

`Database` owns one connection pool. The app creates a single instance,
opens it in the lifespan hook and hands it to request handlers through a
FastAPI dependency (see `api/main.py` and `texts/dependencies.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
import shlex
from typing import Any
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

import asyncpg

logger = logging.getLogger(__name__)

# Failures a query can raise once the pool is up. Request handlers map these to 500.
DB_ERRORS: tuple[type[BaseException], ...] = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)

_URL_SCHEMES = {"postgres", "postgresql"}
_KEYWORDS = {"host", "port", "user", "password", "dbname", "sslmode", "application_name"}


class DatabaseConfigError(RuntimeError):
    pass


class DatabaseStartupError(RuntimeError):
    pass


def _strip_sslmode(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def _keywords_to_url(descriptor: str) -> str:
    try:
        tokens = shlex.split(descriptor)
    except ValueError as exc:
        raise DatabaseConfigError(f"Malformed connection descriptor: {exc}") from exc

    values: dict[str, str] = {}
    for token in tokens:
        key, sep, value = token.partition("=")
        key = key.strip()
        if not sep or not key:
            raise DatabaseConfigError(f"Malformed connection descriptor token: {token!r}")
        if key not in _KEYWORDS:
            raise DatabaseConfigError(f"Unsupported connection keyword: {key!r}")
        values[key] = value

    port = values.get("port", "")
    if port and not port.isdigit():
        raise DatabaseConfigError(f"Invalid port in connection descriptor: {port!r}")

    userinfo = ""
    if values.get("user"):
        userinfo = quote(values["user"], safe="")
        if values.get("password"):
            userinfo += ":" + quote(values["password"], safe="")
        userinfo += "@"

    netloc = userinfo + (values.get("host") or "localhost")
    if port:
        netloc += f":{port}"

    path = "/" + quote(values["dbname"], safe="") if values.get("dbname") else ""
    query = urlencode([("application_name", values["application_name"])]) if values.get("application_name") else ""
    return urlunsplit(("postgresql", netloc, path, query, ""))


def parse_database_url(descriptor: str) -> str:
    """
    Normalize a connection descriptor into a DSN asyncpg accepts.

    Both URL form (`postgresql://user@host:5432/db`) and libpq keyword form
    (`user=postgres dbname=app port=5432`) are supported. `sslmode` is dropped.
    """
    raw = (descriptor or "").strip()
    if not raw:
        raise DatabaseConfigError("Connection descriptor is empty.")

    if "://" not in raw:
        return _keywords_to_url(raw)

    parts = urlsplit(raw)
    if parts.scheme not in _URL_SCHEMES:
        raise DatabaseConfigError(f"Unsupported connection scheme: {parts.scheme!r}")
    try:
        parts.port
    except ValueError as exc:
        raise DatabaseConfigError("Invalid port in connection descriptor.") from exc
    return _strip_sslmode(raw)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    """
    Storage client: one asyncpg pool plus small query helpers.
    """

    def __init__(
        self,
        descriptor: str,
        *,
        min_size: int = 1,
        max_size: int = 5,
        command_timeout: float = 30.0,
    ) -> None:
        self._dsn = parse_database_url(descriptor)
        self._min_size = min_size
        self._max_size = max_size
        self._command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        try:
            self._pool = await asyncpg.create_pool(
                dsn=self._dsn,
                min_size=self._min_size,
                max_size=self._max_size,
                command_timeout=self._command_timeout,
            )
        except Exception as exc:
            raise DatabaseStartupError(f"error opening database: {exc}") from exc

        try:
            await self._pool.fetchval("SELECT 1")
        except Exception as exc:
            await self.close()
            raise DatabaseStartupError(f"error pinging database: {exc}") from exc

        logger.info("db_connected min_size=%s max_size=%s", self._min_size, self._max_size)

    async def close(self) -> None:
        if self._pool is None:
            return None
        pool, self._pool = self._pool, None
        await pool.close()

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self.pool.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def execute(self, sql: str, *args: Any) -> None:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
        """
        await self.pool.execute(sql, *args)
