"""MySQL connection settings and the shared application connection."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl, unquote

import pymysql

_DEFAULT_PORT = 3306
_DEFAULT_TCP_ADDRESS = f"127.0.0.1:{_DEFAULT_PORT}"
_DEFAULT_UNIX_ADDRESS = "/tmp/mysql.sock"


@dataclass(frozen=True)
class ConnectionSettings:
    """Parsed form of a ``user:pass@net(addr)/dbname?params`` DSN."""

    user: str = ""
    password: str = field(default_factory=str)
    net: str = "tcp"
    address: str = _DEFAULT_TCP_ADDRESS
    database: str = ""
    params: dict[str, str] = field(default_factory=dict)

    @property
    def host(self) -> str:
        if self.net == "unix":
            return ""
        host, _ = _split_host_port(self.address)
        return host

    @property
    def port(self) -> int:
        if self.net == "unix":
            return _DEFAULT_PORT
        _, port = _split_host_port(self.address)
        return port


def _split_host_port(address: str) -> tuple[str, int]:
    if address.startswith("["):
        end = address.find("]")
        host = address[1:end]
        rest = address[end + 1 :]
        port = rest[1:] if rest.startswith(":") else ""
    else:
        host, sep, port = address.rpartition(":")
        if not sep:
            host, port = address, ""
    if not port:
        return host, _DEFAULT_PORT
    if not port.isdigit():
        raise ValueError(f"invalid DSN: bad port {port!r}")
    return host, int(port)


def _with_default_port(address: str) -> str:
    if address.startswith("["):
        return address if "]:" in address else f"{address}:{_DEFAULT_PORT}"
    return address if ":" in address else f"{address}:{_DEFAULT_PORT}"


def parse_dsn(dsn: str) -> ConnectionSettings:
    """Parse a MySQL data source name into connection settings."""
    slash = dsn.rfind("/")
    if slash == -1:
        if dsn:
            raise ValueError("invalid DSN: missing the slash separating the database name")
        return ConnectionSettings()

    head, tail = dsn[:slash], dsn[slash + 1 :]
    before_at, _, head = head.rpartition("@")
    account = before_at.partition(":")

    net, address = "tcp", ""
    if head:
        opening = head.find("(")
        if opening == -1:
            net = head
        else:
            if not head.endswith(")"):
                raise ValueError(
                    "invalid DSN: network address not terminated (missing closing brace)"
                )
            net, address = head[:opening], head[opening + 1 : -1]

    if not address:
        address = _DEFAULT_UNIX_ADDRESS if net == "unix" else _DEFAULT_TCP_ADDRESS
    elif net == "tcp":
        address = _with_default_port(address)

    database, _, query = tail.partition("?")
    params = dict(parse_qsl(query, keep_blank_values=True))
    return ConnectionSettings(
        user=account[0],
        password=account[2],
        net=net,
        address=address,
        database=unquote(database),
        params=params,
    )


def _connect_kwargs(settings: ConnectionSettings) -> dict[str, Any]:
    kwargs: dict[str, Any] = {
        "user": settings.user,
        "password": settings.password,
        "database": settings.database or None,
        "autocommit": True,
    }
    if settings.net == "unix":
        kwargs["unix_socket"] = settings.address
    else:
        kwargs["host"] = settings.host
        kwargs["port"] = settings.port
    if "charset" in settings.params:
        kwargs["charset"] = settings.params["charset"].split(",")[0]
    return kwargs


_lock = threading.Lock()
_connection: Any = None


def get_mysql_db() -> Any:
    """Return the shared connection, opening it from ``SQL_DSN`` on first use."""
    global _connection
    with _lock:
        if _connection is None:
            settings = parse_dsn(os.environ.get("SQL_DSN", ""))
            try:
                connection = pymysql.connect(**_connect_kwargs(settings))
            except pymysql.MySQLError as exc:
                raise ConnectionError(f"Error opening database: {exc}") from exc
            try:
                connection.ping(reconnect=False)
            except pymysql.MySQLError as exc:
                connection.close()
                raise ConnectionError(f"Error connecting to the database: {exc}") from exc
            _connection = connection
        return _connection


def _reset() -> None:
    """Close and forget the shared connection."""
    global _connection
    with _lock:
        if _connection is not None:
            _connection.close()
        _connection = None