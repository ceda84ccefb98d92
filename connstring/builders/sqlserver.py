"""
Connection String Builder for SQL Server.
Builds ADO/ODBC style connection strings from individual components.
"""
from typing import List, Optional, Tuple

from connstring.builders.formatting import join_pairs
from connstring.builders.models import SqlServerParameters, replace_fields

DEFAULT_PORT = 1433


def _flag(value: Optional[bool]) -> Optional[str]:
    if value is None:
        return None
    return "yes" if value else "no"


def _number(value: Optional[int]) -> Optional[str]:
    return None if value is None else str(value)


class SqlServerConnectionString:
    """
    Fluent builder for SQL Server connection strings.

    Every token is terminated by ``;`` and the fields always appear in the
    same order: Server, Database, User Id, Password, Connect Timeout,
    Command Timeout, ConnectRetryCount, ConnectRetryInterval, Encrypt,
    TrustServerCertificate, then any extra parameters.

    Flags render as ``yes``/``no`` (the ODBC Driver 18 spelling). Values are
    not quoted, so text containing ``;`` produces a broken string.
    """

    def __init__(self):
        self._params = SqlServerParameters()

    def _update(self, **changes) -> "SqlServerConnectionString":
        self._params = replace_fields(self._params, **changes)
        return self

    def set_username_and_password(self, username: str, password: str) -> "SqlServerConnectionString":
        """Set/replace the user and the password."""
        return self._update(username=username, password=password)

    def set_username_without_password(self, username: str) -> "SqlServerConnectionString":
        """Set/replace the user and drop any previously set password."""
        return self._update(username=username, password=None)

    def set_host_with_port(self, host: str, port: int) -> "SqlServerConnectionString":
        """Set/replace the host and an explicit port (``Server=host,port``)."""
        return self._update(host=host, port=port)

    def set_host_with_default_port(self, host: str) -> "SqlServerConnectionString":
        """Set/replace the host using the default port 1433."""
        return self._update(host=host, port=DEFAULT_PORT)

    def set_database_name(self, name: str) -> "SqlServerConnectionString":
        return self._update(database=name)

    def set_connect_timeout(self, seconds: int) -> "SqlServerConnectionString":
        return self._update(connect_timeout=seconds)

    def set_command_timeout(self, seconds: int) -> "SqlServerConnectionString":
        return self._update(command_timeout=seconds)

    def set_connect_retry_count(self, count: int) -> "SqlServerConnectionString":
        """Set/replace the number of reconnect attempts (0..255)."""
        return self._update(connect_retry_count=count)

    def set_connect_retry_interval(self, seconds: int) -> "SqlServerConnectionString":
        """Set/replace the delay between reconnect attempts, clipped into 1..60."""
        return self._update(connect_retry_interval=seconds)

    def enable_encryption(self) -> "SqlServerConnectionString":
        return self._update(encrypt=True)

    def enable_encryption_and_trust_server_certificate(self) -> "SqlServerConnectionString":
        """
        Enable encryption and trust the server certificate, even if it would
        not normally be trusted (self-signed, unknown root CA).
        """
        return self._update(encrypt=True, trust_server_certificate=True)

    def dangerously_set_parameter(self, key: str, value: str) -> "SqlServerConnectionString":
        """
        Set/replace ANY parameter, even one this builder has no setter for.

        Extra parameters are rendered after the known fields, in the order
        they were first set.
        """
        extra = dict(self._params.extra_parameters)
        extra[key] = value
        return self._update(extra_parameters=extra)

    def _pairs(self) -> List[Tuple[str, Optional[str]]]:
        p = self._params
        server = p.host
        if server is not None and p.port is not None:
            server = f"{server},{p.port}"

        pairs = [
            ("Server", server),
            ("Database", p.database),
            ("User Id", p.username),
            ("Password", None if p.password is None else p.password.get_secret_value()),
            ("Connect Timeout", _number(p.connect_timeout)),
            ("Command Timeout", _number(p.command_timeout)),
            ("ConnectRetryCount", _number(p.connect_retry_count)),
            ("ConnectRetryInterval", _number(p.connect_retry_interval)),
            ("Encrypt", _flag(p.encrypt)),
            ("TrustServerCertificate", _flag(p.trust_server_certificate)),
        ]
        pairs.extend(p.extra_parameters.items())
        return pairs

    def render(self) -> str:
        """
        Build the connection string.

        Returns:
            ``Key=Value;`` tokens, empty when nothing is set
        """
        return join_pairs(self._pairs(), delimiter="", terminator=";")

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._params!r})"
