"""
Connection String Builder for PostgreSQL.
Builds libpq keyword/value strings (and URIs) from individual components.
"""
from typing import List, Optional, Tuple
from urllib.parse import quote, urlencode

from connstring.builders.formatting import join_pairs
from connstring.builders.models import PostgresParameters, replace_fields


class PostgresConnectionString:
    """
    Fluent builder for PostgreSQL connection strings.

    Every setter mutates the builder and returns it, so calls chain:

        PostgresConnectionString() \\
            .set_username_and_password("user", "password") \\
            .set_host_with_port("localhost", 5432) \\
            .set_database_name("db_name") \\
            .set_connect_timeout(30)

    renders as ``host=localhost port=5432 dbname=db_name user=user
    password=password connect_timeout=30``.

    Values are rendered verbatim. Text containing spaces, quotes or ``=``
    is not escaped.
    """

    def __init__(self):
        self._params = PostgresParameters()

    def _update(self, **changes) -> "PostgresConnectionString":
        self._params = replace_fields(self._params, **changes)
        return self

    def set_username_and_password(self, username: str, password: str) -> "PostgresConnectionString":
        """Set/replace the user and the password."""
        return self._update(username=username, password=password)

    def set_username_without_password(self, username: str) -> "PostgresConnectionString":
        """Set/replace the user and drop any previously set password."""
        return self._update(username=username, password=None)

    def set_host_with_port(self, host: str, port: int) -> "PostgresConnectionString":
        """Set/replace the host and an explicit port."""
        return self._update(host=host, port=port)

    def set_host_with_default_port(self, host: str) -> "PostgresConnectionString":
        """Set/replace the host and omit the port, so libpq falls back to 5432."""
        return self._update(host=host, port=None)

    def set_database_name(self, name: str) -> "PostgresConnectionString":
        return self._update(database=name)

    def set_connect_timeout(self, seconds: int) -> "PostgresConnectionString":
        """Set/replace the connect timeout in seconds. No upper bound."""
        return self._update(connect_timeout=seconds)

    def dangerously_set_parameter(self, key: str, value: str) -> "PostgresConnectionString":
        """
        Set/replace ANY parameter, even one this builder has no setter for.

        Extra parameters are rendered after the known fields, in the order
        they were first set. Keys colliding with a known keyword are not
        detected.
        """
        extra = dict(self._params.extra_parameters)
        extra[key] = value
        return self._update(extra_parameters=extra)

    def _pairs(self) -> List[Tuple[str, Optional[str]]]:
        p = self._params
        pairs = [
            ("host", p.host),
            ("port", None if p.port is None else str(p.port)),
            ("dbname", p.database),
            ("user", p.username),
            ("password", None if p.password is None else p.password.get_secret_value()),
            ("connect_timeout", None if p.connect_timeout is None else str(p.connect_timeout)),
        ]
        pairs.extend(p.extra_parameters.items())
        return pairs

    def render(self) -> str:
        """
        Build the libpq keyword/value connection string.

        Returns:
            Space-separated ``key=value`` tokens, empty when nothing is set
        """
        return join_pairs(self._pairs(), delimiter=" ")

    def render_uri(self) -> str:
        """
        Build the equivalent ``postgresql://`` URI.

        User, password, host and database are percent-encoded, the remaining
        parameters become the query string.
        """
        p = self._params
        uri = "postgresql://"

        if p.username is not None:
            uri += quote(p.username, safe="")
            if p.password is not None:
                uri += ":" + quote(p.password.get_secret_value(), safe="")
            uri += "@"

        if p.host is not None:
            uri += quote(p.host, safe="")
        if p.port is not None:
            uri += f":{p.port}"
        if p.database is not None:
            uri += "/" + quote(p.database, safe="")

        query = []
        if p.connect_timeout is not None:
            query.append(("connect_timeout", str(p.connect_timeout)))
        query.extend(p.extra_parameters.items())
        if query:
            uri += "?" + urlencode(query, quote_via=quote)

        return uri

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._params!r})"
