"""Connection settings used when opening a database connection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Union

DEFAULT_PORT = 3306

ConnectOptionValue = Union[bool, int, str]


@dataclass
class Account:
    """Host, credentials and options for connecting to a database.

    Changing an account after a connection was established has no effect on it.
    When ``unix_socket`` is set, host and port are ignored.
    """

    host_name: str
    user_name: str
    password: str = field(repr=False)
    schema: str = ""
    port: int = DEFAULT_PORT
    unix_socket: str = ""
    auto_commit: bool = True
    ssl_key: str = ""
    ssl_certificate: str = field(default="", repr=False)
    ssl_ca: str = ""
    ssl_ca_path: str = ""
    ssl_cipher: str = ""
    options: dict[str, str] = field(default_factory=dict)
    connect_options: dict[Hashable, ConnectOptionValue] = field(default_factory=dict)

    def set_ssl(self, key: str, certificate: str, ca: str, ca_path: str, cipher: str) -> None:
        """Set the SSL key, certificate, CA file, CA directory and allowed ciphers."""
        self.ssl_key = key
        self.ssl_certificate = certificate
        self.ssl_ca = ca
        self.ssl_ca_path = ca_path
        self.ssl_cipher = cipher

    def option(self, name: str) -> str:
        """The value of a named option, or an empty string if it was never set."""
        return self.options.get(name, "")

    def set_option(self, name: str, value: str) -> None:
        """Set a named option applied with ``SET OPTION`` after connecting."""
        self.options[name] = value

    def clear_options(self) -> None:
        """Remove every named option."""
        self.options.clear()

    def set_connect_option(self, option: Hashable, arg: ConnectOptionValue) -> None:
        """Set an option passed to the client when connecting."""
        if not isinstance(arg, (bool, int, str)):
            raise TypeError(
                f"connect option value must be bool, int or str, not {type(arg).__name__}"
            )
        self.connect_options[option] = arg

    def clear_connect_options(self) -> None:
        """Remove every connect option."""
        self.connect_options.clear()