# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by schemacompose."""

from __future__ import annotations


class SchemaComposeError(RuntimeError):
    """Base class for errors raised while composing schemas."""


class ProtocolNotImplementedError(SchemaComposeError):
    """Raised when no content provider is registered for a URI scheme."""

    def __init__(self, protocol: str) -> None:
        """Initialise the error for ``protocol``.

        Args:
            protocol: Scheme token extracted from the requested address.
        """

        self.protocol = protocol
        super().__init__(f"JSONSCHEMA_LOADER_PROTOCOL_{protocol.upper()}_NOT_IMPLEMENTED")


class ContentFetchError(SchemaComposeError):
    """Raised by bundled providers when a remote document cannot be fetched."""

    def __init__(self, status_code: int, address: str) -> None:
        """Initialise the error with the HTTP status returned for ``address``.

        Args:
            status_code: HTTP status code reported by the server.
            address: Absolute address that was requested.
        """

        self.status_code = status_code
        self.address = address
        super().__init__(f"HTTP_{status_code}")


class ConfigError(SchemaComposeError):
    """Raised when loader configuration input is invalid."""


__all__ = [
    "ConfigError",
    "ContentFetchError",
    "ProtocolNotImplementedError",
    "SchemaComposeError",
]
