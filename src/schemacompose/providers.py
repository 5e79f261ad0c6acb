# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Bundled content providers for ``http(s)://`` and ``file://`` addresses."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final
from urllib.parse import urlsplit
from urllib.request import url2pathname

import httpx
import yaml

from .errors import ContentFetchError
from .interfaces import ContentProvider
from .types import JsonValue

LOGGER = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT: Final[float] = 30.0
_YAML_SUFFIXES: Final[frozenset[str]] = frozenset({".yaml", ".yml"})


class HttpContentProvider(ContentProvider):
    """Fetch JSON documents over HTTP(S) with httpx.

    A shared :class:`httpx.AsyncClient` may be injected; otherwise a short-lived
    client is opened for every request. ``headers`` found in the pass-through
    options are merged over the provider defaults.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        headers: Mapping[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the provider with request defaults.

        Args:
            timeout: Timeout in seconds for clients opened per request.
            headers: Headers sent with every request.
            client: Shared client used instead of per-request clients.
        """

        self._timeout = timeout
        self._headers = {str(key): str(value) for key, value in (headers or {}).items()}
        self._client = client

    async def __call__(self, address: str, options: Mapping[str, Any]) -> JsonValue:
        """Return the JSON body served at ``address``.

        Args:
            address: Absolute ``http``/``https`` address.
            options: Pass-through options; an optional ``headers`` mapping is honoured.

        Returns:
            JsonValue: Decoded JSON body.

        Raises:
            ContentFetchError: If the server answers with a non-2xx status.
        """

        headers = dict(self._headers)
        headers.update({str(key): str(value) for key, value in dict(options.get("headers") or {}).items()})
        LOGGER.debug("fetching %s", address)
        if self._client is not None:
            response = await self._client.get(address, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
                response = await client.get(address, headers=headers)
        if not response.is_success:
            raise ContentFetchError(response.status_code, address)
        return response.json()


class FileContentProvider(ContentProvider):
    """Read JSON or YAML documents from ``file://`` addresses."""

    def __init__(self, *, encoding: str = "utf-8") -> None:
        """Initialise the provider with the text ``encoding`` of schema files."""

        self._encoding = encoding

    async def __call__(self, address: str, options: Mapping[str, Any]) -> JsonValue:
        """Return the document stored at the local path behind ``address``.

        Args:
            address: Absolute ``file://`` address.
            options: Pass-through options (unused).

        Returns:
            JsonValue: Parsed JSON, or YAML for ``.yaml``/``.yml`` files.

        Raises:
            FileNotFoundError: If the file does not exist.
        """

        _ = options
        path = path_from_file_address(address)
        LOGGER.debug("reading %s", path)
        text = await asyncio.to_thread(path.read_text, encoding=self._encoding)
        if path.suffix.lower() in _YAML_SUFFIXES:
            return yaml.safe_load(text)
        return json.loads(text)


def path_from_file_address(address: str) -> Path:
    """Return the local filesystem path encoded in a ``file://`` address."""

    parts = urlsplit(address)
    return Path(url2pathname(parts.path))


def default_providers(*, timeout: float = DEFAULT_HTTP_TIMEOUT) -> dict[str, ContentProvider]:
    """Return the provider table used when a caller registers none.

    Args:
        timeout: Request timeout in seconds for the HTTP provider.

    Returns:
        dict[str, ContentProvider]: Providers for ``http`` and ``https``.
    """

    http = HttpContentProvider(timeout=timeout)
    return {"http": http, "https": http}


__all__ = [
    "DEFAULT_HTTP_TIMEOUT",
    "FileContentProvider",
    "HttpContentProvider",
    "default_providers",
    "path_from_file_address",
]
