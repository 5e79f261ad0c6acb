# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Content provider contract shared by the resolver and bundled providers."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from typing import Any, Protocol, TypeAlias, runtime_checkable

from .types import JsonValue


@runtime_checkable
class ContentProvider(Protocol):
    """Fetch raw schema documents for a single URI scheme.

    Providers are registered in a capability table keyed by protocol token
    (``"http"``, ``"file"``...). They are awaited one at a time, so an
    implementation never observes concurrent calls from the same ``load``.
    Timeouts, retries and cancellation belong to the provider, not to the
    resolver. Plain ``async def`` functions with the same signature satisfy the
    contract.
    """

    @abstractmethod
    async def __call__(self, address: str, options: Mapping[str, Any]) -> JsonValue:
        """Return the parsed document stored at ``address``.

        Args:
            address: Absolute address of the document.
            options: Pass-through options supplied to ``load``/``load_schema``.

        Returns:
            JsonValue: Parsed document. A false-ish value is tolerated for
            localization sidecars and means "no overlay".
        """
        raise NotImplementedError


ProviderTable: TypeAlias = Mapping[str, ContentProvider]

__all__ = ["ContentProvider", "ProviderTable"]
