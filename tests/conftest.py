# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest


class RecordingProvider:
    """Serve documents from a mapping and record every requested address."""

    def __init__(self, documents: Mapping[str, Any]) -> None:
        self.documents = dict(documents)
        self.calls: list[str] = []
        self.options: list[Mapping[str, Any]] = []

    async def __call__(self, address: str, options: Mapping[str, Any]) -> Any:
        self.calls.append(address)
        self.options.append(options)
        return copy.deepcopy(self.documents.get(address, False))


@pytest.fixture
def schema_root() -> Path:
    """Return the directory holding the on-disk schema fixtures."""
    return Path(__file__).resolve().parent / "fixtures" / "schemas"


@pytest.fixture
def file_basepath(schema_root: Path) -> str:
    """Return the ``file://`` base URI of :func:`schema_root`."""
    return f"{schema_root.as_uri()}/"


@pytest.fixture
def example_documents() -> dict[str, Any]:
    """Return a root schema referencing an address schema plus en-US overlays."""
    return {
        "http://example.com/root.schema.json": {
            "$id": "http://example.com/root.schema.json",
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "address": {"$ref": "address.schema.json"},
            },
        },
        "http://example.com/address.schema.json": {
            "$id": "http://example.com/address.schema.json",
            "type": "object",
            "properties": {
                "street": {"type": "string"},
                "city": {"type": "string"},
            },
        },
        "http://example.com/root.en-US.json": {
            "properties.name.description": "Full name",
            "properties.address.description": "Address information",
        },
        "http://example.com/address.en-US.json": {
            "properties.street.description": "Street name",
            "properties.city.description": "City name",
        },
    }


@pytest.fixture
def http_provider(example_documents: dict[str, Any]) -> RecordingProvider:
    """Return a recording provider serving :func:`example_documents`."""
    return RecordingProvider(example_documents)


@pytest.fixture
def make_provider() -> type[RecordingProvider]:
    """Return the recording provider class for tests building their own corpus."""
    return RecordingProvider
