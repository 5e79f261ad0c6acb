# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compose JSON Schemas spread across documents into one self-contained bundle."""

from __future__ import annotations

from importlib import metadata

from .config import DEFAULT_LANG, LoaderOptions, LoaderSettings, settings_from_environment
from .errors import ConfigError, ContentFetchError, ProtocolNotImplementedError, SchemaComposeError
from .interfaces import ContentProvider
from .paths import PathSegment, delete_path, get_path, set_path, tokenize_path
from .providers import FileContentProvider, HttpContentProvider, default_providers
from .reporting import CompositionSummary, render_composition, summarize_composition
from .resolver import ResolutionSession, load, load_schema
from .traversal import VisitMatch, traverse
from .types import Composition, JsonValue

try:
    __version__ = metadata.version("schemacompose")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"

__all__ = [
    "Composition",
    "CompositionSummary",
    "ConfigError",
    "ContentFetchError",
    "ContentProvider",
    "DEFAULT_LANG",
    "FileContentProvider",
    "HttpContentProvider",
    "JsonValue",
    "LoaderOptions",
    "LoaderSettings",
    "PathSegment",
    "ProtocolNotImplementedError",
    "ResolutionSession",
    "SchemaComposeError",
    "VisitMatch",
    "__version__",
    "default_providers",
    "delete_path",
    "get_path",
    "load",
    "load_schema",
    "render_composition",
    "set_path",
    "settings_from_environment",
    "summarize_composition",
    "tokenize_path",
    "traverse",
]
