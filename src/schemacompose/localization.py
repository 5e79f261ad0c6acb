# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-language overlay documents merged into fetched schemas.

A schema stored at ``.../person.schema.json`` may ship a sidecar overlay such as
``.../person.pt-BR.json``. The overlay is either a mapping of path to value::

    {"properties.name.description": "Nome completo"}

or a list of ``{"path": ..., "value": ...}`` entries. Each value is written into
the schema with :func:`schemacompose.paths.set_path`.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping, MutableSequence
from typing import Any, Final, TypeAlias

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from .paths import set_path
from .types import JsonValue

LOGGER = logging.getLogger(__name__)

DEFAULT_SCHEMA_SUFFIX: Final[str] = ".schema.json"


class OverlayEntry(BaseModel):
    """Single path/value pair of a list-form overlay."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    path: str
    value: Any = None


OverlayDocument: TypeAlias = list[OverlayEntry] | dict[str, Any]
_OVERLAY_ADAPTER: Final[TypeAdapter[OverlayDocument]] = TypeAdapter(OverlayDocument)


def localization_address(address: str, lang: str, *, schema_suffix: str = DEFAULT_SCHEMA_SUFFIX) -> str | None:
    """Return the sidecar address carrying ``lang`` overrides for ``address``.

    Args:
        address: Absolute address of the schema document.
        lang: Language tag such as ``"en-US"``.
        schema_suffix: Conventional suffix of schema documents.

    Returns:
        str | None: Overlay address, or ``None`` when ``address`` does not end
        with ``schema_suffix``.
    """

    if not schema_suffix or not address.endswith(schema_suffix):
        return None
    return f"{address[: -len(schema_suffix)]}.{lang}.json"


def overlay_entries(overlay: object) -> list[tuple[str, Any]]:
    """Normalise an overlay document into ``(path, value)`` pairs.

    Args:
        overlay: Raw overlay returned by a content provider.

    Returns:
        list[tuple[str, Any]]: Pairs in document order; empty when ``overlay``
        is false-ish or malformed.
    """

    if not overlay:
        return []
    try:
        parsed = _OVERLAY_ADAPTER.validate_python(overlay)
    except ValidationError as exc:
        LOGGER.warning("ignoring malformed localization overlay: %s", exc.errors(include_url=False))
        return []
    if isinstance(parsed, dict):
        return list(parsed.items())
    return [(entry.path, entry.value) for entry in parsed]


def apply_overlay(document: JsonValue, overlay: object) -> JsonValue:
    """Merge ``overlay`` into ``document`` in place.

    Args:
        document: Schema document fetched by a content provider.
        overlay: Raw overlay document; false-ish values are ignored.

    Returns:
        JsonValue: ``document`` after the overlay was applied.
    """

    entries = overlay_entries(overlay)
    if not entries:
        return document
    if not isinstance(document, (MutableMapping, MutableSequence)):
        LOGGER.warning("cannot localize a %s schema document", type(document).__name__)
        return document
    for path, value in entries:
        try:
            set_path(document, path, value)
        except TypeError as exc:
            LOGGER.warning("skipping localization of %r: %s", path, exc)
    return document


__all__ = [
    "DEFAULT_SCHEMA_SUFFIX",
    "OverlayEntry",
    "apply_overlay",
    "localization_address",
    "overlay_entries",
]
