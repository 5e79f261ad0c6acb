# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared JSON type aliases and the composition result shape."""

from __future__ import annotations

from typing import TypeAlias, TypedDict

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
JsonObject: TypeAlias = dict[str, JsonValue]
DefinitionTable: TypeAlias = dict[str, JsonValue]

Composition = TypedDict("Composition", {"$defs": DefinitionTable, "$ref": str})

__all__ = [
    "Composition",
    "DefinitionTable",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
]
