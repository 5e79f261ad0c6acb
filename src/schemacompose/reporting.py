# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich rendering of composed schema bundles."""

from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Literal

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .keys import DEFS_KEYWORD, DEFS_POINTER_PREFIX, KEY_SEPARATOR
from .traversal import traverse
from .types import Composition

_LOCAL_DEFINITION_MARKER = f"{KEY_SEPARATOR}{DEFS_KEYWORD}{KEY_SEPARATOR}"


@dataclass(slots=True)
class CompositionSummary:
    """Describe the contents of a composition.

    Attributes:
        root_key: Key of the root document in the ``$defs`` table.
        document_keys: Keys of fetched documents in discovery order.
        definition_keys: Keys of hoisted local definitions and pointer targets
            in discovery order.
        reference_count: Number of string ``$ref`` values inside the table.
    """

    root_key: str
    document_keys: list[str] = field(default_factory=list)
    definition_keys: list[str] = field(default_factory=list)
    reference_count: int = 0


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def get_console(*, color: bool, emoji: bool) -> Console:
    """Return a cached console configured for ``color`` and ``emoji``.

    Args:
        color: ``True`` when ANSI colour output should be enabled.
        emoji: ``True`` when Rich should render emoji glyphs.

    Returns:
        Console: Console shared by callers requesting the same preferences
        while the terminal state is unchanged.
    """

    return _cached_console(color, emoji, detect_tty())


@lru_cache(maxsize=None)
def _cached_console(color: bool, emoji: bool, tty: bool) -> Console:
    """Build the console for one ``(color, emoji, tty)`` combination.

    Args:
        color: ``True`` when ANSI colour output should be enabled.
        emoji: ``True`` when Rich should render emoji glyphs.
        tty: ``True`` when stdout is attached to a terminal.

    Returns:
        Console: Newly constructed console.
    """

    color_system: Literal["auto"] | None = "auto" if color and tty else None
    return Console(
        color_system=color_system,
        force_terminal=tty,
        no_color=not (color and tty),
        emoji=emoji,
        soft_wrap=True,
    )


async def summarize_composition(composition: Composition) -> CompositionSummary:
    """Collect the document, definition and reference counts of ``composition``.

    Args:
        composition: Result returned by :func:`schemacompose.load`.

    Returns:
        CompositionSummary: Keys grouped by kind plus the reference count.
    """

    summary = CompositionSummary(root_key=composition["$ref"].removeprefix(DEFS_POINTER_PREFIX))
    table = composition["$defs"]
    for key in table:
        if _is_nested_key(key, table):
            summary.definition_keys.append(key)
        else:
            summary.document_keys.append(key)
    summary.reference_count = await _count_references(table)
    return summary


def _is_nested_key(key: str, table: Mapping[str, object]) -> bool:
    """Return ``True`` when ``key`` names a node inside another table entry."""

    if _LOCAL_DEFINITION_MARKER in key:
        return True
    return any(key.startswith(f"{other}{KEY_SEPARATOR}") for other in table if other != key)


async def _count_references(table: Mapping[str, object]) -> int:
    """Return the number of string ``$ref`` values found in ``table``."""

    found: list[str] = []

    def collect(node: object, path: str) -> bool:
        _ = path
        if isinstance(node, Mapping) and isinstance(node.get("$ref"), str):
            found.append(node["$ref"])
        return False

    await traverse(table, collect)
    return len(found)


def create_composition_panel(summary: CompositionSummary, *, color: bool, emoji: bool) -> Panel:
    """Create a Rich panel listing the entries of a composition.

    Args:
        summary: Summary computed by :func:`summarize_composition`.
        color: Flag indicating whether colour styling is applied.
        emoji: Flag indicating whether the title carries an emoji.

    Returns:
        Panel: Panel with one row per ``$defs`` entry.
    """

    table = Table(box=box.SIMPLE_HEAVY if color else box.SIMPLE, pad_edge=False)
    table.add_column("key", style="cyan" if color else None, no_wrap=True)
    table.add_column("kind", justify="left")
    for key in summary.document_keys:
        kind = "root" if key == summary.root_key else "document"
        table.add_row(Text(key), Text(kind, style="green" if color else ""))
    for key in summary.definition_keys:
        table.add_row(Text(key), Text("definition", style="yellow" if color else ""))
    title = f"{len(summary.document_keys)} documents, {summary.reference_count} references"
    if emoji:
        title = f"🧩 {title}"
    panel = Panel.fit(table, title=title, padding=(0, 1))
    if color:
        panel.border_style = "blue"
    return panel


async def render_composition(
    composition: Composition,
    *,
    color: bool = True,
    emoji: bool = True,
    console: Console | None = None,
) -> CompositionSummary:
    """Print a panel describing ``composition`` and return its summary."""

    summary = await summarize_composition(composition)
    target = console if console is not None else get_console(color=color, emoji=emoji)
    target.print(create_composition_panel(summary, color=color, emoji=emoji))
    return summary


__all__ = [
    "CompositionSummary",
    "create_composition_panel",
    "detect_tty",
    "get_console",
    "render_composition",
    "summarize_composition",
]
