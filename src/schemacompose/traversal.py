# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Asynchronous depth-first traversal of JSON-like trees."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Final, TypeAlias

ROOT_PATH: Final[str] = "$"

VisitResult: TypeAlias = object
VisitCallback: TypeAlias = Callable[[object, str], VisitResult | Awaitable[VisitResult]]


@dataclass(frozen=True, slots=True)
class VisitMatch:
    """Node at which a traversal stopped.

    Attributes:
        node: Value for which the visitor returned a truthy result.
        path: Canonical ``$``-rooted path of ``node``.
    """

    node: object
    path: str


async def traverse(node: object, visit: VisitCallback, path: str = ROOT_PATH) -> VisitMatch | None:
    """Visit ``node`` and its descendants depth-first, parents before children.

    Mapping children are visited in key order and list children by ascending
    index. Children are enumerated after the parent's visit returns, so a
    visitor may prune or rewrite the node it is handed. ``visit`` may be a plain
    or an async callable.

    Args:
        node: Root of the (sub)tree to walk.
        visit: Callback invoked as ``visit(node, path)``.
        path: Path of ``node``; ``"$"`` for the root.

    Returns:
        VisitMatch | None: The first node for which ``visit`` returned a truthy
        value, or ``None`` when the traversal completed.

    Raises:
        TypeError: If ``visit`` is not callable.
    """

    if not callable(visit):
        raise TypeError("visit needs to be callable")
    return await _walk(node, visit, path)


async def _walk(node: object, visit: VisitCallback, path: str) -> VisitMatch | None:
    """Visit ``node`` then recurse into a snapshot of its children.

    Args:
        node: Current node.
        visit: Visitor callback.
        path: Canonical path of ``node``.

    Returns:
        VisitMatch | None: First match in this subtree, if any.
    """

    outcome = visit(node, path)
    if inspect.isawaitable(outcome):
        outcome = await outcome
    if outcome:
        return VisitMatch(node=node, path=path)
    if isinstance(node, Mapping):
        for key, child in list(node.items()):
            match = await _walk(child, visit, f"{path}.{key}")
            if match is not None:
                return match
    elif isinstance(node, list):
        for index, item in enumerate(list(node)):
            match = await _walk(item, visit, f"{path}[{index}]")
            if match is not None:
                return match
    return None


__all__ = ["ROOT_PATH", "VisitCallback", "VisitMatch", "traverse"]
