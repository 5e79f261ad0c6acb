# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the asynchronous tree visitor."""

from __future__ import annotations

import pytest

from schemacompose.traversal import VisitMatch, traverse

TREE = {"a": 1, "b": [10, {"c": None}], "d": {"e": "x"}}


@pytest.mark.asyncio
async def test_visits_parents_before_children_in_order() -> None:
    seen: list[str] = []

    def visit(node: object, path: str) -> bool:
        seen.append(path)
        return False

    assert await traverse(TREE, visit) is None
    assert seen == ["$", "$.a", "$.b", "$.b[0]", "$.b[1]", "$.b[1].c", "$.d", "$.d.e"]


@pytest.mark.asyncio
async def test_stops_at_first_truthy_result() -> None:
    seen: list[str] = []

    async def visit(node: object, path: str) -> bool:
        seen.append(path)
        return node == 10

    match = await traverse(TREE, visit)
    assert match == VisitMatch(node=10, path="$.b[0]")
    assert seen == ["$", "$.a", "$.b", "$.b[0]"]


@pytest.mark.asyncio
async def test_root_match_skips_children() -> None:
    seen: list[str] = []

    def visit(node: object, path: str) -> str:
        seen.append(path)
        return "stop"

    match = await traverse(TREE, visit)
    assert match is not None
    assert match.node is TREE
    assert match.path == "$"
    assert seen == ["$"]


@pytest.mark.asyncio
async def test_scalars_are_leaves() -> None:
    seen: list[tuple[object, str]] = []

    def visit(node: object, path: str) -> bool:
        seen.append((node, path))
        return False

    await traverse("text", visit)
    await traverse(None, visit)
    assert seen == [("text", "$"), (None, "$")]


@pytest.mark.asyncio
async def test_children_reflect_mutations_made_by_visitor() -> None:
    tree = {"keep": {"x": 1}, "drop": {"y": 2}}
    seen: list[str] = []

    def visit(node: object, path: str) -> bool:
        seen.append(path)
        if isinstance(node, dict):
            node.pop("drop", None)
        return False

    await traverse(tree, visit)
    assert seen == ["$", "$.keep", "$.keep.x"]


@pytest.mark.asyncio
async def test_custom_root_path() -> None:
    seen: list[str] = []

    def visit(node: object, path: str) -> bool:
        seen.append(path)
        return False

    await traverse([1], visit, "$.items")
    assert seen == ["$.items", "$.items[0]"]


@pytest.mark.asyncio
async def test_rejects_non_callable_visitor() -> None:
    with pytest.raises(TypeError):
        await traverse({}, "not callable")  # type: ignore[arg-type]
