# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Dot and bracket notation accessors for nested mapping/list structures.

Paths such as ``properties.name.description``, ``items[0].title`` or
``a["b.c"].d`` are tokenised into :class:`PathSegment` entries. Only bracketed
bare digits address list positions; ``a.0`` names the mapping key ``"0"``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, MutableMapping, MutableSequence
from dataclasses import dataclass
from typing import Final, TypeVar

_SEGMENT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"""([^.\[\]]+)|\[(\d+)\]|\["([^"]+)"\]|\['([^']+)'\]""",
)

ContainerT = TypeVar("ContainerT", MutableMapping, MutableSequence)
DefaultT = TypeVar("DefaultT")


@dataclass(frozen=True, slots=True)
class PathSegment:
    """Describe one step of a tokenised path.

    Attributes:
        key: Literal key text. Array indices keep their digit string.
        is_array_index: ``True`` when the segment came from ``[<digits>]``.
    """

    key: str
    is_array_index: bool = False

    @property
    def index(self) -> int:
        """Return the integer position addressed by an array-index segment."""

        return int(self.key)


def tokenize_path(path: str) -> list[PathSegment]:
    """Split ``path`` into ordered segments.

    Args:
        path: Dot/bracket notation path.

    Returns:
        list[PathSegment]: Segments in walk order. An empty path yields a single
        empty plain-key segment.

    Raises:
        TypeError: If ``path`` is not a string.
    """

    if not isinstance(path, str):
        raise TypeError("path needs to be a string")
    if path == "":
        return [PathSegment("")]
    segments: list[PathSegment] = []
    for match in _SEGMENT_PATTERN.finditer(path):
        plain, index, double_quoted, single_quoted = match.groups()
        if plain is not None:
            segments.append(PathSegment(plain))
        elif index is not None:
            segments.append(PathSegment(index, is_array_index=True))
        elif double_quoted is not None:
            segments.append(PathSegment(double_quoted))
        else:
            segments.append(PathSegment(single_quoted))
    return segments


def _ensure_container(root: object) -> None:
    """Raise when ``root`` cannot hold paths.

    Args:
        root: Candidate root passed to an accessor.

    Raises:
        TypeError: If ``root`` is not a mutable mapping or list.
    """

    if not isinstance(root, (MutableMapping, MutableSequence)):
        raise TypeError("root needs to be a mapping or a list")


def _is_container(value: object) -> bool:
    """Return ``True`` when ``value`` can be walked into."""

    return isinstance(value, (Mapping, MutableSequence))


def _contains(container: object, segment: PathSegment) -> bool:
    """Return ``True`` when ``container`` holds a value for ``segment``."""

    if isinstance(container, Mapping):
        return segment.key in container
    if isinstance(container, MutableSequence) and segment.is_array_index:
        return segment.index < len(container)
    return False


def _child(container: Mapping | MutableSequence, segment: PathSegment) -> object:
    """Return the value ``segment`` addresses inside ``container``.

    Args:
        container: Mapping or list known to hold ``segment``.
        segment: Key or array-index segment.

    Returns:
        object: Stored child value.
    """

    if isinstance(container, Mapping):
        return container[segment.key]
    return container[segment.index]


def get_path(root: Mapping | MutableSequence, path: str, default: DefaultT | None = None) -> object | DefaultT | None:
    """Return the value stored at ``path`` inside ``root``.

    A key that exists with a ``None`` value is returned as ``None``; only an
    absent key (or a ``None`` intermediate) produces ``default``.

    Args:
        root: Mapping or list to read from.
        path: Dot/bracket notation path.
        default: Value returned when the path cannot be resolved.

    Returns:
        object | None: Stored value or ``default``.

    Raises:
        TypeError: If ``root`` is not a mapping or list.
    """

    _ensure_container(root)
    current: object = root
    segments = tokenize_path(path)
    last = len(segments) - 1
    for position, segment in enumerate(segments):
        if current is None:
            return default
        if not _contains(current, segment):
            return default
        value = _child(current, segment)  # type: ignore[arg-type]
        if position == last:
            return value
        current = value
    return default


def _assign(container: object, segment: PathSegment, value: object) -> None:
    """Store ``value`` under ``segment``, padding lists with ``None``.

    Args:
        container: Mapping or list being written.
        segment: Key or array-index segment.
        value: Value to store.

    Raises:
        TypeError: If ``container`` cannot hold ``segment``.
    """

    if isinstance(container, MutableMapping):
        container[segment.key] = value
        return
    if isinstance(container, MutableSequence) and segment.is_array_index:
        index = segment.index
        if index >= len(container):
            container.extend([None] * (index - len(container) + 1))
        container[index] = value
        return
    raise TypeError(f"cannot assign key '{segment.key}' on {type(container).__name__}")


def set_path(root: ContainerT, path: str, value: object) -> ContainerT:
    """Store ``value`` at ``path`` creating intermediate containers on demand.

    Missing or scalar intermediates are replaced by a new list when the next
    segment is an array index and by a new dict otherwise. Existing mapping and
    list intermediates are walked into, never replaced.

    Args:
        root: Mapping or list to modify in place.
        path: Dot/bracket notation path.
        value: Value stored at the final segment.

    Returns:
        Mapping or list: ``root`` after mutation.

    Raises:
        TypeError: If ``root`` is not a mapping or list, or a plain key targets a list.
    """

    _ensure_container(root)
    current: object = root
    segments = tokenize_path(path)
    if not segments:
        return root
    for segment, following in zip(segments, segments[1:]):
        child = _child(current, segment) if _contains(current, segment) else None  # type: ignore[arg-type]
        if not _is_container(child):
            child = [] if following.is_array_index else {}
            _assign(current, segment, child)
        current = child
    _assign(current, segments[-1], value)
    return root


def delete_path(root: MutableMapping | MutableSequence, path: str) -> bool:
    """Remove the value stored at ``path``.

    Missing intermediates make the call a no-op. List positions are removed
    with the following items shifting down.

    Args:
        root: Mapping or list to modify in place.
        path: Dot/bracket notation path.

    Returns:
        bool: Always ``True``.

    Raises:
        TypeError: If ``root`` is not a mapping or list, or ``path`` is not a string.
    """

    _ensure_container(root)
    segments = tokenize_path(path)
    current: object = root
    if not segments:
        return True
    for segment in segments[:-1]:
        if not _is_container(current) or not _contains(current, segment):
            return True
        current = _child(current, segment)  # type: ignore[arg-type]
    final = segments[-1]
    if isinstance(current, MutableMapping):
        current.pop(final.key, None)
    elif isinstance(current, MutableSequence) and final.is_array_index and final.index < len(current):
        del current[final.index]
    return True


__all__ = [
    "PathSegment",
    "delete_path",
    "get_path",
    "set_path",
    "tokenize_path",
]
