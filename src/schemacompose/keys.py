# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reference-key derivation and URI address helpers.

Every entry of the global ``$defs`` table is indexed by a reference key: a
document URI or anchor path with each ``/`` replaced by ``:``. Anchor keys are
always prefixed with the owning document key so they cannot collide with the
keys of external documents.
"""

from __future__ import annotations

from typing import Final
from urllib.parse import unquote, urldefrag, urljoin, urlsplit, urlunsplit, uses_netloc, uses_relative

KEY_SEPARATOR: Final[str] = ":"
DEFS_KEYWORD: Final[str] = "$defs"
DEFS_POINTER_PREFIX: Final[str] = "#/$defs/"
_JOIN_SCHEME: Final[str] = "http"


def key_from(reference: str) -> str:
    """Return ``reference`` with every path separator replaced by ``:``."""

    return reference.replace("/", KEY_SEPARATOR)


def resolve_address(uri: str, basepath: str) -> str:
    """Resolve ``uri`` against ``basepath`` following RFC 3986.

    :func:`urllib.parse.urljoin` refuses to join relative references for
    schemes it does not know, so such bases are joined under a stand-in scheme
    which is restored afterwards. Opaque bases such as ``urn:a/b`` have no
    hierarchy to join against and leave ``uri`` unchanged.

    Args:
        uri: Absolute or relative URI reference.
        basepath: Base URI used for relative references.

    Returns:
        str: Absolute address of ``uri``.
    """

    if urlsplit(uri).scheme or not basepath:
        return uri
    base = urlsplit(basepath)
    if not base.scheme or (base.scheme in uses_relative and base.scheme in uses_netloc):
        return urljoin(basepath, uri)
    if not base.netloc and not base.path.startswith("/"):
        return uri
    joined = urlsplit(urljoin(urlunsplit(base._replace(scheme=_JOIN_SCHEME)), uri))
    return urlunsplit(joined._replace(scheme=base.scheme))


def protocol_of(address: str) -> str:
    """Return the scheme token of ``address`` (``"http"``, ``"file"``...)."""

    return urlsplit(address).scheme


def document_key(uri: str, basepath: str) -> str:
    """Return the reference key identifying the document addressed by ``uri``.

    Addresses under the base directory are keyed by their relative remainder so
    that ``a.schema.json`` and ``./a.schema.json`` share one entry; any other
    address is keyed in full. Fragments are ignored.

    Args:
        uri: Document URI, optionally carrying a fragment.
        basepath: Base URI used to resolve ``uri``.

    Returns:
        str: Reference key of the document.
    """

    location, _ = urldefrag(uri)
    address = resolve_address(location, basepath)
    base_directory = resolve_address(".", basepath) if basepath else ""
    if base_directory and address.startswith(base_directory) and address != base_directory:
        return key_from(address[len(base_directory) :])
    return key_from(address)


def pointer_tokens(fragment: str) -> list[str]:
    """Split a URI fragment into unescaped JSON Pointer tokens.

    Args:
        fragment: Fragment text without the leading ``#``.

    Returns:
        list[str]: Decoded tokens; empty for the whole-document fragment.
    """

    pointer = unquote(fragment).lstrip("/")
    if not pointer:
        return []
    return [token.replace("~1", "/").replace("~0", "~") for token in pointer.split("/")]


def anchor_key(owner_key: str, fragment: str) -> str:
    """Return the key of the anchor ``fragment`` inside the document ``owner_key``.

    Args:
        owner_key: Reference key of the document owning the anchor.
        fragment: Fragment text without the leading ``#``.

    Returns:
        str: ``owner_key`` for the empty fragment, otherwise
        ``<owner_key>:<token>:<token>...``.
    """

    tokens = pointer_tokens(fragment)
    if not tokens:
        return owner_key
    return KEY_SEPARATOR.join([owner_key, *tokens])


def local_definition_key(owner_key: str, name: str) -> str:
    """Return the key a hoisted local definition ``name`` is stored under."""

    return KEY_SEPARATOR.join([owner_key, DEFS_KEYWORD, name])


def definition_reference(key: str) -> str:
    """Return the ``$ref`` value pointing at ``key`` in the global table."""

    return f"{DEFS_POINTER_PREFIX}{key}"


__all__ = [
    "DEFS_KEYWORD",
    "DEFS_POINTER_PREFIX",
    "KEY_SEPARATOR",
    "anchor_key",
    "definition_reference",
    "document_key",
    "key_from",
    "local_definition_key",
    "pointer_tokens",
    "protocol_of",
    "resolve_address",
]
