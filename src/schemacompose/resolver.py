# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compose a schema and every document it references into one bundle.

:func:`load` fetches the root document, walks it depth-first and, for every
external ``$ref`` it meets, fetches the target once, stores it in a global
``$defs`` table and rewrites the reference to ``#/$defs/<key>``. Local
``$defs`` blocks are lifted into the same table and internal anchors are
rewritten against the namespace of the document that owns them. The result is
always ``{"$defs": table, "$ref": "#/$defs/<root key>"}`` so that circular
references never require inlining.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from functools import partial
from typing import Any

from .config import LoaderOptions
from .errors import ProtocolNotImplementedError
from .interfaces import ContentProvider
from .keys import (
    DEFS_KEYWORD,
    anchor_key,
    definition_reference,
    document_key,
    local_definition_key,
    pointer_tokens,
    protocol_of,
    resolve_address,
)
from .localization import apply_overlay, localization_address
from .traversal import traverse
from .types import Composition, DefinitionTable, JsonValue

LOGGER = logging.getLogger(__name__)

REF_KEYWORD = "$ref"
_FRAGMENT_MARKER = "#"
_UNRESOLVED = object()


async def load_schema(
    uri: str,
    basepath: str,
    *,
    lang: str | None = None,
    providers: Mapping[str, ContentProvider] | None = None,
    schema_suffix: str | None = None,
    options: LoaderOptions | None = None,
    **passthrough: Any,
) -> JsonValue:
    """Fetch one schema document and merge its localization overlay.

    Args:
        uri: Absolute or relative URI of the document.
        basepath: Base URI relative references are resolved against.
        lang: Language tag of the overlay; defaults to ``"en-US"``.
        providers: Protocol to content provider table; defaults to HTTP(S).
        schema_suffix: Suffix replaced by ``.<lang>.json`` to find the overlay.
        options: Pre-built options; keyword arguments are ignored when given.
        **passthrough: Extra options forwarded verbatim to providers.

    Returns:
        JsonValue: The fetched document with the overlay applied.

    Raises:
        ProtocolNotImplementedError: If no provider serves the URI scheme.
    """

    resolved = options if options is not None else LoaderOptions.build(
        lang=lang,
        providers=providers,
        schema_suffix=schema_suffix,
        passthrough=passthrough,
    )
    return await _fetch_document(uri, basepath, resolved)


async def load(
    uri: str,
    basepath: str,
    *,
    lang: str | None = None,
    providers: Mapping[str, ContentProvider] | None = None,
    schema_suffix: str | None = None,
    options: LoaderOptions | None = None,
    **passthrough: Any,
) -> Composition:
    """Resolve ``uri`` and everything it references into one composition.

    Args:
        uri: Absolute or relative URI of the root document.
        basepath: Base URI every relative reference is resolved against.
        lang: Language tag of localization overlays; defaults to ``"en-US"``.
        providers: Protocol to content provider table; defaults to HTTP(S).
        schema_suffix: Suffix replaced by ``.<lang>.json`` to find overlays.
        options: Pre-built options; keyword arguments are ignored when given.
        **passthrough: Extra options forwarded verbatim to providers.

    Returns:
        Composition: ``{"$defs": {...}, "$ref": "#/$defs/<root key>"}``.

    Raises:
        ProtocolNotImplementedError: If a document uses a scheme without provider.
    """

    resolved = options if options is not None else LoaderOptions.build(
        lang=lang,
        providers=providers,
        schema_suffix=schema_suffix,
        passthrough=passthrough,
    )
    return await ResolutionSession(basepath, resolved).run(uri)


async def _fetch_document(uri: str, basepath: str, options: LoaderOptions) -> JsonValue:
    """Fetch ``uri`` with the provider registered for its scheme.

    Failures while fetching the localization overlay are logged and the
    document is returned without it.

    Args:
        uri: Absolute or relative URI of the document.
        basepath: Base URI relative references are resolved against.
        options: Resolved loader options.

    Returns:
        JsonValue: The fetched document with any overlay applied.

    Raises:
        ProtocolNotImplementedError: If no provider serves the URI scheme.
    """

    address = resolve_address(uri, basepath)
    protocol = protocol_of(address)
    provider = options.providers.get(protocol)
    if provider is None:
        raise ProtocolNotImplementedError(protocol)
    LOGGER.debug("loading schema %s", address)
    document = await provider(address, options.passthrough)
    overlay_address = localization_address(address, options.lang, schema_suffix=options.schema_suffix)
    if overlay_address is None:
        LOGGER.debug("no localization address for %s", address)
        return document
    try:
        overlay = await provider(overlay_address, options.passthrough)
    except Exception as exc:
        LOGGER.debug("localization %s unavailable: %s", overlay_address, exc)
        return document
    return apply_overlay(document, overlay)


class ResolutionSession:
    """Own the global definition table for exactly one :func:`load` call.

    Documents are fetched sequentially in discovery order. A reference key is
    checked against the table before anything is fetched, which keeps cyclic
    document graphs finite.
    """

    def __init__(self, basepath: str, options: LoaderOptions) -> None:
        """Initialise an empty table for documents resolved against ``basepath``."""

        self._basepath = basepath
        self._options = options
        self._definitions: DefinitionTable = {}

    @property
    def definitions(self) -> DefinitionTable:
        """Return the table built so far, in discovery order."""

        return self._definitions

    async def run(self, uri: str) -> Composition:
        """Load ``uri`` as the root document and resolve it transitively."""

        root_key = document_key(uri, self._basepath)
        root = await _fetch_document(uri, self._basepath, self._options)
        self._definitions[root_key] = root
        await self._visit_document(root, root_key)
        return {"$defs": self._definitions, "$ref": definition_reference(root_key)}

    async def _visit_document(self, node: JsonValue, owner_key: str) -> None:
        """Traverse ``node`` rewriting references against ``owner_key``."""

        await traverse(node, partial(self._discover, owner_key=owner_key))

    async def _discover(self, node: object, path: str, *, owner_key: str) -> bool:
        """Rewrite references found on ``node``; never stops the traversal."""

        if not isinstance(node, MutableMapping):
            return False
        if DEFS_KEYWORD in node and isinstance(node[DEFS_KEYWORD], Mapping):
            await self._hoist_definitions(node, owner_key)
        reference = node.get(REF_KEYWORD)
        if isinstance(reference, str):
            node[REF_KEYWORD] = await self._rewrite_reference(reference, owner_key)
        elif REF_KEYWORD in node:
            LOGGER.debug("keeping non-string $ref at %s as data", path)
        return False

    async def _hoist_definitions(self, node: MutableMapping[str, Any], owner_key: str) -> None:
        """Move the ``$defs`` block of ``node`` into the global table.

        Args:
            node: Mapping carrying a mapping-valued ``$defs`` entry.
            owner_key: Key of the document owning ``node``.
        """

        local = node.pop(DEFS_KEYWORD)
        hoisted = []
        for name, definition in local.items():
            key = local_definition_key(owner_key, name)
            if key in self._definitions:
                LOGGER.warning("local definition %s is defined more than once; keeping the last one", key)
            self._definitions[key] = definition
            hoisted.append(definition)
            LOGGER.debug("hoisted local definition %s", key)
        for definition in hoisted:
            await self._visit_document(definition, owner_key)

    async def _rewrite_reference(self, reference: str, owner_key: str) -> str:
        """Return the rewritten form of ``reference``, fetching its document once.

        Args:
            reference: Original ``$ref`` string.
            owner_key: Key of the document containing the reference.

        Returns:
            str: ``#/$defs/<key>`` pointer into the global table.
        """

        location, _, fragment = reference.partition(_FRAGMENT_MARKER)
        if not location:
            return definition_reference(self._register_anchor(owner_key, fragment))
        key = document_key(location, self._basepath)
        if key in self._definitions:
            LOGGER.debug("reusing %s for %s", key, reference)
        else:
            document = await _fetch_document(location, self._basepath, self._options)
            self._definitions[key] = document
            await self._visit_document(document, key)
        return definition_reference(self._register_anchor(key, fragment))

    def _register_anchor(self, owner_key: str, fragment: str) -> str:
        """Return the table key of ``fragment`` inside ``owner_key``.

        Anchors missing from the table are resolved as JSON Pointers and the
        addressed node is stored under the anchor key.

        Args:
            owner_key: Key of the document the fragment belongs to.
            fragment: Fragment text without the leading ``#``.

        Returns:
            str: Anchor key of the fragment.
        """

        key = anchor_key(owner_key, fragment)
        if key in self._definitions:
            return key
        target = self._resolve_pointer(owner_key, pointer_tokens(fragment))
        if target is _UNRESOLVED:
            LOGGER.debug("pointer #%s is not resolvable in %s yet", fragment, owner_key)
        else:
            self._definitions[key] = target
            LOGGER.debug("registered pointer target %s", key)
        return key

    def _resolve_pointer(self, owner_key: str, tokens: list[str]) -> object:
        """Walk ``tokens`` from the document stored under ``owner_key``.

        A ``$defs`` token the walked mapping no longer carries continues at the
        hoisted definition named by the following token.

        Args:
            owner_key: Key of the document the pointer starts from.
            tokens: Unescaped JSON Pointer tokens.

        Returns:
            object: The addressed node, or ``_UNRESOLVED``.
        """

        current = self._definitions.get(owner_key, _UNRESOLVED)
        position = 0
        while position < len(tokens) and current is not _UNRESOLVED:
            token = tokens[position]
            if isinstance(current, Mapping) and token in current:
                current = current[token]
            elif isinstance(current, Mapping) and token == DEFS_KEYWORD and position + 1 < len(tokens):
                position += 1
                current = self._definitions.get(local_definition_key(owner_key, tokens[position]), _UNRESOLVED)
            elif isinstance(current, list) and token.isdigit() and int(token) < len(current):
                current = current[int(token)]
            else:
                current = _UNRESOLVED
            position += 1
        return current


__all__ = ["REF_KEYWORD", "ResolutionSession", "load", "load_schema"]
