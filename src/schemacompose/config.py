# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Loader options and environment-derived defaults."""

from __future__ import annotations

import os
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ConfigError
from .interfaces import ContentProvider
from .localization import DEFAULT_SCHEMA_SUFFIX
from .providers import DEFAULT_HTTP_TIMEOUT, default_providers

DEFAULT_LANG: Final[str] = "en-US"
_LANG_ENV_VAR: Final[str] = "SCHEMACOMPOSE_LANG"
_SUFFIX_ENV_VAR: Final[str] = "SCHEMACOMPOSE_SCHEMA_SUFFIX"
_TIMEOUT_ENV_VAR: Final[str] = "SCHEMACOMPOSE_HTTP_TIMEOUT"

ProviderCallable = Callable[[str, Mapping[str, Any]], Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class LoaderSettings:
    """Define process-wide defaults for schema loading.

    Attributes:
        lang: Language tag used to locate localization overlays.
        schema_suffix: Suffix replaced by ``.<lang>.json`` to address overlays.
        http_timeout: Timeout in seconds applied by the default HTTP provider.
    """

    lang: str = DEFAULT_LANG
    schema_suffix: str = DEFAULT_SCHEMA_SUFFIX
    http_timeout: float = DEFAULT_HTTP_TIMEOUT


def settings_from_environment(env: Mapping[str, str] | None = None, *, include_timeout: bool = True) -> LoaderSettings:
    """Return loader settings with overrides read from ``env``.

    Args:
        env: Environment mapping; defaults to :data:`os.environ`.
        include_timeout: ``False`` leaves the HTTP timeout at its default
            without parsing the environment override.

    Returns:
        LoaderSettings: Defaults updated with any configured overrides.

    Raises:
        ConfigError: If the HTTP timeout override is not a positive number.
    """

    source = os.environ if env is None else env
    lang = source.get(_LANG_ENV_VAR) or DEFAULT_LANG
    schema_suffix = source.get(_SUFFIX_ENV_VAR) or DEFAULT_SCHEMA_SUFFIX
    raw_timeout = source.get(_TIMEOUT_ENV_VAR) if include_timeout else None
    if not raw_timeout:
        return LoaderSettings(lang=lang, schema_suffix=schema_suffix)
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        raise ConfigError(f"{_TIMEOUT_ENV_VAR} must be a number, got {raw_timeout!r}") from exc
    if timeout <= 0:
        raise ConfigError(f"{_TIMEOUT_ENV_VAR} must be positive, got {raw_timeout!r}")
    return LoaderSettings(lang=lang, schema_suffix=schema_suffix, http_timeout=timeout)


class LoaderOptions(BaseModel):
    """Options shared by ``load_schema`` and ``load``.

    ``passthrough`` is handed untouched to every content provider call.
    """

    model_config = ConfigDict(frozen=True)

    lang: str = DEFAULT_LANG
    providers: dict[str, ProviderCallable] = Field(default_factory=dict)
    schema_suffix: str = DEFAULT_SCHEMA_SUFFIX
    passthrough: dict[str, Any] = Field(default_factory=dict)

    @field_validator("lang")
    @classmethod
    def _require_lang(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("lang must not be blank")
        return value

    @classmethod
    def build(
        cls,
        *,
        lang: str | None = None,
        providers: Mapping[str, ContentProvider] | None = None,
        schema_suffix: str | None = None,
        passthrough: Mapping[str, Any] | None = None,
        settings: LoaderSettings | None = None,
    ) -> LoaderOptions:
        """Return options where explicit arguments win over ``settings``.

        Args:
            lang: Language tag for localization overlays.
            providers: Protocol to content provider table. ``None`` selects the
                default HTTP(S) providers; an empty mapping registers none.
            schema_suffix: Conventional schema document suffix.
            passthrough: Extra options forwarded to providers.
            settings: Defaults; read from the environment when omitted. The
                timeout override is only parsed when ``providers`` is ``None``.

        Returns:
            LoaderOptions: Validated options.
        """

        if settings is not None:
            resolved = settings
        else:
            resolved = settings_from_environment(include_timeout=providers is None)
        table = default_providers(timeout=resolved.http_timeout) if providers is None else dict(providers)
        return cls(
            lang=lang if lang is not None else resolved.lang,
            providers=table,
            schema_suffix=schema_suffix if schema_suffix is not None else resolved.schema_suffix,
            passthrough=dict(passthrough or {}),
        )


__all__ = [
    "DEFAULT_LANG",
    "LoaderOptions",
    "LoaderSettings",
    "settings_from_environment",
]
