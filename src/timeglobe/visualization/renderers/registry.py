# SPDX-License-Identifier: Apache-2.0
"""Slug-keyed table of globe renderers."""

from __future__ import annotations

from typing import Iterable, TypeVar

from .base import GlobeRenderer

_RendererT = TypeVar("_RendererT", bound=GlobeRenderer)

_RENDERERS: dict[str, type[GlobeRenderer]] = {}


def register(renderer_cls: type[_RendererT]) -> type[_RendererT]:
    """Class decorator adding ``renderer_cls`` under its ``slug``."""

    if not issubclass(renderer_cls, GlobeRenderer):
        raise TypeError("renderer must inherit GlobeRenderer")
    slug = renderer_cls.slug
    if not slug:
        raise ValueError("renderer slug must be non-empty")
    if slug in _RENDERERS:
        raise ValueError(f"renderer slug already registered: {slug}")
    _RENDERERS[slug] = renderer_cls
    return renderer_cls


def slugs() -> list[str]:
    return sorted(_RENDERERS)


def available() -> Iterable[type[GlobeRenderer]]:
    return _RENDERERS.values()


def create(slug: str, **options) -> GlobeRenderer:
    """Instantiate the renderer for ``slug`` with bundle options."""

    try:
        cls = _RENDERERS[slug]
    except KeyError as exc:
        raise KeyError(
            f"unknown renderer slug: {slug} (available: {', '.join(slugs())})"
        ) from exc
    return cls(**options)
