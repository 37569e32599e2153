# SPDX-License-Identifier: Apache-2.0
"""Globe bundle renderer registry."""

from __future__ import annotations

from . import deck_globe as _deck_globe  # noqa: F401
from .base import GlobeBundle, GlobeRenderer
from .registry import available, create, register, slugs

__all__ = [
    "GlobeBundle",
    "GlobeRenderer",
    "available",
    "create",
    "register",
    "slugs",
]
