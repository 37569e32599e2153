# SPDX-License-Identifier: Apache-2.0
"""Logging setup shared by command line handlers."""

from __future__ import annotations

import logging
import os
from typing import Any

VERBOSITY_ENV = "TIMEGLOBE_VERBOSITY"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "quiet": logging.ERROR,
}


def verbosity_level(value: str | None = None) -> int:
    """Map a verbosity name (``debug``, ``info``, ``quiet``) to a logging level."""

    name = (value if value is not None else os.environ.get(VERBOSITY_ENV, "info"))
    return _LEVELS.get(name.strip().lower(), logging.INFO)


def apply_verbosity_flags(ns: Any) -> None:
    """Export ``--verbose``/``--quiet`` flags from an argparse namespace."""

    if getattr(ns, "verbose", False):
        os.environ[VERBOSITY_ENV] = "debug"
    elif getattr(ns, "quiet", False):
        os.environ[VERBOSITY_ENV] = "quiet"


def configure_logging_from_env() -> None:
    """Configure root logging according to ``TIMEGLOBE_VERBOSITY``.

    Safe to call more than once; the level is updated on every call so a
    later ``--verbose`` flag still takes effect.
    """

    level = verbosity_level()
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    root.setLevel(level)
