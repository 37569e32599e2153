# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import argparse
import io
import logging

from timeglobe.utils import io_utils
from timeglobe.utils.cli_helpers import (
    VERBOSITY_ENV,
    apply_verbosity_flags,
    configure_logging_from_env,
    verbosity_level,
)


def test_verbosity_level_names(monkeypatch) -> None:
    monkeypatch.delenv(VERBOSITY_ENV, raising=False)
    assert verbosity_level() == logging.INFO
    assert verbosity_level("DEBUG") == logging.DEBUG
    assert verbosity_level("quiet") == logging.ERROR
    assert verbosity_level("loud") == logging.INFO


def test_flags_export_env(monkeypatch, request) -> None:
    monkeypatch.delenv(VERBOSITY_ENV, raising=False)
    root = logging.getLogger()
    request.addfinalizer(lambda level=root.level: root.setLevel(level))
    apply_verbosity_flags(argparse.Namespace(verbose=True, quiet=False))
    configure_logging_from_env()
    assert logging.getLogger().level == logging.DEBUG
    apply_verbosity_flags(argparse.Namespace(verbose=False, quiet=True))
    configure_logging_from_env()
    assert logging.getLogger().level == logging.ERROR


def test_read_text_from_stdin(monkeypatch) -> None:
    fake = io.TextIOWrapper(io.BytesIO(b"\xef\xbb\xbfhello"), encoding="utf-8")
    monkeypatch.setattr(io_utils.sys, "stdin", fake)
    assert io_utils.read_text("-") == "hello"
