# SPDX-License-Identifier: Apache-2.0
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator


@contextmanager
def open_input(path_or_dash: str | Path) -> Iterator[BinaryIO]:
    """Yield a readable binary file-like for path or '-' (stdin) without closing stdin."""
    if str(path_or_dash) == "-":
        yield sys.stdin.buffer
    else:
        with Path(path_or_dash).open("rb") as f:
            yield f


def read_text(path_or_dash: str | Path) -> str:
    """Read UTF-8 text from a path or stdin, dropping a leading byte order mark."""
    with open_input(path_or_dash) as f:
        return f.read().decode("utf-8-sig")
