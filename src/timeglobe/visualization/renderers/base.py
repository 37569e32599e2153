# SPDX-License-Identifier: Apache-2.0
"""Globe bundle contract shared by renderers and the ``globe`` command."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence


@dataclass(slots=True)
class GlobeBundle:
    """Files written for one static globe page."""

    output_dir: Path
    index_html: Path
    assets: Sequence[Path] = field(default_factory=tuple)
    frame_count: int = 0


class GlobeRenderer(ABC):
    slug: str = ""
    description: str = ""

    def __init__(self, **options: Any) -> None:
        self._options: dict[str, Any] = dict(options)

    def _require(self, key: str) -> Any:
        value = self._options.get(key)
        if value is None:
            raise ValueError(f"{self.slug} renderer requires option '{key}'")
        return value

    @abstractmethod
    def build(self, *, output_dir: Path) -> GlobeBundle:
        """Write the bundle into ``output_dir``."""
