from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from bfzip.core.cursor import CursorStrategy, STRATEGIES


@dataclass
class BreadthFirstZipConfig:
    strategy: CursorStrategy = "auto"  # default for inputs that are not already a Cursor
    max_index_sum: Optional[int] = None  # None -> unbounded
    verbose: bool = False

    def validate(self) -> None:
        if self.strategy not in STRATEGIES:
            raise ValueError(f"strategy must be one of {STRATEGIES}, got {self.strategy!r}.")
        if self.max_index_sum is not None and self.max_index_sum < 0:
            raise ValueError("max_index_sum must be >= 0.")
