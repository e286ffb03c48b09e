from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional

from bfzip.core.cursor import CursorStrategy, STRATEGIES


@dataclass
class BreadthFirstSearchConfig:
    # budget
    n_trials: int = 20  # capped to the size of the grid
    direction: Literal["maximize", "minimize"] = "maximize"
    # optuna study
    study_name: str = "breadth_first_search"
    storage_url: Optional[str] = None  # None -> in-memory study
    # enumeration
    strategy: CursorStrategy = "auto"
    # output
    progress: bool = False
    verbose: bool = False

    def validate(self) -> None:
        if self.n_trials <= 0:
            raise ValueError("n_trials must be > 0.")
        if self.direction not in ("maximize", "minimize"):
            raise ValueError(f"direction must be 'maximize' or 'minimize', got {self.direction!r}.")
        if self.strategy not in STRATEGIES:
            raise ValueError(f"strategy must be one of {STRATEGIES}, got {self.strategy!r}.")
