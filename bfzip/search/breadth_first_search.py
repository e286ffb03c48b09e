from __future__ import annotations
from dataclasses import dataclass, field
from itertools import islice
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Tuple
import math
import optuna
from optuna.trial import TrialState
from tqdm.auto import tqdm

from bfzip.core.breadth_first_zip import BreadthFirstZip
from bfzip.core.zip_conf import BreadthFirstZipConfig
from bfzip.search.search_conf import BreadthFirstSearchConfig

Params = Dict[str, Any]
ConstraintFn = Callable[[Params], Tuple[bool, str]]


class Evaluator(Protocol):
    def evaluate(self, params: Params) -> float: ...


@dataclass
class SearchResult:
    best_params: Optional[Params]
    best_value: Optional[float]
    n_trials: int
    n_completed: int
    study: optuna.Study


def _pbar(iterable, **kwargs):
    return tqdm(iterable, **kwargs)


@dataclass
class BreadthFirstParamSearch:
    """
    Bounded grid search that tries parameter combinations in breadth-first order.

    Candidates of every parameter should be ordered most promising first: the
    first trials then combine the leading candidates of all parameters instead of
    sweeping the last parameter's whole list (as a nested loop would).
      search_space: {"lr": [1e-3, 1e-2, 1e-4], "ks": [3, 5, 7]}
      evaluator:    object with .evaluate(params) -> float
      constraint:   optional params -> (ok, reason); rejected params are pruned
    """
    search_space: Dict[str, Sequence[Any]]
    evaluator: Optional[Evaluator] = None
    constraint: Optional[ConstraintFn] = None
    cfg: BreadthFirstSearchConfig = field(default_factory=BreadthFirstSearchConfig)

    @staticmethod
    def _grid_size(choices: Dict[str, List[Any]]) -> int:
        return math.prod(len(c) for c in choices.values())

    def grid_size(self) -> int:
        # candidate generators are consumed here; run() materializes its own copy
        return self._grid_size({name: list(v) for name, v in self.search_space.items()})

    def run(self) -> SearchResult:
        if self.evaluator is None:
            raise ValueError("evaluator must not be None (has to provide .evaluate(params)).")
        if not self.search_space:
            raise ValueError("search_space must contain at least one parameter.")
        self.cfg.validate()

        names = list(self.search_space.keys())
        choices: Dict[str, List[Any]] = {name: list(self.search_space[name]) for name in names}
        zipper = BreadthFirstZip([choices[n] for n in names],
                                 BreadthFirstZipConfig(strategy=self.cfg.strategy))

        study = optuna.create_study(
            direction=self.cfg.direction,
            study_name=self.cfg.study_name,
            storage=self.cfg.storage_url,
            load_if_exists=bool(self.cfg.storage_url),
        )

        n_enqueued = 0
        for combo in _pbar(islice(zipper, self.cfg.n_trials), total=min(self.cfg.n_trials, self._grid_size(choices)),
                           desc="Enqueue breadth-first trials", unit="trial",
                           disable=not self.cfg.progress):
            indices = zipper.indices
            study.enqueue_trial(
                dict(zip(names, combo)),
                user_attrs={"bf_indices": list(indices), "bf_index_sum": sum(indices)},
            )
            n_enqueued += 1

        if self.cfg.verbose:
            print(f"[Search] {self.cfg.study_name}: enqueued {n_enqueued} trials "
                  f"(budget={self.cfg.n_trials}, max index_sum={zipper.index_sum})")

        def objective(trial: optuna.trial.Trial) -> float:
            params = {name: trial.suggest_categorical(name, choices[name]) for name in names}

            if self.constraint is not None:
                ok, reason = self.constraint(params)
                if not ok:
                    if self.cfg.verbose:
                        print(f"[Search] prune {params}: {reason}")
                    raise optuna.TrialPruned(f"constraint failed: {reason}")

            val = float(self.evaluator.evaluate(params))
            if self.cfg.verbose:
                print(f"[Objective] #{trial.number} index_sum={trial.user_attrs.get('bf_index_sum')} "
                      f"params={params} -> {val:.4f}")
            return val

        study.optimize(objective, n_trials=n_enqueued, show_progress_bar=False)

        completed = [t for t in study.trials if t.state == TrialState.COMPLETE]
        if not completed:
            if self.cfg.verbose:
                print(f"[Search] No completed trials for {self.cfg.study_name} (all pruned).")
            return SearchResult(best_params=None, best_value=None, n_trials=n_enqueued,
                                n_completed=0, study=study)

        best = study.best_trial
        if self.cfg.verbose:
            print(f"[Search] Best {self.cfg.study_name}: value={best.value:.6f} params={best.params}")

        return SearchResult(
            best_params=dict(best.params),
            best_value=float(best.value),
            n_trials=n_enqueued,
            n_completed=len(completed),
            study=study,
        )
