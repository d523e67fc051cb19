from __future__ import annotations

"""Bootstrap aggregation over a base model adapter.

Each resample is an independent unit of work: it draws N row positions with
replacement from the N training rows, refits the base adapter on that resample
and predicts the fixed test set. The ensemble prediction is the elementwise
mean over resamples, computed only after every unit has finished.

Seeds are derived per unit from the unit's *name* (``<stream>/resample<i>``),
so running units in parallel yields exactly the same ensemble as running them
serially.
"""

import logging
import warnings
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np
from joblib import Parallel, delayed

from soyensemble.components.data import Dataset, PredictionVector
from soyensemble.components.evaluation.metrics import rmse
from soyensemble.components.interfaces import ModelAdapter
from soyensemble.components.models.adapters import FittedModel
from soyensemble.core.progress import ProgressCallback
from soyensemble.errors import EnsembleBuildError
from soyensemble.runtime.random.rng import RngManager, as_rng_manager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BaggingEnsemble:
    """Fitted members of a bagging ensemble.

    Only the fitted members are kept; per-member predictions are discarded once
    the mean has been taken. Two fields sit beside them: ``adapter`` is the base
    adapter that ``predict`` routes every member through, and ``oob_rmse`` is
    filled when the build requested an out-of-bag estimate.
    """

    adapter: ModelAdapter
    members: Tuple[FittedModel, ...]
    oob_rmse: Optional[float] = None

    def __len__(self) -> int:
        return len(self.members)

    def predict(self, test: Dataset) -> PredictionVector:
        """Elementwise mean of every member's prediction on ``test``."""
        total = np.zeros(test.n_rows, dtype=float)
        for model in self.members:
            total += self.adapter.predict(model, test).values
        return PredictionVector.for_dataset(total / len(self.members), test)


@dataclass(frozen=True)
class _ResampleOutput:
    index: int
    model: FittedModel
    test_pred: np.ndarray
    oob_positions: Optional[np.ndarray]
    oob_pred: Optional[np.ndarray]


def bootstrap_indices(n: int, rng: Union[None, int, np.random.Generator] = None) -> np.ndarray:
    """Draw ``n`` positions uniformly from ``0..n-1`` with replacement."""
    if n < 1:
        raise ValueError(f"Cannot bootstrap an empty sample (n={n}).")
    gen = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
    return gen.integers(0, n, size=n)


def _run_resample(
    *,
    index: int,
    adapter: ModelAdapter,
    train: Dataset,
    test: Dataset,
    generator: np.random.Generator,
    oob_score: bool,
) -> _ResampleOutput:
    positions = bootstrap_indices(train.n_rows, generator)
    resample = train.take(positions, name=f"{train.name}/resample{index}")

    try:
        model = adapter.fit(resample)
        test_pred = adapter.predict(model, test).values

        oob_positions = oob_pred = None
        if oob_score:
            in_bag = np.zeros(train.n_rows, dtype=bool)
            in_bag[positions] = True
            oob_positions = np.flatnonzero(~in_bag)
            if oob_positions.size:
                oob_pred = adapter.predict(model, train.take(oob_positions)).values
    except Exception as e:
        raise EnsembleBuildError(
            f"Bagging resample {index} failed ({type(e).__name__}: {e}); "
            "no partial ensemble is returned."
        ) from e

    return _ResampleOutput(
        index=index,
        model=model,
        test_pred=np.asarray(test_pred, dtype=float),
        oob_positions=oob_positions,
        oob_pred=oob_pred,
    )


def _oob_rmse(train: Dataset, outputs: list[_ResampleOutput]) -> Optional[float]:
    sums = np.zeros(train.n_rows, dtype=float)
    counts = np.zeros(train.n_rows, dtype=int)
    for out in outputs:
        if out.oob_positions is None or out.oob_pred is None:
            continue
        np.add.at(sums, out.oob_positions, out.oob_pred)
        np.add.at(counts, out.oob_positions, 1)

    if not counts.any():
        warnings.warn(
            "No training row was ever out-of-bag; the OOB estimate is undefined. "
            "Increase the number of resamples.",
            UserWarning,
        )
        return None
    if (counts == 0).any():
        warnings.warn(
            f"{int((counts == 0).sum())} training rows were never out-of-bag and are "
            "excluded from the OOB estimate.",
            UserWarning,
        )

    with np.errstate(invalid="ignore", divide="ignore"):
        oob = np.where(counts > 0, sums / np.maximum(counts, 1), np.nan)
    return rmse(train.target_array(), oob)


def build_bagging(
    base_adapter: ModelAdapter,
    train: Dataset,
    test: Dataset,
    resamples: int = 50,
    seed: Union[None, int, RngManager] = None,
    *,
    oob_score: bool = False,
    n_jobs: Optional[int] = None,
    stream: str = "bagging",
    progress: Optional[ProgressCallback] = None,
) -> Tuple[BaggingEnsemble, PredictionVector]:
    """Fit ``resamples`` bootstrap refits of ``base_adapter`` and average their test predictions.

    Returns
    -------
    (ensemble, prediction)
        ``prediction[j]`` is the mean over resamples of the prediction for test row j.

    Raises
    ------
    ValueError
        If ``resamples < 1``.
    EnsembleBuildError
        If train and test share rows, or any refit/predict fails.
    """
    if int(resamples) < 1:
        raise ValueError(f"resamples must be >= 1; got {resamples}.")
    resamples = int(resamples)

    if train.n_rows == 0:
        raise EnsembleBuildError(f"Cannot bag over an empty training set '{train.name}'.")
    overlap = np.intersect1d(train.row_ids, test.row_ids)
    if overlap.size:
        raise EnsembleBuildError(
            f"{overlap.size} test row(s) also appear in the training pool; "
            "the holdout must be disjoint from the resampling pool."
        )

    rngm = as_rng_manager(seed)
    generators = [rngm.child_generator(f"{stream}/resample{i}") for i in range(resamples)]

    logger.info(
        "Bagging %s: %d resamples of %d rows, %d test rows",
        getattr(base_adapter, "name", "model"), resamples, train.n_rows, test.n_rows,
    )

    label = f"{stream}: resamples"
    if progress is not None:
        progress.init(total=resamples, label=label)

    unit_kwargs = dict(adapter=base_adapter, train=train, test=test, oob_score=oob_score)
    if n_jobs is None or n_jobs == 1:
        outputs = []
        for i, gen in enumerate(generators):
            outputs.append(_run_resample(index=i, generator=gen, **unit_kwargs))
            if progress is not None:
                progress.update(current=i + 1, label=label)
    else:
        outputs = Parallel(n_jobs=n_jobs)(
            delayed(_run_resample)(index=i, generator=gen, **unit_kwargs)
            for i, gen in enumerate(generators)
        )
        outputs = sorted(outputs, key=lambda o: o.index)

    if progress is not None:
        progress.finalize(label=label)

    # barrier: aggregate only once every resample is in
    stacked = np.vstack([o.test_pred for o in outputs])
    mean_pred = stacked.mean(axis=0)

    oob = _oob_rmse(train, outputs) if oob_score else None

    ensemble = BaggingEnsemble(
        adapter=base_adapter,
        members=tuple(o.model for o in outputs),
        oob_rmse=oob,
    )
    return ensemble, PredictionVector.for_dataset(mean_pred, test)


__all__ = ["BaggingEnsemble", "bootstrap_indices", "build_bagging"]
