from __future__ import annotations

import inspect
from typing import Any, Dict, Optional


def estimator_kwargs(estimator_cls: type, cfg: Any, *, seed: Optional[int] = None) -> Dict[str, Any]:
    """Constructor kwargs for ``estimator_cls`` taken from a model config.

    Config fields the estimator does not accept (``algo``, unset ``None``
    values) are left out. ``seed`` becomes ``random_state`` when the estimator
    takes one and the config did not pin it.
    """
    accepted = set(inspect.signature(estimator_cls).parameters)
    kw = {k: v for k, v in cfg.model_dump(exclude={"algo"}, exclude_none=True).items() if k in accepted}
    if seed is not None and "random_state" in accepted:
        kw.setdefault("random_state", int(seed))
    return kw
