from __future__ import annotations

"""Result contracts.

These models represent *outputs* produced by components and use-cases and are
intended to be stable for downstream comparison.

Design goals:
- JSON-friendly field types (lists, dicts, scalars) at the contract boundary.
- Strict top-level validation (extra fields forbidden) to prevent silent drift.
"""

import math
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict

RowId = Union[int, str]


class ResultModel(BaseModel):
    """Base class for result contracts (strict by default)."""

    model_config = ConfigDict(extra="forbid")


JSONDict = Dict[str, Any]
JSONList = List[Any]


def finite_or_none(v: Any) -> Optional[float]:
    try:
        fv = float(v)
    except (TypeError, ValueError):
        return None
    return fv if math.isfinite(fv) else None


def row_id_list(ids: Any) -> List[RowId]:
    """Plain Python row ids (numpy scalars unwrapped) for JSON-friendly contracts."""
    out: List[RowId] = []
    for v in list(ids):
        v = v.item() if hasattr(v, "item") else v
        out.append(v if isinstance(v, (int, str)) else str(v))
    return out
