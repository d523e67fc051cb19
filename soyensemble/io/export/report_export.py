from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

import pandas as pd

from soyensemble.contracts.results import ExperimentReport

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# per-row arrays stay in the JSON report only
_CSV_EXCLUDE = {"row_ids", "predictions", "weights"}


def default_reports_dir() -> Path:
    raw = os.getenv("SOYENSEMBLE_REPORTS_DIR", ".soyensemble/reports")
    return Path(raw)


def report_table(report: ExperimentReport) -> pd.DataFrame:
    """One row per model/ensemble, sorted by holdout RMSE."""
    rows = [r.model_dump(exclude=_CSV_EXCLUDE) for r in report.records]
    df = pd.DataFrame(rows)
    if not df.empty:
        df = df.sort_values("holdout_rmse", kind="stable").reset_index(drop=True)
    return df


def export_report(report: ExperimentReport, dest: Optional[PathLike] = None) -> Dict[str, Path]:
    """Write ``report.json`` and ``report.csv`` into ``dest`` (a directory).

    Defaults to :func:`default_reports_dir`. Returns the written paths.
    """
    out_dir = (Path(dest) if dest is not None else default_reports_dir()).expanduser()
    out_dir.mkdir(parents=True, exist_ok=True)

    json_path = out_dir / "report.json"
    json_path.write_text(report.model_dump_json(indent=2), encoding="utf-8")

    csv_path = out_dir / "report.csv"
    report_table(report).to_csv(csv_path, index=False)

    logger.info("Wrote report to %s", out_dir)
    return {"json": json_path, "csv": csv_path}


__all__ = ["default_reports_dir", "export_report", "report_table"]
