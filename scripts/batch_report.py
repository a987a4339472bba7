#!/usr/bin/env python3
"""
Generate discrepancy reports for every row of a CSV file.

The CSV needs the columns:
    name, gt_x1, gt_y1, gt_x2, gt_y2, xai_x1, xai_y1, xai_x2, xai_y2,
    xai_technique, model_architecture, dataset

Usage:
    python scripts/batch_report.py boxes.csv --output-dir reports/
    python scripts/batch_report.py boxes.csv --metrics-csv metrics.csv
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict

import numpy as np
import pandas as pd

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from xaireport.core.types import AnalysisMetadata, AnalysisRequest, BoundingBox
from xaireport.core.validation import COORDINATE_FIELDS, GT_FIELDS, METADATA_FIELDS, XAI_FIELDS
from xaireport.metrics.reporter import Reporter

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["name"] + COORDINATE_FIELDS + METADATA_FIELDS


def load_requests(csv_path: str) -> Dict[str, AnalysisRequest]:
    """
    Read boxes from CSV.

    Rows with missing, non-numeric or infinite coordinates are skipped with a warning.
    """
    df = pd.read_csv(csv_path, dtype={"name": str})

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"CSV is missing columns: {', '.join(missing)}")

    df[COORDINATE_FIELDS] = df[COORDINATE_FIELDS].apply(pd.to_numeric, errors="coerce")
    incomplete = df[REQUIRED_COLUMNS].isna().any(axis=1)
    for name in df.loc[incomplete, "name"]:
        logger.warning(f"Skipping incomplete row: {name}")
    df = df[~incomplete]

    # inf survives to_numeric; only finite coordinates are usable
    finite = np.isfinite(df[COORDINATE_FIELDS].to_numpy(dtype=float)).all(axis=1)
    for name in df.loc[~finite, "name"]:
        logger.warning(f"Skipping row with non-finite coordinates: {name}")
    df = df[finite]

    requests = {}
    for row in df.itertuples(index=False):
        row = row._asdict()
        requests[str(row["name"])] = AnalysisRequest(
            ground_truth=BoundingBox(*(float(row[c]) for c in GT_FIELDS)),
            xai_generated=BoundingBox(*(float(row[c]) for c in XAI_FIELDS)),
            metadata=AnalysisMetadata(
                xai_technique=str(row["xai_technique"]),
                model_architecture=str(row["model_architecture"]),
                dataset=str(row["dataset"]),
            ),
        )

    logger.info(f"Loaded {len(requests)} requests from {csv_path}")
    return requests


def metrics_frame(reporter: Reporter, requests: Dict[str, AnalysisRequest]) -> pd.DataFrame:
    """One row of metrics per request, indexed by name."""
    rows = []
    for name, request in requests.items():
        m = reporter.calculate_metrics(request)
        rows.append({
            "name": name,
            "xai_technique": request.metadata.xai_technique,
            "gt_area": m.gt_area,
            "xai_area": m.xai_area,
            "area_diff": m.area_diff,
            "area_diff_pct": m.area_diff_pct if m.area_diff_pct is not None else np.nan,
            "center_distance": m.center_distance,
            "iou": m.iou,
        })
    return pd.DataFrame(rows).set_index("name")


def main():
    parser = argparse.ArgumentParser(
        description="Generate XAI discrepancy reports from a CSV of boxes"
    )
    parser.add_argument("csv", type=str, help="Input CSV file")
    parser.add_argument(
        "--output-dir",
        type=str,
        default="reports",
        help="Directory for per-row Markdown reports"
    )
    parser.add_argument(
        "--metrics-csv",
        type=str,
        help="Also write the metrics table to this CSV"
    )

    args = parser.parse_args()

    try:
        requests = load_requests(args.csv)
    except (OSError, ValueError) as e:
        logger.error(f"Cannot read {args.csv}: {e}")
        sys.exit(1)

    if not requests:
        logger.error("No complete rows to report on")
        sys.exit(1)

    reporter = Reporter()
    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    for name, request in requests.items():
        safe_name = name.replace("/", "_")
        path = output_dir / f"{safe_name}.md"
        path.write_text(reporter.generate_report(request), encoding="utf-8")
        logger.debug(f"Wrote {path}")

    logger.info(f"Wrote {len(requests)} reports to {output_dir}")
    reporter.print_comparison(requests)

    df = metrics_frame(reporter, requests)
    print("--- SUMMARY BY TECHNIQUE ---")
    print(
        df.groupby("xai_technique")[["area_diff_pct", "center_distance", "iou"]]
        .mean()
        .round(2)
        .to_string()
    )
    print()

    if args.metrics_csv:
        df.to_csv(args.metrics_csv)
        logger.info(f"Metrics written to {args.metrics_csv}")


if __name__ == "__main__":
    main()
