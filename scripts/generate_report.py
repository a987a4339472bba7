#!/usr/bin/env python3
"""
Generate an XAI discrepancy report for one pair of bounding boxes.

Usage:
    python scripts/generate_report.py --gt 0 0 10 10 --xai 5 5 15 15 \
        --technique gradcam --architecture ResNet-50 --dataset PASCAL-VOC \
        --heatmap heatmap.png
    python scripts/generate_report.py ... --json --output report.json
    python scripts/generate_report.py --template --technique lime
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from xaireport.analysis.prompt import load_template
from xaireport.analysis.service import AnalysisService
from xaireport.core.config import AppConfig
from xaireport.core.exceptions import XAIReportError
from xaireport.core.prompt_store import PromptStore
from xaireport.core.types import ImagePayload
from xaireport.core.validation import build_request, validate_image
from xaireport.metrics.reporter import Reporter

logger = logging.getLogger(__name__)


def load_image(path: str, config: AppConfig) -> ImagePayload:
    """Read and validate an image file."""
    return validate_image(ImagePayload.from_file(path), config.max_image_bytes)


def form_fields(args) -> dict:
    """Map CLI arguments onto form field names."""
    fields = {
        "prompt": args.prompt,
        "xai_technique": args.technique,
        "model_architecture": args.architecture,
        "dataset": args.dataset,
    }
    for prefix, coords in (("gt", args.gt), ("xai", args.xai)):
        for name, value in zip(("x1", "y1", "x2", "y2"), coords or []):
            fields[f"{prefix}_{name}"] = value
    return fields


def main():
    parser = argparse.ArgumentParser(
        description="Generate an XAI bounding box discrepancy report"
    )
    parser.add_argument(
        "--gt",
        nargs=4,
        metavar=("X1", "Y1", "X2", "Y2"),
        help="Ground truth box corners"
    )
    parser.add_argument(
        "--xai",
        nargs=4,
        metavar=("X1", "Y1", "X2", "Y2"),
        help="XAI generated box corners"
    )
    parser.add_argument("--technique", type=str, help="XAI technique (e.g. gradcam)")
    parser.add_argument("--architecture", type=str, help="Model architecture")
    parser.add_argument("--dataset", type=str, help="Dataset name")
    parser.add_argument("--original", type=str, help="Original image file")
    parser.add_argument("--heatmap", type=str, help="Heatmap image file")
    parser.add_argument(
        "--prompt",
        type=str,
        help="Analysis prompt (defaults to the saved prompt, then the template)"
    )
    parser.add_argument(
        "--template",
        action="store_true",
        help="Print the analysis prompt template and exit"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output report as JSON"
    )
    parser.add_argument("--output", type=str, help="Write output to this file")
    parser.add_argument(
        "--no-delay",
        action="store_true",
        help="Skip the simulated analysis latency"
    )

    args = parser.parse_args()

    config = AppConfig.from_env(simulated_delay=0.0 if args.no_delay else None)
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

    if args.template:
        print(load_template(form_fields(args)))
        return

    store = PromptStore(config.store_path)
    if args.prompt is None:
        args.prompt = store.load_prompt() or load_template(form_fields(args))

    try:
        original = load_image(args.original, config) if args.original else None
        heatmap = load_image(args.heatmap, config) if args.heatmap else None
        request = build_request(form_fields(args), original, heatmap, require_prompt=True)
    except (XAIReportError, OSError) as e:
        logger.error(str(e))
        sys.exit(1)

    service = AnalysisService(config=config, prompt_store=store)
    outcome = service.analyze_sync(request)

    if not outcome.success:
        logger.error(outcome.notification.message)
        print(outcome.report)
        sys.exit(1)

    if args.json:
        output = json.dumps(Reporter().generate_report_dict(request), indent=2)
    else:
        output = outcome.report

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        logger.info(f"Report written to {args.output}")
    else:
        print(output)

    logger.info(outcome.notification.message)


if __name__ == "__main__":
    main()
