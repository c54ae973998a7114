#!/usr/bin/env python3
"""
Command-line entry point: load the DataCo CSV, run every query and write an
Excel report (one sheet per result).
"""

import argparse
import logging
import sys

from .data_processing import analysis_params as params
from .data_processing.export_utils import export_to_excel
from .data_processing.report import run_all
from .utils.io import load_orders


def setup_logging(log_level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()],
    )
    return logging.getLogger(__name__)


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        description="Sales, delivery, RFM and modelling report for the DataCo supply-chain dataset"
    )
    parser.add_argument("--csv", default=None, help="Orders CSV (default: $DATACO_CSV_PATH)")
    parser.add_argument("--out", default="dataco_report.xlsx", help="Excel report path")
    parser.add_argument("--sample-size", type=int, default=params.REGRESSION_SAMPLE_SIZE,
                        help=f"Regression sample rows (default: {params.REGRESSION_SAMPLE_SIZE})")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for the regression sample")
    parser.add_argument("--no-models", action="store_true", help="Skip the t-test and regression fit")
    parser.add_argument("--no-cache", action="store_true", help="Always re-read the CSV")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_arguments(argv)
    logger = setup_logging(args.log_level)
    try:
        df = load_orders(args.csv, use_cache=not args.no_cache)
        results = run_all(
            df,
            sample_size=args.sample_size,
            random_state=args.seed,
            with_models=not args.no_models,
        )
        path = export_to_excel(results, args.out)
    except (ValueError, FileNotFoundError) as e:
        logger.error("Analysis failed: %s", e)
        return 1
    logger.info("Report written to %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
