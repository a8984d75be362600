import argparse
import logging

from stock_classifier.logger import setup_logger
from stock_classifier.pipelines.abc_analysis import AbcAnalysisPipeline
from stock_classifier.pipelines.analytics import AnalyticsPipeline
from stock_classifier.pipelines.valuation import StockValuationPipeline

# --- Pipeline Registry ---
# To add a report, add a new entry here.
PIPELINE_REGISTRY = {
    "abc": AbcAnalysisPipeline,
    "valuation": StockValuationPipeline,
    "analytics": AnalyticsPipeline,
}


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build inventory reports.")
    parser.add_argument(
        "reports",
        nargs="*",
        default=[],
        help=f"Reports to run: {', '.join(PIPELINE_REGISTRY)} (default: all).",
    )
    parser.add_argument(
        "--test",
        action="store_true",
        help="Run without posting to the webhook.",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL.")
    args = parser.parse_args(argv)

    unknown = [name for name in args.reports if name not in PIPELINE_REGISTRY]
    if unknown:
        parser.error(
            f"unknown report(s): {', '.join(unknown)} "
            f"(choose from {', '.join(PIPELINE_REGISTRY)})"
        )
    return args


def run_reports(report_names: list[str], test_mode: bool = False) -> dict[str, bool]:
    """Runs each named pipeline in turn. Returns name -> success."""
    results = {}
    for name in report_names or list(PIPELINE_REGISTRY):
        pipeline = PIPELINE_REGISTRY[name](test_mode=test_mode)
        results[name] = pipeline.run() is not None
    return results


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.log_level:
        setup_logger(log_level=args.log_level.upper())
    else:
        setup_logger()

    logger = logging.getLogger(__name__)
    results = run_reports(args.reports, test_mode=args.test)

    failed = [name for name, ok in results.items() if not ok]
    if failed:
        logger.error(f"❌ Failed reports: {', '.join(failed)}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
