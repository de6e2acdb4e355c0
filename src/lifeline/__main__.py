"""Command-line entry point: ``python -m lifeline input.csv output.png``."""

import argparse
import sys
from typing import List, Optional

from loguru import logger

from lifeline.timeline.analysis import configure_logging, process_file
from lifeline.timeline.plot import TimelinePlot


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lifeline",
        description="Draw a decluttered timeline chart from year,value[,label] CSV rows.",
    )
    p.add_argument("input", help="CSV file with year,value[,label] rows.")
    p.add_argument("output", help="Output image (.png or .svg).")
    p.add_argument("--years", action="store_true", help="Show years on the x axis.")
    p.add_argument(
        "--title", default=TimelinePlot.DEFAULT_TITLE, help="Title for the timeline."
    )
    p.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level: DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL.",
    )
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        process_file(
            args.input,
            args.output,
            title=args.title,
            show_years=args.years,
        )
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
