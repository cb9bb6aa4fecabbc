"""
CLI entry point for the Lotto Exclusion backtest.

Usage:
    python -m lotto_exclusion.run_backtest --data all.json
    python -m lotto_exclusion.run_backtest --use-sample --start-draw 1150
"""

import argparse
import json
import sys

from lotto_exclusion.config import Config
from lotto_exclusion.data.loader import DrawLoader
from lotto_exclusion.data.sample_data import generate_sample_draws, validate_sample_data
from lotto_exclusion.data.validation import DrawValidationError
from lotto_exclusion.evaluation.backtest import BacktestEngine


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {n}")
    return n


def _positive_int(value: str) -> int:
    n = _non_negative_int(value)
    if n == 0:
        raise argparse.ArgumentTypeError("must be >= 1, got 0")
    return n


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Lotto Exclusion Engine - exclusion list backtest"
    )

    parser.add_argument(
        "--data",
        type=str,
        default=None,
        help="Draw history file (JSON, CSV, XLSX or parquet). Searches the raw data dir if not specified."
    )

    parser.add_argument(
        "--prefer",
        choices=list(DrawLoader.EXTENSIONS),
        default="json",
        help="File type preference when searching the raw data dir (default: json)"
    )

    parser.add_argument(
        "--use-sample",
        action="store_true",
        help="Use generated sample draws instead of loading from files"
    )

    parser.add_argument(
        "--n-draws",
        type=_non_negative_int,
        default=250,
        help="Number of draws for sample data (default: 250)"
    )

    parser.add_argument(
        "--start-draw",
        type=_positive_int,
        default=None,
        help="First draw_no to evaluate (default: 1204)"
    )

    parser.add_argument(
        "--base-dir",
        type=str,
        default=None,
        help="Override base directory for data/artifacts"
    )

    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Don't save artifacts"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report and next-draw prediction as JSON"
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    verbose = not args.json

    config = Config()
    if args.base_dir:
        config.base_dir = args.base_dir
    if args.start_draw is not None:
        config.backtest_start_draw = args.start_draw

    if verbose:
        print("=" * 60)
        print("LOTTO EXCLUSION ENGINE - BACKTEST")
        print("=" * 60)

    try:
        if args.use_sample:
            if verbose:
                print("\nGenerating sample data...")
            draws = generate_sample_draws(n_draws=args.n_draws, config=config)
            validation = validate_sample_data(draws, config)
            if verbose:
                print(f"Sample validation: {validation}")
                if not validation["overall_healthy"]:
                    print("⚠️ Sample data validation failed - proceeding anyway")
        else:
            if verbose:
                print("\nLoading data...")
            loader = DrawLoader(config)
            draws, load_meta = loader.load(path=args.data, prefer=args.prefer)
            if verbose:
                print(f"Source: {load_meta['source']}")
                if load_meta["path"]:
                    print(f"Path: {load_meta['path']}")
                for note in load_meta["notes"]:
                    print(f"  {note}")

        engine = BacktestEngine(draws, config, verbose=verbose)
        results = engine.run()
    except DrawValidationError as e:
        print(f"✗ Invalid draw data: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    if results["report"].is_empty and verbose:
        print(f"\n⚠️ Not enough history to backtest from draw {config.backtest_start_draw}")

    if not args.no_save:
        paths = engine.save_artifacts(results)
        if verbose:
            print("\nArtifacts saved:")
            for name, path in paths.items():
                print(f"  {name}: {path}")

    if args.json:
        prediction = results["prediction"]
        print(json.dumps(
            {
                "report": results["report"].to_dict(),
                "next_draw": prediction.to_dict() if prediction is not None else None,
            },
            indent=2
        ))
    else:
        print("\n" + "=" * 60)
        print("BACKTEST COMPLETE")
        print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
