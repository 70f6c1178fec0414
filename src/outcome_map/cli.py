"""Command-line interface for outcome-map."""

import argparse
import logging
import sys
from pathlib import Path

from outcome_map import __version__, build_outcome_map
from outcome_map.builder import SORT_KEYS
from outcome_map.config import AGG_METHODS, ENCODING_MODES, ParserConfig
from outcome_map.exceptions import OutcomeMapError
from outcome_map.schema import MapDataset

DATA_FILENAME = "data.json"


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "build":
        return _build(args)

    parser.print_help()
    return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="outcome-map",
        description="Build outcome-map datasets from 'Resultado Geral' survey exports",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"outcome-map {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command")

    build = subparsers.add_parser("build", help="Build the map dataset from INPUT_CSV")
    build.add_argument("input_csv", help="Path to the survey CSV export")
    build.add_argument("--out-dir", default="./dist", help="Output directory (default: ./dist)")
    build.add_argument("--encoding", choices=ENCODING_MODES, help="File encoding (default: auto)")
    build.add_argument("--decimal-sep", choices=[",", "."], help="Decimal separator in the CSV (default: ',')")
    build.add_argument("--delimiter", help="Field delimiter (default: detected)")
    build.add_argument("--no-aggregate", action="store_true", help="Do not merge duplicate outcomes")
    build.add_argument("--agg-method", choices=AGG_METHODS, help="Aggregation method (default: average)")
    build.add_argument("--sort", choices=SORT_KEYS, default="input", help="Outcome order in the dataset")
    build.add_argument("--json", action="store_true", help="Print the dataset as JSON")
    build.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr")
    return parser


def _build(args: argparse.Namespace) -> int:
    input_path = Path(args.input_csv)
    if not input_path.is_file():
        print(f"Error: input file not found: {input_path}", file=sys.stderr)
        return 1

    try:
        config = _config_from_args(args)
        dataset = build_outcome_map(input_path, config=config, sort_by=args.sort)
    except OutcomeMapError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    payload = dataset.model_dump_json(indent=2)
    (out_dir / DATA_FILENAME).write_text(payload + "\n", encoding="utf-8")

    if args.json:
        print(payload)
    else:
        _print_summary(dataset, out_dir / DATA_FILENAME)
    return 0


def _config_from_args(args: argparse.Namespace) -> ParserConfig:
    config = ParserConfig.from_env()
    changes = {
        "encoding": args.encoding,
        "decimal_sep": args.decimal_sep,
        "agg_method": args.agg_method,
        "delimiter": args.delimiter,
    }
    changes = {key: value for key, value in changes.items() if value is not None}
    if args.no_aggregate:
        changes["aggregate"] = False
    return config.replace(**changes) if changes else config


def _print_summary(dataset: MapDataset, output: Path) -> None:
    """Print build result in human-readable format."""
    meta = dataset.metadata
    print()
    print("  outcome-map")
    print()

    fields = [
        ("Source", meta.source_name),
        ("Encoding", meta.encoding),
        ("Rows read", meta.rows_read),
        ("Rows dropped", meta.rows_dropped),
        ("Outcomes", meta.outcomes_after_aggregation),
        ("Aggregation", meta.agg_method or "off"),
        ("Output", output),
    ]
    for label, value in fields:
        print(f"  {label + ':':<14} {value}")

    print()
    top = sorted(dataset.outcomes, key=lambda item: item.opportunity_score, reverse=True)[:5]
    for item in top:
        print(f"  {item.opportunity_score:>6.2f}  {item.outcome_text}")
    print()


if __name__ == "__main__":
    sys.exit(main())
