"""CLI entry point for automated report generation."""

import argparse
import sys
from pathlib import Path

from gym_progression_sim.report import build_report_context, render_report, write_csv


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Gym progression report generation")
    parser.add_argument(
        "--config", type=Path, default=None,
        help="TOML config file (default: config.toml)",
    )
    parser.add_argument(
        "--name", type=str, default="",
        help="suffix for output file names (e.g. q1 -> report-q1.md)",
    )
    parser.add_argument(
        "--variants", action="store_true",
        help="report the built-in variants of the base plan instead of [[states]]",
    )
    parser.add_argument(
        "--no-charts", action="store_true",
        help="skip chart generation",
    )
    parser.add_argument(
        "--output", type=Path, default=Path("reports"),
        help="report output directory (default: reports)",
    )
    parser.add_argument(
        "--chart-dir", type=Path, default=Path("reports/charts"),
        help="chart output directory (default: reports/charts)",
    )
    return parser


def _generate_one(
    config_path: Path | None,
    name: str,
    *,
    variants: bool,
    no_charts: bool,
    output_dir: Path,
    chart_dir: Path,
) -> tuple[Path, Path]:
    """Generate a single report plus its CSV summary and return both paths."""
    suffix = f"-{name}" if name else ""
    out_path = output_dir / f"report{suffix}.md"
    csv_path = output_dir / f"summary{suffix}.csv"

    print(f"\n{'='*60}", file=sys.stderr)
    print(f"Report: {config_path or 'config.toml'} -> {out_path}", file=sys.stderr)
    print(f"{'='*60}", file=sys.stderr)

    ctx = build_report_context(
        config_path=config_path,
        name=name,
        variants=variants,
        chart_dir=None if no_charts else chart_dir,
    )
    md = render_report(ctx, report_dir=output_dir)

    output_dir.mkdir(parents=True, exist_ok=True)
    out_path.write_text(md, encoding="utf-8")
    print(f"  -> {out_path}", file=sys.stderr)
    write_csv(ctx.results, csv_path)
    print(f"  -> {csv_path}", file=sys.stderr)
    return out_path, csv_path


def main():
    parser = _build_parser()
    args = parser.parse_args()

    if args.config is not None and not args.config.exists():
        parser.error(f"config file not found: {args.config}")
    try:
        _generate_one(
            args.config, args.name,
            variants=args.variants, no_charts=args.no_charts,
            output_dir=args.output, chart_dir=args.chart_dir,
        )
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        raise SystemExit(1)
    print("Done", file=sys.stderr)


if __name__ == "__main__":
    main()
