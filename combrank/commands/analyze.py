"""Report how close the rank encoding comes to the entropy bound.

Examples
--------
  combrank analyze 1011110111
  combrank analyze --input bits.txt --format json
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional
import json

import click

from combrank.analysis import compression_report
from combrank.errors import RankCodecError
from combrank.utils import parse_bit_string


def format_report_table(report: dict[str, float | int]) -> str:
    rows = [
        ("Original bit count", f"{report['original_bit_count']}"),
        ("Ones / zeros", f"{report['ones']} / {report['zeros']}"),
        ("Original entropy", f"{float(report['original_entropy']):.4f} bits/bit"),
        ("Compressed bit count", f"{report['compressed_bit_count']}"),
        ("Ideal bit count", f"{float(report['ideal_bit_count']):.2f}"),
        ("Expected bit count", f"{float(report['expected_bit_count']):.2f}"),
        ("Bit count difference", f"{float(report['bit_count_difference']):.2f}"),
        ("Optimal compression accuracy", f"{float(report['optimal_compression_accuracy']):.2f}%"),
    ]
    width = max(len(label) for label, _ in rows)
    return "\n".join(f"{label.ljust(width)}  {value}" for label, value in rows)


@click.command(name="analyze")
@click.argument("bits", required=False)
@click.option(
    "input_path",
    "--input",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read the bit string from a text file instead of BITS",
)
@click.option(
    "fmt",
    "--format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    show_default=True,
    help="Output format",
)
def analyze(bits: Optional[str], input_path: Optional[Path], fmt: str) -> None:
    """Compare rank codelength with the sequence's Shannon entropy."""

    if (bits is None) == (input_path is None):
        raise click.UsageError("Provide exactly one of BITS or --input.")

    try:
        text = input_path.read_text(encoding="utf-8") if input_path is not None else bits
        report = compression_report(parse_bit_string(text or ""))
    except (RankCodecError, ValueError) as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)

    if fmt.lower() == "json":
        click.echo(json.dumps(report, indent=2))
    else:
        click.echo(format_report_table(report))
