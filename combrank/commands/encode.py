"""Rank a '0'/'1' bit string and emit ``(ones, zeros, rank)`` as JSON.

Examples
--------
  combrank encode 10110
  combrank encode --input bits.txt --output encoded.json
  combrank encode 1011 --ones 3 --zeros 2
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional
import json

import click

from combrank.coding import rank_stream
from combrank.config import Config
from combrank.errors import RankCodecError
from combrank.utils import parse_bit_string


@click.command(name="encode")
@click.argument("bits", required=False)
@click.option(
    "input_path",
    "--input",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read the bit string from a text file instead of BITS",
)
@click.option("ones", "--ones", type=int, required=False, help="Declared set-bit count (default: counted from the bits)")
@click.option("zeros", "--zeros", type=int, required=False, help="Declared unset-bit count (default: counted from the bits)")
@click.option(
    "chunk_size",
    "--chunk-size",
    type=click.IntRange(min=1),
    default=Config.DEFAULT_CHUNK_SIZE,
    show_default=True,
    help="Bits submitted to the streaming encoder per call",
)
@click.option(
    "output",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    required=False,
    help="Write the JSON result to this file instead of stdout",
)
def encode(
    bits: Optional[str],
    input_path: Optional[Path],
    ones: Optional[int],
    zeros: Optional[int],
    chunk_size: int,
    output: Optional[Path],
) -> None:
    """Encode a bit string into its combinatorial rank."""

    if (bits is None) == (input_path is None):
        raise click.UsageError("Provide exactly one of BITS or --input.")
    if (ones is None) != (zeros is None):
        raise click.UsageError("--ones and --zeros must be given together.")

    try:
        text = input_path.read_text(encoding="utf-8") if input_path is not None else bits
        seq = parse_bit_string(text or "")
        if ones is None:
            ones = sum(seq)
            zeros = len(seq) - ones
        rank = rank_stream(seq, ones, zeros, chunk_size=chunk_size)
    except (RankCodecError, ValueError, TypeError) as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)

    result = {"ones": ones, "zeros": zeros, "length": len(seq), "rank": rank}
    payload = json.dumps(result, indent=2)
    if output is None:
        click.echo(payload)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(payload + "\n", encoding="utf-8")
        click.echo(f"Results saved: {output}")
