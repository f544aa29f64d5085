"""Reconstruct a bit string from ``(ones, zeros, rank)``.

Examples
--------
  combrank decode --rank 6 --ones 3 --zeros 2
  combrank decode --input encoded.json --output bits.txt
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional
import json

import click

from combrank.coding import StreamingDecoder
from combrank.config import Config
from combrank.errors import RankCodecError
from combrank.utils import format_bits


def _load_encoded(path: Path) -> tuple[int, int, int]:
    data: Any = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    missing = [key for key in ("rank", "ones", "zeros") if key not in data]
    if missing:
        raise ValueError(f"{path} is missing keys: {', '.join(missing)}")
    return int(data["rank"]), int(data["ones"]), int(data["zeros"])


@click.command(name="decode")
@click.option("rank", "--rank", type=str, required=False, help="Rank as a decimal integer")
@click.option("ones", "--ones", type=int, required=False, help="Set-bit count used at encode time")
@click.option("zeros", "--zeros", type=int, required=False, help="Unset-bit count used at encode time")
@click.option(
    "input_path",
    "--input",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON produced by 'combrank encode'",
)
@click.option(
    "chunk_size",
    "--chunk-size",
    type=click.IntRange(min=1),
    default=Config.DEFAULT_CHUNK_SIZE,
    show_default=True,
    help="Bits produced by the streaming decoder per call",
)
@click.option(
    "output",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    required=False,
    help="Write the bit string to this file instead of stdout",
)
def decode(
    rank: Optional[str],
    ones: Optional[int],
    zeros: Optional[int],
    input_path: Optional[Path],
    chunk_size: int,
    output: Optional[Path],
) -> None:
    """Decode a combinatorial rank back into its bit string."""

    inline = (rank, ones, zeros)
    if input_path is None and any(v is None for v in inline):
        raise click.UsageError("Provide --rank, --ones and --zeros, or --input.")
    if input_path is not None and any(v is not None for v in inline):
        raise click.UsageError("--input cannot be combined with --rank/--ones/--zeros.")

    try:
        if input_path is not None:
            r, n1, n0 = _load_encoded(input_path)
        else:
            r, n1, n0 = int(rank), ones, zeros  # type: ignore[arg-type]
        decoder = StreamingDecoder(r, n1, n0)
        parts: list[str] = []
        while True:
            chunk = decoder.next_chunk(chunk_size)
            if not chunk:
                break
            parts.append(format_bits(chunk))
    except (RankCodecError, ValueError, TypeError) as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)

    text = "".join(parts)
    if output is None:
        click.echo(text)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n", encoding="utf-8")
        click.echo(f"Bits saved: {output}")
