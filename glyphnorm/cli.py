"""
Icon normalizer — rescale SVG icons onto a square viewBox.

Usage:
  glyphnorm icon.svg                      # prints normalized SVG to terminal
  glyphnorm icon.svg -o out.svg           # saves normalized SVG
  glyphnorm icons/ -o normalized/ -s 32   # batch process folder onto 0 0 32 32
"""

from __future__ import annotations

import argparse
import logging
import os
import re
import sys

from dotenv import load_dotenv

from glyphnorm.config import settings
from glyphnorm.engine.batch import normalize_batch
from glyphnorm.svg.rewriter import rewrite_document

logger = logging.getLogger(__name__)

_UNSAFE_NAME_RE = re.compile(r"[^\w.-]")


def safe_name(filename: str) -> str:
    """Replace anything but word characters, dots and dashes with underscores."""
    return _UNSAFE_NAME_RE.sub("_", filename)


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.glyphnorm_log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _process_folder(args: argparse.Namespace, size: float, precision: int | None) -> int:
    svg_files = sorted(f for f in os.listdir(args.input) if f.lower().endswith(".svg"))
    if not svg_files:
        print("No .svg files found in folder.")
        return 1

    out_dir = args.output or args.input.rstrip("/\\") + "_normalized"
    os.makedirs(out_dir, exist_ok=True)

    documents = []
    for fname in svg_files:
        with open(os.path.join(args.input, fname), "r", encoding="utf-8") as f:
            documents.append((fname, f.read()))

    print(f"Processing {len(svg_files)} files...")
    report = normalize_batch(documents, size=size, precision=precision, max_workers=args.workers)

    for item in report.items:
        if item.result is None:
            print(f"  [{item.name}] {item.status.upper()}: {item.error or ''}")
            continue
        out_path = os.path.join(out_dir, safe_name(item.name))
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(item.result.svg)
        note = ""
        if item.result.malformed_paths:
            note = f", {len(item.result.malformed_paths)} malformed path(s) kept as-is"
        print(f"  [{item.name}] {item.status} → {out_path}{note}")

    print(
        f"Done: {report.count('normalized')}/{len(report.items)} normalized, "
        f"{report.count('passthrough')} unchanged, {report.malformed_paths} malformed path(s) kept as-is → {out_dir}"
    )
    return 0


def _process_file(args: argparse.Namespace, size: float, precision: int | None) -> int:
    if not os.path.exists(args.input):
        print(f"File not found: {args.input}")
        return 1

    with open(args.input, "r", encoding="utf-8") as f:
        raw = f.read()

    result = rewrite_document(raw, size, precision)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(result.svg)
        print(f"  {result.status} → {args.output}")
    else:
        sys.stdout.write(result.svg)
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Normalize SVG icons to a square viewBox")
    parser.add_argument("input", help="SVG file or folder of SVGs")
    parser.add_argument("-o", "--output", help="Output file or folder")
    parser.add_argument(
        "-s", "--size", type=float, default=None,
        help=f"Target canvas size (default {settings.glyphnorm_size})",
    )
    parser.add_argument("-j", "--workers", type=int, default=None, help="Worker threads for folders")
    parser.add_argument("-p", "--precision", type=int, default=None, help="Decimal places in path data")
    args = parser.parse_args(argv)

    _configure_logging()

    size = args.size if args.size is not None else float(settings.glyphnorm_size)
    if size <= 0:
        parser.error("--size must be positive")
    precision = args.precision if args.precision is not None else settings.glyphnorm_precision

    if os.path.isdir(args.input):
        return _process_folder(args, size, precision)
    return _process_file(args, size, precision)


if __name__ == "__main__":
    sys.exit(main())
