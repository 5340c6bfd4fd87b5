#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0
"""
pixTool.py - pack a text file into the pixels of a PNG image and back.

Commands:
  encode  <text> <png>      dictionary + run-length compress, write PNG
  decode  <png> <text>      read PNG, restore text
  zstd    <file> <outdir>   whole-file zstd round trip (alternate path)
  plan    <bytes>           print grid dimensions for a payload size

Payload layout inside the pixels:
  [dictionary length, 4 bytes BE][dictionary JSON][run-length coded text]
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from typing import Any, List, Optional

from textpix import __version__
from textpix.config import CodecConfig, load_config, save_config
from textpix.container import MODE_BYTES_PER_CELL
from textpix.errors import TextPixError
from textpix.external import ZstdCompressor
from textpix.layout import plan_grid
from textpix.pipeline import decode_from_png, encode_to_png

EXIT_OK = 0
EXIT_ERROR = 2
EXIT_UNAVAILABLE = 3
EXIT_MISMATCH = 4


def eprint(*args: Any) -> None:
    print(*args, file=sys.stderr)


def ts_local() -> str:
    return time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())


class Reporter:
    """stdout report lines, optionally mirrored to a runtime log file."""

    def __init__(self, quiet: bool = False, log_file: Optional[str] = None) -> None:
        self.quiet = bool(quiet)
        self.log_file = log_file

    def out(self, line: str) -> None:
        if not self.quiet:
            print(line)
        self._log(line)

    def error(self, line: str) -> None:
        eprint(f"ERROR: {line}")
        self._log(f"ERROR: {line}")

    def _log(self, line: str) -> None:
        if not self.log_file:
            return
        try:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(f"{ts_local()} {line}\n")
        except OSError as e:
            eprint(f"ERROR: cannot write log file {self.log_file}: {e}")
            self.log_file = None


def file_size(path: str) -> int:
    return os.stat(path).st_size


def cmd_encode(args: argparse.Namespace, cfg: CodecConfig, rep: Reporter) -> int:
    with open(args.input, "r", encoding="utf-8", newline="") as f:
        text = f.read()
    png, report = encode_to_png(text, cfg)
    with open(args.output, "wb") as f:
        f.write(png)
    for line in report.lines():
        rep.out(line)
    rep.out(f"OK: wrote {args.output}")
    return EXIT_OK


def cmd_decode(args: argparse.Namespace, cfg: CodecConfig, rep: Reporter) -> int:
    with open(args.input, "rb") as f:
        png = f.read()
    # The PNG declares its own mode; only an explicit --mode is enforced.
    text = decode_from_png(png, args.mode)
    with open(args.output, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    rep.out(f"Input size: {file_size(args.input)} bytes")
    rep.out(f"Output size: {file_size(args.output)} bytes")
    rep.out(f"OK: wrote {args.output}")
    return EXIT_OK


def cmd_zstd(args: argparse.Namespace, cfg: CodecConfig, rep: Reporter, backend: Optional[ZstdCompressor] = None) -> int:
    backend = backend or ZstdCompressor(level=args.level)
    if not backend.available():
        rep.error("zstd path unavailable (zstandard is not installed)")
        return EXIT_UNAVAILABLE
    with open(args.input, "rb") as f:
        raw = f.read()
    rep.out(f"Original size: {len(raw)}")

    comp = backend.compress(raw)
    if not comp.ok:
        rep.error(comp.error)
        return EXIT_ERROR
    os.makedirs(args.outdir, exist_ok=True)
    base = os.path.join(args.outdir, os.path.basename(args.input))
    with open(base + ".zst", "wb") as f:
        f.write(comp.data)
    rep.out(f"Compressed size (zst): {len(comp.data)}")

    decomp = backend.decompress(comp.data)
    if not decomp.ok:
        rep.error(decomp.error)
        return EXIT_ERROR
    with open(base + ".dec", "wb") as f:
        f.write(decomp.data)
    rep.out(f"Decompressed size: {len(decomp.data)}")
    identical = decomp.data == raw
    rep.out(f"Round-trip identical: {identical}")
    return EXIT_OK if identical else EXIT_MISMATCH


def cmd_plan(args: argparse.Namespace, cfg: CodecConfig, rep: Reporter) -> int:
    dims = plan_grid(args.length, MODE_BYTES_PER_CELL[cfg.pixel_mode])
    rep.out(f"pixels needed: {dims.pixels_needed}")
    rep.out(f"grid: {dims.width}x{dims.height}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="pixTool.py", description="Store text as PNG pixel bytes (dictionary + RLE codec).")
    ap.add_argument("--config", default=None, help="JSON config file (default: none, built-in defaults).")
    ap.add_argument("--mode", default=None, choices=sorted(MODE_BYTES_PER_CELL), help="PNG pixel mode (default: RGBA).")
    ap.add_argument("--quiet", action="store_true", help="less terminal output.")
    ap.add_argument("--log-file", default=None, help="append timestamped report lines to this file.")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = ap.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encode", help="compress a text file into a PNG.")
    enc.add_argument("input")
    enc.add_argument("output")
    enc.add_argument("--min-frequency", type=int, default=None, help="min occurrences to tokenize a word (default: 2).")
    enc.add_argument("--min-length", type=int, default=None, help="words must be longer than this (default: 2).")
    enc.add_argument("--max-dict", type=int, default=None, help="max dictionary entries (default: 383).")
    enc.add_argument(
        "--preserve-case",
        action="store_true",
        default=None,
        help="only tokenize spellings the decoder restores exactly (lossless case).",
    )
    enc.add_argument("--save-config", default=None, help="write the effective config to this JSON file.")

    dec = sub.add_parser("decode", help="restore a text file from a PNG.")
    dec.add_argument("input")
    dec.add_argument("output")

    zs = sub.add_parser("zstd", help="zstd round trip of a file (alternate whole-buffer path).")
    zs.add_argument("input")
    zs.add_argument("outdir")
    zs.add_argument("--level", type=int, default=10, help="zstd level (default: 10).")

    pl = sub.add_parser("plan", help="print grid dimensions for a payload length.")
    pl.add_argument("length", type=int)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    rep = Reporter(quiet=args.quiet, log_file=args.log_file)
    try:
        cfg = load_config(args.config).with_overrides(
            pixel_mode=args.mode,
            min_frequency=getattr(args, "min_frequency", None),
            min_length=getattr(args, "min_length", None),
            max_dictionary_size=getattr(args, "max_dict", None),
            preserve_case=getattr(args, "preserve_case", None),
        )
        if getattr(args, "save_config", None):
            save_config(args.save_config, cfg)
        if args.command == "encode":
            return cmd_encode(args, cfg, rep)
        if args.command == "decode":
            return cmd_decode(args, cfg, rep)
        if args.command == "zstd":
            return cmd_zstd(args, cfg, rep)
        return cmd_plan(args, cfg, rep)
    except (TextPixError, OSError, ValueError) as e:
        rep.error(str(e))
        return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
