#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from textpix.config import CodecConfig
from textpix.container import PixelContainer
from textpix.framing import LENGTH_PREFIX, frame, parse, serialize_dictionary
from textpix.text_codec import compress, decompress


@dataclass(frozen=True)
class EncodeReport:
    original_bytes: int
    dictionary_bytes: int
    compressed_bytes: int
    payload_bytes: int
    image_bytes: int
    dictionary_entries: int
    pixels_needed: int
    width: int
    height: int

    @property
    def ratio_pct(self) -> float:
        if self.original_bytes <= 0:
            return 0.0
        return (self.payload_bytes / float(self.original_bytes)) * 100.0

    def lines(self) -> List[str]:
        return [
            f"Original size: {self.original_bytes} bytes",
            f"Dictionary size: {self.dictionary_bytes} bytes",
            f"Compressed text size: {self.compressed_bytes} bytes",
            f"Total payload size: {self.payload_bytes} bytes",
            f"Grid: {self.width}x{self.height} ({self.pixels_needed} pixels needed)",
            f"Output image size: {self.image_bytes} bytes",
            f"Compression ratio: {self.ratio_pct:.2f}%",
            f"Dictionary entries: {self.dictionary_entries}",
        ]


def encode_payload(text: str, cfg: Optional[CodecConfig] = None) -> Tuple[bytes, int, int]:
    """Return (payload, dictionary_bytes, dictionary_entries)."""
    cfg = cfg or CodecConfig()
    dictionary, data = compress(
        text,
        min_frequency=cfg.min_frequency,
        min_length=cfg.min_length,
        max_size=cfg.max_dictionary_size,
        preserve_case=cfg.preserve_case,
    )
    return frame(dictionary, data), len(serialize_dictionary(dictionary)), len(dictionary)


def decode_payload(payload: bytes) -> str:
    dictionary, data = parse(payload)
    return decompress(dictionary, data)


def encode_to_png(text: str, cfg: Optional[CodecConfig] = None) -> Tuple[bytes, EncodeReport]:
    cfg = cfg or CodecConfig()
    payload, dict_bytes, entries = encode_payload(text, cfg)
    container = PixelContainer(cfg.pixel_mode)
    png = container.write(payload)
    dims = container.plan(len(payload))
    report = EncodeReport(
        original_bytes=len(text.encode("utf-8")),
        dictionary_bytes=dict_bytes,
        compressed_bytes=len(payload) - LENGTH_PREFIX.size - dict_bytes,
        payload_bytes=len(payload),
        image_bytes=len(png),
        dictionary_entries=entries,
        pixels_needed=dims.pixels_needed,
        width=dims.width,
        height=dims.height,
    )
    return png, report


def decode_from_png(png: bytes, pixel_mode: Optional[str] = None) -> str:
    """Decode a PNG. Without pixel_mode the image's own mode is used."""
    return decode_payload(PixelContainer(pixel_mode).read_payload(png))
