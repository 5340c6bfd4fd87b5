#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import io
from typing import Dict, Optional, Tuple

from PIL import Image, UnidentifiedImageError
from PIL.PngImagePlugin import PngInfo

from textpix.errors import ContainerError
from textpix.layout import GridDims, plan_grid

MODE_BYTES_PER_CELL: Dict[str, int] = {
    "RGBA": 4,
    "RGB": 3,
    "L": 1,
}
DEFAULT_MODE = "RGBA"
LENGTH_KEY = "textpix-length"


class PixelContainer:
    """Stores a byte buffer as raw PNG pixels, zero-padded to the grid.

    The PNG file bytes are the container handle. read() returns every cell
    byte including padding; read_payload() trims to the length recorded in
    the textpix-length chunk and refuses images that carry none.

    With no mode given, writes use RGBA and reads accept whatever supported
    mode the image declares. An explicit mode is enforced on read.
    """

    def __init__(self, mode: Optional[str] = None) -> None:
        if mode is not None and mode not in MODE_BYTES_PER_CELL:
            raise ContainerError(f"unsupported pixel mode: {mode}")
        self.strict = mode is not None
        self.mode = mode or DEFAULT_MODE
        self.bytes_per_cell = MODE_BYTES_PER_CELL[self.mode]

    def plan(self, length: int) -> GridDims:
        return plan_grid(length, self.bytes_per_cell)

    def write(self, buffer: bytes) -> bytes:
        raw = bytes(buffer)
        dims = self.plan(len(raw))
        capacity = dims.cells * self.bytes_per_cell
        padded = raw + b"\x00" * (capacity - len(raw))
        img = Image.frombytes(self.mode, (dims.width, dims.height), padded)
        info = PngInfo()
        info.add_text(LENGTH_KEY, str(len(raw)))
        out = io.BytesIO()
        img.save(out, format="PNG", pnginfo=info)
        return out.getvalue()

    def _open(self, handle: bytes) -> Tuple[bytes, Optional[int]]:
        try:
            img = Image.open(io.BytesIO(bytes(handle)))
            img.load()
        except (UnidentifiedImageError, OSError) as e:
            raise ContainerError(f"cannot read image: {e}") from e
        if img.mode not in MODE_BYTES_PER_CELL:
            raise ContainerError(f"unsupported pixel mode in image: {img.mode}")
        if self.strict and img.mode != self.mode:
            raise ContainerError(f"pixel mode mismatch: expected {self.mode}, got {img.mode}")
        recorded = img.info.get(LENGTH_KEY)
        length: Optional[int] = None
        if recorded is not None:
            try:
                length = int(recorded)
            except (TypeError, ValueError) as e:
                raise ContainerError(f"invalid {LENGTH_KEY} chunk: {recorded!r}") from e
        return img.tobytes(), length

    def read(self, handle: bytes) -> bytes:
        raw, _length = self._open(handle)
        return raw

    def read_payload(self, handle: bytes) -> bytes:
        raw, length = self._open(handle)
        if length is None:
            # Padding and payload zeros are indistinguishable; read() gives the raw cells.
            raise ContainerError(f"image has no {LENGTH_KEY} chunk")
        if length < 0 or length > len(raw):
            raise ContainerError(f"recorded length {length} does not fit image ({len(raw)} bytes)")
        return raw[:length]
