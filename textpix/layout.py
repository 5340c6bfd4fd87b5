#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class GridDims:
    pixels_needed: int
    width: int
    height: int

    @property
    def cells(self) -> int:
        return self.width * self.height


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


def plan_grid(payload_length: int, bytes_per_cell: int = 4) -> GridDims:
    """Smallest square-ish grid for the payload.

    width = ceil(sqrt(pixels_needed)), height = ceil(pixels_needed / width).
    Deterministic, not a packing optimum. An empty payload still gets 1x1.
    """
    if bytes_per_cell <= 0:
        raise ValueError("bytes_per_cell must be positive")
    if payload_length < 0:
        raise ValueError("payload_length must not be negative")
    pixels_needed = _ceil_div(payload_length, bytes_per_cell)
    if pixels_needed == 0:
        return GridDims(pixels_needed=0, width=1, height=1)
    side = math.isqrt(pixels_needed)
    if side * side < pixels_needed:
        side += 1
    return GridDims(pixels_needed=pixels_needed, width=side, height=_ceil_div(pixels_needed, side))
