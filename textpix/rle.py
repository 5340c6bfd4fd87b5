#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from textpix.dictionary import RUN_MARKER, WIDE_TOKEN_PREFIX

MIN_RUN = 3
MAX_RUN = 255


def rle_encode(data: bytes) -> bytes:
    """Run-length encode with marker triples (0x7E, count, byte).

    Runs of MIN_RUN or more identical bytes become markers, split every
    MAX_RUN bytes. Literal 0x7E is always written as a marker (count may be
    1 or 2) so the decoder never sees a bare one. 0x7F runs stay literal.
    """
    out = bytearray()
    i = 0
    n = len(data)
    while i < n:
        b = data[i]
        j = i + 1
        while j < n and data[j] == b and (j - i) < MAX_RUN:
            j += 1
        run = j - i
        if b == RUN_MARKER or (run >= MIN_RUN and b != WIDE_TOKEN_PREFIX):
            out.append(RUN_MARKER)
            out.append(run)
            out.append(b)
        else:
            out.extend(data[i:j])
        i = j
    return bytes(out)


def rle_decode(data: bytes) -> bytes:
    out = bytearray()
    i = 0
    n = len(data)
    while i < n:
        b = data[i]
        if b == RUN_MARKER and i + 2 < n:
            out.extend(bytes([data[i + 2]]) * data[i + 1])
            i += 3
            continue
        out.append(b)
        i += 1
    return bytes(out)
