#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import json
import struct
from typing import List, Tuple

from textpix.dictionary import Dictionary, is_valid_token
from textpix.errors import FramingError

LENGTH_PREFIX = struct.Struct(">I")


def serialize_dictionary(dictionary: Dictionary) -> bytes:
    """Compact JSON object {token_hex: word} in rank order.

    An empty dictionary serializes to no bytes at all.
    """
    if not dictionary:
        return b""
    mapping = {tok.hex(): word for tok, word in dictionary}
    return json.dumps(mapping, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def deserialize_dictionary(raw: bytes) -> Dictionary:
    if not raw:
        return Dictionary()
    try:
        data = json.loads(raw.decode("utf-8", errors="strict"))
    except (UnicodeDecodeError, ValueError) as e:
        raise FramingError(f"dictionary segment is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise FramingError("dictionary segment must be a JSON object")
    entries: List[Tuple[bytes, str]] = []
    for key, word in data.items():
        try:
            tok = bytes.fromhex(key)
        except ValueError as e:
            raise FramingError(f"invalid token key: {key!r}") from e
        if not is_valid_token(tok):
            raise FramingError(f"token outside reserved range: {key!r}")
        if not isinstance(word, str) or not word:
            raise FramingError(f"invalid dictionary word for token {key!r}")
        entries.append((tok, word))
    return Dictionary(entries=tuple(entries))


def frame(dictionary: Dictionary, data: bytes) -> bytes:
    dict_raw = serialize_dictionary(dictionary)
    return LENGTH_PREFIX.pack(len(dict_raw)) + dict_raw + bytes(data)


def parse(buffer: bytes) -> Tuple[Dictionary, bytes]:
    raw = bytes(buffer)
    if len(raw) < LENGTH_PREFIX.size:
        raise FramingError("payload shorter than the length prefix")
    (dict_len,) = LENGTH_PREFIX.unpack_from(raw, 0)
    start = LENGTH_PREFIX.size
    end = start + dict_len
    if end > len(raw):
        raise FramingError(f"declared dictionary length {dict_len} exceeds payload ({len(raw) - start} bytes)")
    return deserialize_dictionary(raw[start:end]), raw[end:]
