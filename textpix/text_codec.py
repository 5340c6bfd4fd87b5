#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Callable, Dict, Tuple

from textpix.dictionary import (
    DEFAULT_MIN_FREQUENCY,
    DEFAULT_MIN_LENGTH,
    LITERAL_ESCAPE,
    MAX_DICTIONARY_SIZE,
    TOKEN_FIRST,
    TOKEN_LAST,
    WIDE_TOKEN_PREFIX,
    Dictionary,
    build_dictionary,
)
from textpix.errors import StreamFormatError
from textpix.rle import rle_decode, rle_encode
from textpix.wordfreq import count_words, iter_spans

SENTENCE_END = b".!?"
WHITESPACE = b" \t\r\n\x0b\x0c"
MAX_LITERAL_RUN = 255


def at_sentence_start(prefix: bytes) -> bool:
    """True when a word following `prefix` should be capitalized.

    That is the start of the text (only whitespace so far), or a sentence
    terminator followed by at least one whitespace byte.
    """
    end = len(prefix)
    i = end
    while i > 0 and prefix[i - 1] in WHITESPACE:
        i -= 1
    if i == 0:
        return True
    return i < end and prefix[i - 1] in SENTENCE_END


def _same_length(chars: str, convert: Callable[[str], str]) -> str:
    # Case mappings like "ß" -> "SS" would change the word, keep those characters.
    return "".join(c if len(convert(c)) != 1 else convert(c) for c in chars)


def restore_case(word: str, sentence_start: bool) -> str:
    if sentence_start:
        return _same_length(word[:1], str.upper) + _same_length(word[1:], str.lower)
    return _same_length(word, str.lower)


def _append_literal(out: bytearray, raw: bytes) -> None:
    # Bytes >= 0x7F would read back as tokens; wrap them in (0xFF, n, ...) runs.
    i = 0
    n = len(raw)
    while i < n:
        if raw[i] < WIDE_TOKEN_PREFIX:
            out.append(raw[i])
            i += 1
            continue
        j = i
        while j < n and raw[j] >= WIDE_TOKEN_PREFIX and (j - i) < MAX_LITERAL_RUN:
            j += 1
        out.append(LITERAL_ESCAPE)
        out.append(j - i)
        out.extend(raw[i:j])
        i = j


def substitute_tokens(text: str, dictionary: Dictionary, preserve_case: bool = False) -> bytes:
    """Replace whole dictionary words by their tokens; no run-length pass."""
    lookup = dictionary.word_to_token()
    canonical = {word.lower(): word for _tok, word in dictionary}
    out = bytearray()
    plain = bytearray()
    for is_word, segment in iter_spans(text):
        raw = segment.encode("utf-8")
        token = lookup.get(segment.lower()) if is_word else None
        if token is not None and preserve_case:
            expected = restore_case(canonical[segment.lower()], at_sentence_start(plain))
            if segment != expected:
                token = None
        if token is not None:
            out.extend(token)
        else:
            _append_literal(out, raw)
        plain.extend(raw)
    return bytes(out)


def compress_text(text: str, dictionary: Dictionary, preserve_case: bool = False) -> bytes:
    if not isinstance(text, str):
        raise TypeError("text must be str")
    return rle_encode(substitute_tokens(text, dictionary, preserve_case=preserve_case))


def expand_tokens(data: bytes, dictionary: Dictionary) -> bytes:
    """Inverse of substitute_tokens: a single left-to-right scan."""
    words: Dict[bytes, str] = dictionary.as_mapping()
    out = bytearray()
    i = 0
    n = len(data)
    while i < n:
        b = data[i]
        if b == LITERAL_ESCAPE:
            if i + 1 >= n:
                raise StreamFormatError("truncated literal run header")
            end = i + 2 + data[i + 1]
            if end > n:
                raise StreamFormatError("truncated literal run")
            out.extend(data[i + 2 : end])
            i = end
            continue
        if b == WIDE_TOKEN_PREFIX:
            token = data[i : i + 2]
            if len(token) < 2:
                raise StreamFormatError("truncated two-byte token")
        elif TOKEN_FIRST <= b <= TOKEN_LAST:
            token = data[i : i + 1]
        else:
            out.append(b)
            i += 1
            continue
        word = words.get(token)
        if word is None:
            raise StreamFormatError(f"unknown token: {token.hex()}")
        out.extend(restore_case(word, at_sentence_start(out)).encode("utf-8"))
        i += len(token)
    return bytes(out)


def decompress_text(data: bytes, dictionary: Dictionary) -> str:
    raw = expand_tokens(rle_decode(bytes(data)), dictionary)
    try:
        return raw.decode("utf-8", errors="strict")
    except UnicodeDecodeError as e:
        raise StreamFormatError(f"restored text is not valid UTF-8: {e}") from e


def compress(
    text: str,
    min_frequency: int = DEFAULT_MIN_FREQUENCY,
    min_length: int = DEFAULT_MIN_LENGTH,
    max_size: int = MAX_DICTIONARY_SIZE,
    preserve_case: bool = False,
) -> Tuple[Dictionary, bytes]:
    table = count_words(text)
    dictionary = build_dictionary(table, min_frequency=min_frequency, min_length=min_length, max_size=max_size)
    return dictionary, compress_text(text, dictionary, preserve_case=preserve_case)


def decompress(dictionary: Dictionary, data: bytes) -> str:
    return decompress_text(data, dictionary)
