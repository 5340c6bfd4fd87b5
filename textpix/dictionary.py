#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Sequence, Tuple

from textpix.errors import TokenCollisionError
from textpix.wordfreq import FrequencyTable

RUN_MARKER = 0x7E
WIDE_TOKEN_PREFIX = 0x7F
TOKEN_FIRST = 0x80
TOKEN_LAST = 0xFE
LITERAL_ESCAPE = 0xFF

SINGLE_BYTE_SLOTS = TOKEN_LAST - TOKEN_FIRST + 1  # 127
WIDE_SLOTS = 256
MAX_DICTIONARY_SIZE = SINGLE_BYTE_SLOTS + WIDE_SLOTS

DEFAULT_MIN_FREQUENCY = 2
DEFAULT_MIN_LENGTH = 2


def token_for_rank(rank: int) -> bytes:
    if rank < 0 or rank >= MAX_DICTIONARY_SIZE:
        raise TokenCollisionError(f"dictionary rank out of token space: {rank}")
    if rank < SINGLE_BYTE_SLOTS:
        return bytes([TOKEN_FIRST + rank])
    return bytes([WIDE_TOKEN_PREFIX, rank - SINGLE_BYTE_SLOTS])


def is_valid_token(token: bytes) -> bool:
    if len(token) == 1:
        return TOKEN_FIRST <= token[0] <= TOKEN_LAST
    if len(token) == 2:
        return token[0] == WIDE_TOKEN_PREFIX
    return False


@dataclass(frozen=True)
class Dictionary:
    """Token -> canonical word mapping, in rank order. Never mutated."""

    entries: Tuple[Tuple[bytes, str], ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Tuple[bytes, str]]:
        return iter(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def tokens(self) -> List[bytes]:
        return [tok for tok, _word in self.entries]

    def as_mapping(self) -> Dict[bytes, str]:
        return dict(self.entries)

    def word_to_token(self) -> Dict[str, bytes]:
        """Reverse lookup used during substitution (lowercased word -> token)."""
        return {word.lower(): tok for tok, word in self.entries}


def validate_tokens(tokens: Sequence[bytes]) -> None:
    seen = set()
    for tok in tokens:
        if tok[:1] and tok[0] in (RUN_MARKER, LITERAL_ESCAPE):
            raise TokenCollisionError(f"token collides with escape byte: {tok.hex()}")
        if not is_valid_token(tok):
            raise TokenCollisionError(f"token outside reserved range: {tok.hex()}")
        if tok in seen:
            raise TokenCollisionError(f"duplicate token: {tok.hex()}")
        seen.add(tok)


def canonical_spelling(spellings: Dict[str, int]) -> str:
    # Most frequent spelling; max() keeps the first seen one on ties.
    return max(spellings.items(), key=lambda item: item[1])[0]


def rank_candidates(
    table: FrequencyTable,
    min_frequency: int = DEFAULT_MIN_FREQUENCY,
    min_length: int = DEFAULT_MIN_LENGTH,
) -> List[Tuple[str, int]]:
    """Return (word, single-byte savings) pairs, best first.

    Ties keep first-seen order because sorted() is stable over the table's
    insertion order.
    """
    scored: List[Tuple[str, int]] = []
    for word, count in table.counts.items():
        if count < min_frequency or len(word) <= min_length:
            continue
        scored.append((word, (len(word.encode("utf-8")) - 1) * count))
    return sorted(scored, key=lambda item: -item[1])


def build_dictionary(
    table: FrequencyTable,
    min_frequency: int = DEFAULT_MIN_FREQUENCY,
    min_length: int = DEFAULT_MIN_LENGTH,
    max_size: int = MAX_DICTIONARY_SIZE,
) -> Dictionary:
    limit = max(0, min(int(max_size), MAX_DICTIONARY_SIZE))
    selected: List[str] = []
    for word, _single in rank_candidates(table, min_frequency, min_length):
        if len(selected) >= limit:
            break
        token_len = 1 if len(selected) < SINGLE_BYTE_SLOTS else 2
        savings = (len(word.encode("utf-8")) - token_len) * table.counts[word]
        if savings <= 0:
            continue
        selected.append(word)

    entries = tuple(
        (token_for_rank(rank), canonical_spelling(table.variants[word]))
        for rank, word in enumerate(selected)
    )
    validate_tokens([tok for tok, _word in entries])
    return Dictionary(entries=entries)
