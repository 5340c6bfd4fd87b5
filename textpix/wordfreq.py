#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, Tuple

WORD_RE = re.compile(r"\w+")


@dataclass(frozen=True)
class FrequencyTable:
    """Per-word counts keyed by the lowercased word.

    Both mappings keep first-seen order (dict insertion order), which the
    dictionary builder relies on for deterministic tie-breaks.
    """

    counts: Dict[str, int] = field(default_factory=dict)
    variants: Dict[str, Dict[str, int]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.counts)

    def count(self, word: str) -> int:
        return self.counts.get(word.lower(), 0)

    def spellings(self, word: str) -> Tuple[str, ...]:
        return tuple(self.variants.get(word.lower(), {}))


def iter_spans(text: str) -> Iterator[Tuple[bool, str]]:
    """Yield (is_word, segment) pairs; joining the segments gives back `text`."""
    pos = 0
    for m in WORD_RE.finditer(text):
        start, end = m.span()
        if start > pos:
            yield False, text[pos:start]
        yield True, m.group(0)
        pos = end
    if pos < len(text):
        yield False, text[pos:]


def count_words(text: str) -> FrequencyTable:
    counts: Dict[str, int] = {}
    variants: Dict[str, Dict[str, int]] = {}
    for m in WORD_RE.finditer(text):
        word = m.group(0)
        lower = word.lower()
        counts[lower] = counts.get(lower, 0) + 1
        seen = variants.setdefault(lower, {})
        seen[word] = seen.get(word, 0) + 1
    return FrequencyTable(counts=counts, variants=variants)
