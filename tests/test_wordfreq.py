#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import unittest

from textpix.wordfreq import count_words, iter_spans


class WordFrequencyTests(unittest.TestCase):
    def test_empty_text(self) -> None:
        table = count_words("")
        self.assertEqual(len(table), 0)
        self.assertEqual(table.counts, {})
        self.assertEqual(table.variants, {})

    def test_counts_are_case_insensitive(self) -> None:
        table = count_words("The cat saw the CAT. the end")
        self.assertEqual(table.counts["the"], 3)
        self.assertEqual(table.counts["cat"], 2)
        self.assertEqual(table.count("THE"), 3)
        self.assertEqual(table.count("missing"), 0)

    def test_variants_keep_first_seen_order(self) -> None:
        table = count_words("Hello hello HELLO hello")
        self.assertEqual(table.spellings("hello"), ("Hello", "hello", "HELLO"))
        self.assertEqual(table.variants["hello"], {"Hello": 1, "hello": 2, "HELLO": 1})

    def test_words_first_seen_order(self) -> None:
        table = count_words("beta alpha beta gamma")
        self.assertEqual(list(table.counts), ["beta", "alpha", "gamma"])

    def test_word_characters_include_digits_and_underscore(self) -> None:
        table = count_words("node_1 node_1, x-ray 42")
        self.assertEqual(table.counts["node_1"], 2)
        self.assertIn("x", table.counts)
        self.assertIn("ray", table.counts)
        self.assertEqual(table.counts["42"], 1)

    def test_unicode_words(self) -> None:
        table = count_words("Привет привет мир")
        self.assertEqual(table.counts["привет"], 2)
        self.assertEqual(table.spellings("привет"), ("Привет", "привет"))

    def test_spans_partition_text(self) -> None:
        text = "  Hi, there!\n\tok..."
        spans = list(iter_spans(text))
        self.assertEqual("".join(seg for _w, seg in spans), text)
        self.assertEqual(
            spans,
            [
                (False, "  "),
                (True, "Hi"),
                (False, ", "),
                (True, "there"),
                (False, "!\n\t"),
                (True, "ok"),
                (False, "..."),
            ],
        )

    def test_spans_empty(self) -> None:
        self.assertEqual(list(iter_spans("")), [])


if __name__ == "__main__":
    unittest.main()
