#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Unit tests for k-mer extraction."""

import unittest

from collections import Counter

from vntrkmers.kmers import (
    build_kmers,
    canonical_kmer,
    iter_kmers,
    iter_window_kmers,
    reverse_complement,
)


class TestIterKmers(unittest.TestCase):
    def test_all_kmers(self):
        self.assertEqual(list(iter_kmers('ACGTA', 3)), ['ACG', 'CGT', 'GTA'])

    def test_bounded(self):
        self.assertEqual(list(iter_kmers('ACGTACGT', 3, 2, 6)), ['GTA', 'TAC'])

    def test_sequence_shorter_than_k(self):
        self.assertEqual(list(iter_kmers('AC', 3)), [])


class TestCanonical(unittest.TestCase):
    def test_reverse_complement(self):
        self.assertEqual(reverse_complement('AACGT'), 'ACGTT')

    def test_canonical_is_minimum(self):
        self.assertEqual(canonical_kmer('TTT'), 'AAA')
        self.assertEqual(canonical_kmer('AAA'), 'AAA')
        self.assertEqual(canonical_kmer('TAC'), 'GTA')

    def test_palindrome(self):
        self.assertEqual(canonical_kmer('ACGT'), 'ACGT')


class TestIterWindowKmers(unittest.TestCase):
    def test_window(self):
        self.assertEqual(list(iter_window_kmers('ACGTACGT', 3, 1, 4)), ['CGT'])

    def test_skips_ambiguous_bases(self):
        self.assertEqual(list(iter_window_kmers('ACNGTA', 2)), ['AC', 'GT', 'TA'])

    def test_uppercases(self):
        self.assertEqual(list(iter_window_kmers('acgT', 4)), ['ACGT'])

    def test_trims_past_the_sequence(self):
        self.assertEqual(list(iter_window_kmers('ACGT', 2, 3, 3)), [])


class TestBuildKmers(unittest.TestCase):
    def test_counts_canonical(self):
        counts = build_kmers(Counter(), 'AAATTT', 3)
        self.assertEqual(counts, Counter({'AAA': 2, 'AAT': 2}))

    def test_counts_non_canonical(self):
        counts = build_kmers(Counter(), 'AAATTT', 3, canonical=False)
        self.assertEqual(
            dict(counts), {'AAA': 1, 'AAT': 1, 'ATT': 1, 'TTT': 1}
        )

    def test_build_only_registers_zero_counts(self):
        counts = build_kmers(Counter(), 'ACGTA', 3, canonical=False, count=False)
        self.assertEqual(dict(counts), {'ACG': 0, 'CGT': 0, 'GTA': 0})

    def test_build_only_keeps_existing_counts(self):
        counts = Counter({'ACG': 3})
        build_kmers(counts, 'ACGTA', 3, canonical=False, count=False)
        self.assertEqual(counts['ACG'], 3)

    def test_accumulates(self):
        counts = Counter()
        build_kmers(counts, 'ACGT', 4, canonical=False)
        build_kmers(counts, 'ACGT', 4, canonical=False)
        self.assertEqual(counts['ACGT'], 2)


if __name__ == '__main__':
    unittest.main()
