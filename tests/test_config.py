#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Unit tests for run configuration."""

import unittest

from vntrkmers.config import DEFAULT_NTR_SIZE, RunConfig
from vntrkmers.errors import ConfigError


class TestRunConfig(unittest.TestCase):
    def test_defaults(self):
        config = RunConfig(kmer_size=21)
        self.assertEqual(config.ntr_size, DEFAULT_NTR_SIZE)
        self.assertIsNone(config.flank_size)
        self.assertTrue(config.canonical)
        self.assertEqual(config.threshold, 0)

    def test_invalid_kmer_size(self):
        with self.assertRaises(ConfigError):
            RunConfig(kmer_size=0)

    def test_negative_threshold(self):
        with self.assertRaises(ConfigError):
            RunConfig(kmer_size=21, threshold=-1)

    def test_unused_small_flank_size_is_accepted(self):
        config = RunConfig(kmer_size=21, ntr_size=800, flank_size=100)
        self.assertEqual(config.flank_size, 100)

    def test_require_flank_size(self):
        self.assertEqual(RunConfig(kmer_size=21, flank_size=900).require_flank_size(), 900)

    def test_require_missing_flank_size(self):
        with self.assertRaises(ConfigError):
            RunConfig(kmer_size=21).require_flank_size()

    def test_require_flank_size_smaller_than_ntr(self):
        with self.assertRaisesRegex(ConfigError, 'smaller than'):
            RunConfig(kmer_size=21, flank_size=100).require_flank_size()


if __name__ == '__main__':
    unittest.main()
