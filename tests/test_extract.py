#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Command-line tests for the extract command."""

import os
import tempfile
import unittest

from click.testing import CliRunner

from vntrkmers.__main__ import entry_point
from vntrkmers.errors import ConfigError, SelectionError
from vntrkmers.haplotypes import HAPLOTYPE_CATALOG
from vntrkmers.kmerIO import KmersFileReader

HEADER = 'chrom start end name lflank trlen rflank\n'


class ExtractTestCase(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.prefix = os.path.join(self.tmpdir.name, 'out')
        self.runner = CliRunner()

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, name, content):
        path = os.path.join(self.tmpdir.name, name)
        with open(path, 'w') as fh:
            fh.write(content)
        return path

    def _invoke(self, *args):
        return self.runner.invoke(entry_point, ['extract', *args])

    def _read(self, region):
        with KmersFileReader(f'{self.prefix}.{region}.kmers') as reader:
            return [dict(counts) for counts in reader.read_tables()]


class TestUniformFlanks(ExtractTestCase):
    def test_two_record_example(self):
        fasta = self._write('h0.fa', '>1\nACGTACGT\n>2\nTTTT\n')
        result = self._invoke(
            '-k', '3', '-F', '2', '-t', '1', '--non-canonical',
            '-f', fasta, '-o', self.prefix,
        )
        self.assertEqual(result.exit_code, 0, result.output)

        with open(f'{self.prefix}.tr.kmers') as fh:
            self.assertEqual(fh.read(), '>0\nGTA\t1\nTAC\t1\n>1\n')
        self.assertFalse(os.path.exists(f'{self.prefix}.lntr.kmers'))
        self.assertFalse(os.path.exists(f'{self.prefix}.rntr.kmers'))

    def test_catalog_include(self):
        for name in HAPLOTYPE_CATALOG:
            self._write(f'{name}.combined-hap.fasta', '>0\nACGTACGT\n')

        result = self._invoke(
            '-k', '3', '-F', '2', '-t', '1', '--non-canonical', '--no-masked',
            '-d', self.tmpdir.name, '-i', 'AK1.h0', '-i', 'AK1.h1',
            '-o', self.prefix,
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self._read('tr'), [{'GTA': 2, 'TAC': 2}])

    def test_flank_size_required(self):
        fasta = self._write('h0.fa', '>1\nACGT\n')
        result = self._invoke('-k', '3', '-f', fasta, '-o', self.prefix)
        self.assertEqual(result.exit_code, 1)
        self.assertIsInstance(result.exception, ConfigError)

    def test_flank_smaller_than_ntr(self):
        fasta = self._write('h0.fa', '>1\nACGT\n')
        result = self._invoke('-k', '3', '-F', '100', '-f', fasta, '-o', self.prefix)
        self.assertEqual(result.exit_code, 1)
        self.assertIsInstance(result.exception, ConfigError)


class TestMeasuredBoundaries(ExtractTestCase):
    def setUp(self):
        super().setUp()
        self.fastas = [
            self._write('h0.fa', '>0\nAACCGGTT\n'),
            self._write('h1.fa', '>0\nAACCGGTT\n'),
        ]
        self.boundaries = [
            self._write('h0.fa.sum.txt', HEADER + 'chr1 1 9 L0 2 4 2\n'),
            self._write('h1.fa.sum.txt', HEADER + 'chr1 1 9 L0 2 4 2\n'),
        ]

    def test_boundary_files(self):
        result = self._invoke(
            '-k', '2', '-t', '1', '-N', '1',
            '-f', self.fastas[0], '-f', self.fastas[1],
            '-b', self.boundaries[0], '-b', self.boundaries[1],
            '-o', self.prefix,
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self._read('tr'), [{'CC': 2, 'CG': 1, 'GG': 0}])
        self.assertEqual(self._read('lntr'), [{'AC': 1}])
        self.assertEqual(self._read('rntr'), [{'AC': 1, 'GT': 0}])

    def test_boundary_suffix_and_min_count(self):
        result = self._invoke(
            '-k', '2', '-t', '1', '-N', '1', '-m', '1', '-c', 'sum.txt',
            '-f', self.fastas[0], '-f', self.fastas[1],
            '-o', self.prefix,
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self._read('tr'), [{'CC': 2, 'CG': 1}])
        self.assertEqual(self._read('rntr'), [{'AC': 1}])

    def test_boundary_file_requires_fasta(self):
        result = self._invoke(
            '-k', '2', '-a', '-b', self.boundaries[0], '-o', self.prefix,
        )
        self.assertEqual(result.exit_code, 1)
        self.assertIsInstance(result.exception, ConfigError)

    def test_missing_boundary_file(self):
        result = self._invoke(
            '-k', '2', '-t', '1', '-c', 'missing.txt',
            '-f', self.fastas[0], '-o', self.prefix,
        )
        self.assertEqual(result.exit_code, 1)
        self.assertIn('missing.txt', str(result.exception))
        for region in ('tr', 'lntr', 'rntr'):
            self.assertFalse(os.path.exists(f'{self.prefix}.{region}.kmers'))

    def test_unused_flank_size(self):
        result = self._invoke(
            '-k', '2', '-t', '1', '-F', '0', '-N', '1',
            '-f', self.fastas[0], '-f', self.fastas[1],
            '-b', self.boundaries[0], '-b', self.boundaries[1],
            '-o', self.prefix,
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self._read('tr'), [{'CC': 2, 'CG': 1, 'GG': 0}])


class TestSelectionOptions(ExtractTestCase):
    def test_no_selection(self):
        result = self._invoke('-k', '3', '-F', '800', '-o', self.prefix)
        self.assertEqual(result.exit_code, 1)
        self.assertIsInstance(result.exception, SelectionError)

    def test_conflicting_selection(self):
        result = self._invoke('-k', '3', '-F', '800', '-a', '-n', '-o', self.prefix)
        self.assertEqual(result.exit_code, 2)
        self.assertIn('cannot be used with', result.output)

    def test_num_counted_without_fasta(self):
        result = self._invoke('-k', '3', '-F', '800', '-a', '-N', '2', '-o', self.prefix)
        self.assertEqual(result.exit_code, 1)
        self.assertIsInstance(result.exception, SelectionError)

    def test_unknown_haplotype(self):
        result = self._invoke('-k', '3', '-F', '800', '-i', 'Z', '-o', self.prefix)
        self.assertEqual(result.exit_code, 1)
        self.assertIsInstance(result.exception, SelectionError)
        self.assertIn('Z', str(result.exception))


class TestEntryPoint(unittest.TestCase):
    def test_help_groups(self):
        result = CliRunner().invoke(entry_point, ['extract', '--help'])
        self.assertEqual(result.exit_code, 0)
        for group in ('Haplotype selection', 'Boundary options', 'Logging options'):
            self.assertIn(group, result.output)

    def test_version(self):
        result = CliRunner().invoke(entry_point, ['--version'])
        self.assertEqual(result.exit_code, 0)


if __name__ == '__main__':
    unittest.main()
