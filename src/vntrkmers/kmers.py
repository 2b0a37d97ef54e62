#!/usr/bin/env python
# coding: utf-8
###############################################################################
#
#    VNTRkmers
#
#    Copyright (C) 2023  QIMR Berghofer Medical Research Institute
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU General Public License as published by
#    the Free Software Foundation, either version 3 of the License, or
#    (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU General Public License for more details.
#
#    You should have received a copy of the GNU General Public License
#    along with this program.  If not, see <https://www.gnu.org/licenses/>.
#
###############################################################################

from collections import Counter
from typing import Iterator, Optional, Sequence

NUCLEOTIDES = frozenset('ACGT')

COMPLEMENT = str.maketrans('ACGT', 'TGCA')


def iter_kmers(
    sequence: Sequence,
    size: int,
    start: int = 0,
    end: Optional[int] = None,
) -> Iterator[Sequence]:
    """
    Yield k-mers of length `size` from `sequence` that lie entirely within
    the slice [start, end)
    """
    if end is None:
        end = len(sequence)

    for i in range(start, end - size + 1):
        yield sequence[i:size + i]


def reverse_complement(kmer: str) -> str:
    return kmer.translate(COMPLEMENT)[::-1]


def canonical_kmer(kmer: str) -> str:
    """
    Return the lexicographically smaller of `kmer` and its reverse complement
    """
    rc = reverse_complement(kmer)
    return kmer if kmer <= rc else rc


def iter_window_kmers(
    sequence: str,
    size: int,
    left_trim: int = 0,
    right_trim: int = 0,
) -> Iterator[str]:
    """
    Yield the upper-case k-mers of the window [left_trim, len - right_trim).

    K-mers containing anything other than A, C, G or T are skipped.
    """
    sequence = sequence.upper()
    end = len(sequence) - right_trim

    for kmer in iter_kmers(sequence, size, left_trim, end):
        if NUCLEOTIDES.issuperset(kmer):
            yield kmer


def build_kmers(
    counts: Counter,
    sequence: str,
    size: int,
    left_trim: int = 0,
    right_trim: int = 0,
    canonical: bool = True,
    count: bool = True,
) -> Counter:
    """
    Add the k-mers of a sequence window to a frequency table.

    Parameters:
        counts (Counter): The table to update in place.
        sequence (str): The full locus sequence.
        size (int): The k-mer length.
        left_trim (int): Number of bases excluded from the left end.
        right_trim (int): Number of bases excluded from the right end.
        canonical (bool): Store each k-mer in its strand-normalized form.
        count (bool): Increment the counts. When false, k-mers are only
            registered in the table with a count of zero.

    Returns:
        Counter: The updated table.
    """
    for kmer in iter_window_kmers(sequence, size, left_trim, right_trim):
        if canonical:
            kmer = canonical_kmer(kmer)

        if count:
            counts[kmer] += 1
        else:
            counts.setdefault(kmer, 0)

    return counts
