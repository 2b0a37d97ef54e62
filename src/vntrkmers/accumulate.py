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

import logging

from collections import Counter
from functools import partial
from typing import Callable, Dict, List, Optional, Sequence

from xopen import xopen

from vntrkmers.boundaries import BoundaryTable
from vntrkmers.config import RunConfig
from vntrkmers.errors import SequenceFileError
from vntrkmers.fasta import open_loci
from vntrkmers.flanks import compute_windows
from vntrkmers.haplotypes import Haplotype
from vntrkmers.kmers import build_kmers

logger = logging.getLogger()


class LocusKmerAccumulator:
    """
    Accumulates the TR, left NTR and right NTR k-mers of every locus across
    a series of haplotype sequence files.

    Parameters:
        config (RunConfig): The run configuration.
        nloci (int): The number of loci in each sequence file.
        table (Optional[BoundaryTable]): Measured TR boundaries. When absent
            the uniform flank size of `config` is used.
        opener (Callable): The callable used to open sequence files.

    Notes:
        Counted haplotypes add k-mer counts, canonical unless disabled in
        `config`. Built-only haplotypes register their k-mers in
        non-canonical form with a count of zero. The final tables do not
        depend on the order in which haplotypes are added.

        All three regions are accumulated in both modes, so `lntr` and
        `rntr` can be read from the object even though `tables()` only
        returns the TR tables for a uniform flank size.
    """
    def __init__(
        self,
        config: RunConfig,
        nloci: int,
        table: Optional[BoundaryTable] = None,
        opener: Callable = partial(xopen, threads=0),
    ):
        if table is None:
            config.require_flank_size()

        self.config = config
        self.nloci = nloci
        self.table = table
        self.opener = opener

        self.tr = [Counter() for _ in range(nloci)]
        self.lntr = [Counter() for _ in range(nloci)]
        self.rntr = [Counter() for _ in range(nloci)]

    @property
    def has_boundaries(self) -> bool:
        return self.table is not None

    def add_sequence(self, locus: int, haplotype: int, sequence: str, counted: bool = True):
        """
        Add the k-mers of one locus sequence to the tables of `locus`.
        """
        if not sequence:
            return

        config = self.config
        windows = compute_windows(
            locus,
            haplotype,
            config.flank_size,
            config.ntr_size,
            config.kmer_size,
            len(sequence),
            self.table,
        )

        build = partial(
            build_kmers,
            sequence=sequence,
            size=config.kmer_size,
            canonical=config.canonical if counted else False,
            count=counted,
        )
        build(self.tr[locus], left_trim=windows.tr_l, right_trim=windows.tr_r)
        build(self.lntr[locus], left_trim=windows.lntr_l, right_trim=windows.lntr_r)
        build(self.rntr[locus], left_trim=windows.rntr_l, right_trim=windows.rntr_r)

    def add_haplotype(self, index: int, haplotype: Haplotype):
        """
        Stream the sequence file of a haplotype into the tables.

        Parameters:
            index (int): The haplotype's position in the run, used to look up
                its columns in the boundary table.
            haplotype (Haplotype): The haplotype to add.
        """
        if haplotype.counted:
            logger.info(f'Building and counting {haplotype.name} kmers')
        else:
            logger.info(f'Building {haplotype.name} kmers')

        locus = -1
        with open_loci(haplotype.sequence_file, self.opener) as sequences:
            for locus, sequence in enumerate(sequences):
                if locus >= self.nloci:
                    raise SequenceFileError(
                        f'{haplotype.sequence_file} has more than '
                        f'{self.nloci} loci'
                    )
                self.add_sequence(locus, index, sequence, haplotype.counted)

        if locus + 1 < self.nloci:
            logger.warning(
                f'{haplotype.sequence_file} has {locus + 1} of {self.nloci} loci'
            )

    def run(self, haplotypes: Sequence[Haplotype]):
        for index, haplotype in enumerate(haplotypes):
            self.add_haplotype(index, haplotype)

    def tables(self) -> Dict[str, List[Counter]]:
        """
        Return the tables to be written, keyed by region: TR, left NTR and
        right NTR, or only TR when the windows come from a uniform flank size.
        """
        if self.has_boundaries:
            return {'tr': self.tr, 'lntr': self.lntr, 'rntr': self.rntr}
        return {'tr': self.tr}
