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

from dataclasses import dataclass, astuple
from typing import Optional

from vntrkmers.boundaries import BoundaryTable
from vntrkmers.errors import ConfigError


def saturating_sub(a: int, b: int) -> int:
    return a - b if a >= b else 0


@dataclass(frozen=True)
class FlankWindows:
    """
    The (left trim, right trim) pairs of the TR, left NTR and right NTR
    windows of a single locus sequence.

    Each pair selects the window [left, len(sequence) - right).
    """
    tr_l: int
    tr_r: int
    lntr_l: int
    lntr_r: int
    rntr_l: int
    rntr_r: int

    def __iter__(self):
        return iter(astuple(self))

    @property
    def tr(self):
        return self.tr_l, self.tr_r

    @property
    def lntr(self):
        return self.lntr_l, self.lntr_r

    @property
    def rntr(self):
        return self.rntr_l, self.rntr_r


def compute_windows(
    locus: int,
    haplotype: int,
    flank_size: Optional[int],
    ntr_size: int,
    kmer_size: int,
    seq_len: int,
    table: Optional[BoundaryTable] = None,
) -> FlankWindows:
    """
    Compute the TR and NTR windows of a locus sequence.

    With a boundary table the TR flanks are the measured values of
    (`locus`, `haplotype`). Otherwise both TR flanks are `flank_size`.
    Each NTR window extends at most `ntr_size` bases outwards from its TR
    flank, and ends k - 1 bases inside the TR so that the k-mers spanning
    the seam are produced exactly once.
    """
    if table is not None:
        ltr_flank, rtr_flank = table.tr_flanks(locus, haplotype)
    else:
        if flank_size is None:
            raise ConfigError(
                'A flank size is required when no boundary table is supplied'
            )
        if flank_size < ntr_size:
            raise ConfigError(
                f'Flank size ({flank_size}) is smaller than '
                f'the NTR size ({ntr_size})'
            )
        ltr_flank = rtr_flank = flank_size

    lntr_flank = saturating_sub(ltr_flank, ntr_size)
    rntr_flank = saturating_sub(rtr_flank, ntr_size)

    overlap = kmer_size - 1

    return FlankWindows(
        tr_l=ltr_flank,
        tr_r=rtr_flank,
        lntr_l=lntr_flank,
        lntr_r=saturating_sub(saturating_sub(seq_len, ltr_flank), overlap),
        rntr_l=saturating_sub(saturating_sub(seq_len, rtr_flank), overlap),
        rntr_r=rntr_flank,
    )
