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

from dataclasses import dataclass
from typing import Optional

from vntrkmers.errors import ConfigError

DEFAULT_NTR_SIZE = 800


@dataclass(frozen=True)
class RunConfig:
    """
    Values shared by every stage of a k-mer extraction run.

    Attributes:
        kmer_size (int): The k-mer length.
        ntr_size (int): The target length of each NTR window.
        flank_size (Optional[int]): The uniform flank length used when no
            boundary table is supplied.
        canonical (bool): Count canonical k-mers for counted haplotypes.
        threshold (int): The minimum count of a k-mer written to output.
    """
    kmer_size: int
    ntr_size: int = DEFAULT_NTR_SIZE
    flank_size: Optional[int] = None
    canonical: bool = True
    threshold: int = 0

    def __post_init__(self):
        if self.kmer_size <= 0:
            raise ConfigError(f'K-mer size must be positive: {self.kmer_size}')

        if self.ntr_size < 0:
            raise ConfigError(f'NTR size must not be negative: {self.ntr_size}')

        if self.threshold < 0:
            raise ConfigError(f'Minimum count must not be negative: {self.threshold}')

    def require_flank_size(self) -> int:
        """
        Return the uniform flank size, which must be set and at least the
        NTR size.
        """
        if self.flank_size is None:
            raise ConfigError(
                'A flank size is required when no boundary table is supplied'
            )
        if self.flank_size < self.ntr_size:
            raise ConfigError(
                f'Flank size ({self.flank_size}) is smaller than '
                f'the NTR size ({self.ntr_size})'
            )
        return self.flank_size
