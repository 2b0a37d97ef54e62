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
import os

from functools import partial
from typing import Callable, List, Sequence, Tuple, Union

from xopen import xopen

from vntrkmers.errors import BoundaryFileError

FilePath = Union[str, bytes, os.PathLike]

COLUMNS_PER_HAPLOTYPE = 3
FIELDS_PER_LINE = 7
FIRST_FLANK_FIELD = 4

logger = logging.getLogger()


class BoundaryTable:
    """
    Measured TR boundaries indexed by (locus, haplotype).

    Each row holds three columns per haplotype: the left TR flank, the TR
    length and the right TR flank.
    """
    def __init__(self, nloci: int, nhap: int):
        self.nloci = nloci
        self.nhap = nhap
        self.rows = [[0] * (COLUMNS_PER_HAPLOTYPE * nhap) for _ in range(nloci)]

    def __len__(self):
        return self.nloci

    def __getitem__(self, locus: int) -> List[int]:
        return self.rows[locus]

    def tr_flanks(self, locus: int, haplotype: int) -> Tuple[int, int]:
        row = self.rows[locus]
        col = COLUMNS_PER_HAPLOTYPE * haplotype
        return row[col], row[col + 2]

    def tr_length(self, locus: int, haplotype: int) -> int:
        return self.rows[locus][COLUMNS_PER_HAPLOTYPE * haplotype + 1]


def boundary_paths(
    haplotypes: Sequence[str],
    suffix: str,
    directory: FilePath = '.',
) -> List[str]:
    """
    Return the `<haplotype>.<suffix>` boundary file of each haplotype
    """
    return [os.path.join(directory, f'{hap}.{suffix}') for hap in haplotypes]


def parse_boundary_fields(line: str, path: FilePath, lineno: int) -> List[int]:
    fields = line.split()
    if len(fields) != FIELDS_PER_LINE:
        raise BoundaryFileError(
            f'{path}:{lineno}: expected {FIELDS_PER_LINE} fields '
            f'but found {len(fields)}'
        )

    values = []
    for field in fields[FIRST_FLANK_FIELD:]:
        try:
            value = int(field)
        except ValueError:
            raise BoundaryFileError(
                f'{path}:{lineno}: not an integer: {field!r}'
            ) from None
        if value < 0:
            raise BoundaryFileError(f'{path}:{lineno}: negative value: {value}')
        values.append(value)

    return values


def read_boundary_file(
    table: BoundaryTable,
    haplotype: int,
    path: FilePath,
    opener: Callable = partial(xopen, threads=0),
):
    """
    Copy the flank columns of one haplotype's boundary file into `table`.

    The first line of the file is a header. Every following line describes
    the next locus. Blank lines may only trail the last locus.
    """
    col = COLUMNS_PER_HAPLOTYPE * haplotype
    try:
        fileobj = opener(path, 'rt')
    except OSError as e:
        raise BoundaryFileError(f'Cannot open boundary file {path}: {e}') from e

    locus = 0
    blank_lineno = None
    with fileobj:
        next(fileobj, None)

        for lineno, line in enumerate(fileobj, start=2):
            if not line.strip():
                if blank_lineno is None:
                    blank_lineno = lineno
                continue

            # blank lines are only allowed after the last locus
            if blank_lineno is not None:
                parse_boundary_fields('', path, blank_lineno)

            if locus >= table.nloci:
                raise BoundaryFileError(
                    f'{path}:{lineno}: more loci than the {table.nloci} '
                    f'found in the sequence files'
                )

            values = parse_boundary_fields(line, path, lineno)
            table.rows[locus][col:col + COLUMNS_PER_HAPLOTYPE] = values
            locus += 1

    if locus < table.nloci:
        logger.warning(
            f'{path}: boundaries given for {locus} of {table.nloci} loci'
        )


def load_boundary_table(
    paths: Sequence[FilePath],
    nloci: int,
    opener: Callable = partial(xopen, threads=0),
) -> BoundaryTable:
    """
    Load the boundary file of every haplotype into a single table.

    Parameters:
        paths (Sequence[FilePath]): One boundary file per haplotype, in
            haplotype order.
        nloci (int): The number of loci in the sequence files.
        opener (Callable): The callable used to open each file.

    Returns:
        BoundaryTable: A table of `nloci` rows and 3 columns per haplotype.
    """
    table = BoundaryTable(nloci, len(paths))
    for haplotype, path in enumerate(paths):
        logger.debug(f'Reading boundaries from {path}')
        read_boundary_file(table, haplotype, path, opener)

    return table
