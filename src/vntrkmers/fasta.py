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

import os

from contextlib import contextmanager
from functools import partial
from typing import BinaryIO, Callable, Iterator, Union

import dnaio

from xopen import xopen

from vntrkmers.errors import SequenceFileError

FilePath = Union[str, bytes, os.PathLike]
FileOpener = Callable[[str, str], BinaryIO]


@contextmanager
def open_loci(
    path: FilePath,
    opener: FileOpener = partial(xopen, threads=0),
) -> Iterator[Iterator[str]]:
    """
    Open a FASTA file of locus sequences and yield an iterator over the
    sequence of each record, in file order.

    A record without sequence lines yields an empty string, so the position
    of every sequence in the iterator is its locus index.
    """
    try:
        fileobj = opener(path, 'rb')
    except OSError as e:
        raise SequenceFileError(f'Cannot open sequence file {path}: {e}') from e

    with fileobj, dnaio.open(fileobj, fileformat='fasta') as reader:
        yield (record.sequence for record in reader)


def count_loci(
    path: FilePath,
    opener: FileOpener = partial(xopen, threads=0),
) -> int:
    """
    Return the number of records in a FASTA file
    """
    with open_loci(path, opener) as sequences:
        return sum(1 for _ in sequences)
