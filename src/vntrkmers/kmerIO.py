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

from collections import Counter
from dataclasses import dataclass, field
from functools import partial
from typing import IO, Iterable, Iterator, List, Mapping, TextIO, Tuple, Union

from xopen import xopen

from vntrkmers.errors import KmersFileError

FilePath = Union[str, bytes, os.PathLike]


@dataclass
class LocusKmers:
    """
    A class representing a .kmers file record: the k-mer counts of a locus.
    """
    locus: int
    counts: Counter = field(default_factory=Counter)


class KmersRecordSerializer:

    @staticmethod
    def serialize(record: LocusKmers, threshold: int = 0) -> Iterator[str]:
        """
        Serialize a LocusKmers record.

        Parameters:
            record (LocusKmers): The record to serialize.
            threshold (int): Omit k-mers counted fewer than `threshold` times.

        Returns:
            Iterator[str]: The lines of the record.

        Notes:
            The first line is the locus index preceded by '>'. Each following
            line is a k-mer and its count separated by a tab. K-mers are
            written in sorted order.
        """
        yield f'>{record.locus}\n'
        for kmer in sorted(record.counts):
            count = record.counts[kmer]
            if count >= threshold:
                yield f'{kmer}\t{count}\n'

    @staticmethod
    def deserialize_count(line: str) -> Tuple[str, int]:
        try:
            kmer, count = line.split()
            return kmer, int(count)
        except ValueError as e:
            raise KmersFileError(f'Invalid k-mer line: {line.rstrip()!r}') from e


class KmersFileWriter:
    """
    Class for writing .kmers files
    """
    def __init__(
        self,
        file: Union[FilePath, TextIO],
        threshold: int = 0,
        opener=partial(xopen, threads=0),
    ):
        self.file = file
        self.threshold = threshold
        self.opener = opener
        self.fileobj = None
        self.close_file = False

    def __enter__(self):
        if isinstance(self.file, (str, bytes, os.PathLike)):
            try:
                self.fileobj = self.opener(self.file, 'wt')
            except OSError as e:
                raise KmersFileError(f'Cannot write to {self.file}: {e}') from e
            self.close_file = True
        else:
            self.fileobj = self.file

        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        if self.close_file and self.fileobj is not None:
            self.fileobj.close()
            self.fileobj = None

    def write_record(self, record: LocusKmers):
        lines = KmersRecordSerializer.serialize(record, self.threshold)

        self.fileobj.writelines(lines)

    def write_records(self, records: Iterable[LocusKmers]):
        for record in records:
            self.write_record(record)

    def write_tables(self, tables: Iterable[Mapping[str, int]]):
        """
        Write one record per locus, numbering loci from zero.
        """
        self.write_records(
            LocusKmers(locus, counts) for locus, counts in enumerate(tables)
        )


class KmersFileReader:
    """
    Class for reading .kmers files
    """
    def __init__(
        self,
        file: Union[FilePath, IO[str]],
        opener=partial(xopen, threads=0),
    ):
        if isinstance(file, (str, bytes, os.PathLike)):
            try:
                self.fileobj = opener(file, 'rt')
            except OSError as e:
                raise KmersFileError(f'Cannot open {file}: {e}') from e
            self.close_file = True
        else:
            self.fileobj = file
            self.close_file = False

    def __iter__(self) -> Iterator[LocusKmers]:
        record = None
        for line in self.fileobj:
            if not line.strip():
                continue

            if line.startswith('>'):
                if record is not None:
                    yield record
                try:
                    locus = int(line[1:])
                except ValueError as e:
                    raise KmersFileError(f'Invalid locus line: {line.rstrip()!r}') from e
                record = LocusKmers(locus)
                continue

            if record is None:
                raise KmersFileError(f'Expected a locus line but found {line.rstrip()!r}')

            kmer, count = KmersRecordSerializer.deserialize_count(line)
            record.counts[kmer] = count

        if record is not None:
            yield record

    def read_tables(self) -> List[Counter]:
        """
        Return the k-mer counts of every locus, indexed by locus.
        """
        tables = []
        for record in self:
            while len(tables) <= record.locus:
                tables.append(Counter())
            tables[record.locus] = record.counts
        return tables

    def close(self):
        if self.close_file and self.fileobj is not None:
            self.fileobj.close()
            self.fileobj = None

    def __enter__(self):
        if self.fileobj is None:
            raise ValueError('I/O operation on closed file')
        return self

    def __exit__(self, *args):
        self.close()


def output_path(prefix: FilePath, region: str) -> str:
    return f'{os.fsdecode(prefix)}.{region}.kmers'


def check_writable(path: FilePath):
    """
    Raise KmersFileError unless `path` can be created or overwritten.

    The file itself is left untouched.
    """
    path = os.fsdecode(path)
    if os.path.exists(path):
        if os.path.isdir(path) or not os.access(path, os.W_OK):
            raise KmersFileError(f'Cannot write to {path}')
        return

    directory = os.path.dirname(path) or os.curdir
    if not os.path.isdir(directory) or not os.access(directory, os.W_OK | os.X_OK):
        raise KmersFileError(f'Cannot write to {path}: no writable directory {directory}')
