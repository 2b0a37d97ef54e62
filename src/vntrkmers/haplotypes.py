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

import enum
import logging
import os

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from vntrkmers.errors import SelectionError

FilePath = Union[str, bytes, os.PathLike]

HAPLOTYPE_CATALOG = (
    'CHM1',
    'CHM13',
    'AK1.h0',
    'AK1.h1',
    'HG00514.h0',
    'HG00514.h1',
    'HG00733.h0',
    'HG00733.h1',
    'NA19240.h0',
    'NA19240.h1',
    'NA24385.h0',
    'NA24385.h1',
)

MASKED_SUFFIX = 'combined-hap.fasta.masked.fix'
UNMASKED_SUFFIX = 'combined-hap.fasta'

logger = logging.getLogger()


class SelectionMode(enum.Enum):
    FILES = 'files'
    ALL = 'all'
    NONE = 'none'
    EXCLUDE = 'exclude'
    INCLUDE = 'include'


@dataclass(frozen=True)
class SelectionDirective:
    """
    A request for the haplotypes to read and the subset of them to count.

    For FILES, `values` are sequence file paths and the first `num_counted`
    are counted. For EXCLUDE and INCLUDE, `values` are catalog names.
    """
    mode: SelectionMode
    values: Tuple[str, ...] = ()
    num_counted: int = 0


@dataclass(frozen=True)
class Haplotype:
    name: str
    sequence_file: FilePath
    counted: bool
    boundary_file: Optional[FilePath] = None


def catalog_sequence_path(name: str, directory: FilePath = '.', masked: bool = True) -> str:
    suffix = MASKED_SUFFIX if masked else UNMASKED_SUFFIX
    return os.path.join(directory, f'{name}.{suffix}')


def check_individuals(names: Sequence[str]):
    """
    Reject a pair of names that are not the two phased haplotypes of one
    individual, and warn when three or more names are combined.
    """
    if len(names) == 2:
        first, second = names
        if first[:-1] != second[:-1] or {first[-1:], second[-1:]} != {'0', '1'}:
            raise SelectionError(
                f'{first} and {second} are not the two haplotypes '
                f'of the same individual'
            )
    elif len(names) > 2:
        logger.warning('Combining haplotypes of different individuals!')


def resolve_selection(
    directive: SelectionDirective,
    catalog: Sequence[str] = HAPLOTYPE_CATALOG,
) -> Tuple[List[str], List[bool]]:
    """
    Resolve a selection directive into haplotypes and their counted flags.

    Parameters:
        directive (SelectionDirective): The requested selection.
        catalog (Sequence[str]): The known haplotype names.

    Returns:
        Tuple[List[str], List[bool]]: The haplotypes to read, in order, and
            whether each one is counted (True) or only built (False).
    """
    mode = directive.mode

    if mode is SelectionMode.FILES:
        paths = list(directive.values)
        if not paths:
            raise SelectionError('No sequence files were given')
        if not 0 <= directive.num_counted <= len(paths):
            raise SelectionError(
                f'Cannot count {directive.num_counted} of {len(paths)} '
                f'sequence files'
            )
        counted = [i < directive.num_counted for i in range(len(paths))]
        return paths, counted

    haplotypes = list(catalog)

    if mode is SelectionMode.ALL:
        return haplotypes, [True] * len(haplotypes)

    if mode is SelectionMode.NONE:
        return haplotypes, [False] * len(haplotypes)

    names = list(directive.values)
    if not names:
        raise SelectionError(f'No haplotypes were given to {mode.value}')

    for name in names:
        if name not in haplotypes:
            raise SelectionError(f'Cannot find haplotype {name}')

    check_individuals(names)

    selected = set(names)
    if mode is SelectionMode.EXCLUDE:
        counted = [hap not in selected for hap in haplotypes]
    else:
        counted = [hap in selected for hap in haplotypes]

    return haplotypes, counted


def directive_from_options(
    all_haplotypes: bool = False,
    no_haplotypes: bool = False,
    exclude: Sequence[str] = (),
    include: Sequence[str] = (),
    fasta_files: Sequence[str] = (),
    num_counted: Optional[int] = None,
) -> SelectionDirective:
    """
    Build the single selection directive described by a set of options.

    Exactly one of the five selection modes must be requested.
    """
    if num_counted is not None and not fasta_files:
        raise SelectionError('The number of counted files requires sequence files')

    requested = []
    if fasta_files:
        requested.append(SelectionDirective(
            SelectionMode.FILES,
            tuple(os.fspath(path) for path in fasta_files),
            len(fasta_files) if num_counted is None else num_counted,
        ))
    if all_haplotypes:
        requested.append(SelectionDirective(SelectionMode.ALL))
    if no_haplotypes:
        requested.append(SelectionDirective(SelectionMode.NONE))
    if exclude:
        requested.append(SelectionDirective(SelectionMode.EXCLUDE, tuple(exclude)))
    if include:
        requested.append(SelectionDirective(SelectionMode.INCLUDE, tuple(include)))

    if not requested:
        raise SelectionError(
            'No haplotype selection given: use one of --fasta, --all, '
            '--none, --exclude or --include'
        )
    if len(requested) > 1:
        modes = ', '.join(d.mode.value for d in requested)
        raise SelectionError(f'Conflicting haplotype selections: {modes}')

    return requested[0]


def build_haplotypes(
    names: Sequence[str],
    counted: Sequence[bool],
    directive: SelectionDirective,
    directory: FilePath = '.',
    masked: bool = True,
    boundary_files: Sequence[Optional[FilePath]] = (),
) -> List[Haplotype]:
    """
    Attach sequence and boundary file paths to resolved haplotypes.
    """
    if boundary_files and len(boundary_files) != len(names):
        raise SelectionError(
            f'Expected {len(names)} boundary files but found {len(boundary_files)}'
        )

    haplotypes = []
    for i, (name, is_counted) in enumerate(zip(names, counted)):
        if directive.mode is SelectionMode.FILES:
            sequence_file = name
        else:
            sequence_file = catalog_sequence_path(name, directory, masked)

        boundary_file = boundary_files[i] if boundary_files else None
        haplotypes.append(Haplotype(name, sequence_file, is_counted, boundary_file))

    return haplotypes
