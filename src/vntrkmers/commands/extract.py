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

import click
import logging
import pathlib

from vntrkmers.accumulate import LocusKmerAccumulator
from vntrkmers.boundaries import boundary_paths, load_boundary_table
from vntrkmers.cli import CustomCommand, CustomOption, ExclusiveOption
from vntrkmers.config import DEFAULT_NTR_SIZE, RunConfig
from vntrkmers.errors import ConfigError
from vntrkmers.fasta import count_loci
from vntrkmers.haplotypes import (
    SelectionMode,
    build_haplotypes,
    directive_from_options,
    resolve_selection,
)
from vntrkmers.kmerIO import KmersFileWriter, check_writable, output_path
from vntrkmers.logging import log_init

logger = logging.getLogger()

SELECTION_OPTIONS = (
    'all_haplotypes',
    'no_haplotypes',
    'exclude',
    'include',
    'fasta_files',
)


def selection_option(*param_decls, **kwargs):
    name = kwargs['name']
    return click.option(
        *param_decls,
        name,
        cls=ExclusiveOption,
        exclusive_with=[opt for opt in SELECTION_OPTIONS if opt != name],
        option_group='Haplotype selection',
        **{key: value for key, value in kwargs.items() if key != 'name'},
    )


@click.command(
    cls=CustomCommand,
    name='extract',
    short_help='Extract TR and NTR k-mers of VNTR loci',
    context_settings=dict(max_content_width=120),
)
@click.option(
    '-d', '--hap-dir',
    'hap_dir',
    cls=CustomOption,
    metavar='DIR',
    type=click.Path(file_okay=False, path_type=pathlib.Path),
    default='.',
    show_default=True,
    option_group='Input options',
    help='Read catalog haplotype files from DIR',
)
@click.option(
    '--masked/--no-masked',
    'masked',
    cls=CustomOption,
    default=True,
    show_default=True,
    option_group='Input options',
    help='Read *.combined-hap.fasta.masked.fix instead of *.combined-hap.fasta',
)
@selection_option(
    '-a', '--all',
    name='all_haplotypes',
    is_flag=True,
    default=False,
    help='Count k-mers of all catalog haplotypes',
)
@selection_option(
    '-n', '--none',
    name='no_haplotypes',
    is_flag=True,
    default=False,
    help='Build k-mers of all catalog haplotypes without counting any',
)
@selection_option(
    '-e', '--exclude',
    name='exclude',
    metavar='NAME',
    multiple=True,
    help='Count all catalog haplotypes except NAME (repeatable)',
)
@selection_option(
    '-i', '--include',
    name='include',
    metavar='NAME',
    multiple=True,
    help='Count only the catalog haplotype NAME (repeatable)',
)
@selection_option(
    '-f', '--fasta',
    name='fasta_files',
    metavar='FILE',
    multiple=True,
    type=click.Path(dir_okay=False, path_type=pathlib.Path),
    help='Use FILE instead of the catalog (repeatable)',
)
@click.option(
    '-N', '--num-counted',
    'num_counted',
    cls=CustomOption,
    metavar='INT',
    type=click.IntRange(min=0),
    default=None,
    show_default='all',
    option_group='Haplotype selection',
    help='Count the first INT --fasta files and only build the rest',
)
@click.option(
    '-c', '--boundary-suffix',
    'boundary_suffix',
    cls=CustomOption,
    metavar='SUFFIX',
    default=None,
    option_group='Boundary options',
    help='Read TR boundaries from <haplotype>.SUFFIX',
)
@click.option(
    '-b', '--boundary-file',
    'boundary_files',
    cls=CustomOption,
    metavar='FILE',
    multiple=True,
    type=click.Path(dir_okay=False, path_type=pathlib.Path),
    option_group='Boundary options',
    help='Read TR boundaries of the matching --fasta file from FILE (repeatable)',
)
@click.option(
    '-F', '--flank-size',
    'flank_size',
    cls=CustomOption,
    metavar='INT',
    type=click.IntRange(min=0),
    default=None,
    option_group='Boundary options',
    help='Use INT bp TR flanks on both sides when no boundaries are given',
)
@click.option(
    '-k', '--kmer-size',
    'kmer_size',
    cls=CustomOption,
    metavar='INT',
    type=click.IntRange(min=1),
    required=True,
    option_group='K-mer options',
    help='Extract k-mers of INT length',
)
@click.option(
    '-t', '--ntr-size',
    'ntr_size',
    cls=CustomOption,
    metavar='INT',
    type=click.IntRange(min=0),
    default=DEFAULT_NTR_SIZE,
    show_default=True,
    option_group='K-mer options',
    help='Length of each NTR region',
)
@click.option(
    '--canonical/--non-canonical',
    'canonical',
    cls=CustomOption,
    default=True,
    show_default=True,
    option_group='K-mer options',
    help='Count canonical k-mers of counted haplotypes',
)
@click.option(
    '-o', '--output',
    'output_prefix',
    cls=CustomOption,
    metavar='PREFIX',
    type=click.Path(path_type=pathlib.Path),
    required=True,
    option_group='Output options',
    help='Write <PREFIX>.tr.kmers, <PREFIX>.lntr.kmers and <PREFIX>.rntr.kmers',
)
@click.option(
    '-m', '--min-count',
    'min_count',
    cls=CustomOption,
    metavar='INT',
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    option_group='Output options',
    help='Omit k-mers counted fewer than INT times',
)
@log_init
@click.help_option(
    '-h',
    '--help',
)
def extract_command(
    # Input options:
    hap_dir,
    masked,

    # Haplotype selection:
    all_haplotypes,
    no_haplotypes,
    exclude,
    include,
    fasta_files,
    num_counted,

    # Boundary options:
    boundary_suffix,
    boundary_files,
    flank_size,

    # K-mer options:
    kmer_size,
    ntr_size,
    canonical,

    # Output options:
    output_prefix,
    min_count,
):
    """
    Extract TR and NTR k-mers of VNTR loci
    """
    config = RunConfig(
        kmer_size=kmer_size,
        ntr_size=ntr_size,
        flank_size=flank_size,
        canonical=canonical,
        threshold=min_count,
    )

    directive = directive_from_options(
        all_haplotypes=all_haplotypes,
        no_haplotypes=no_haplotypes,
        exclude=exclude,
        include=include,
        fasta_files=fasta_files,
        num_counted=num_counted,
    )
    names, counted = resolve_selection(directive)

    if boundary_suffix and boundary_files:
        raise ConfigError('Use either --boundary-suffix or --boundary-file')

    if boundary_files and directive.mode is not SelectionMode.FILES:
        raise ConfigError('--boundary-file can only be used with --fasta')

    if boundary_suffix:
        directory = '' if directive.mode is SelectionMode.FILES else hap_dir
        boundary_files = boundary_paths(names, boundary_suffix, directory)

    if not boundary_files:
        config.require_flank_size()

    haplotypes = build_haplotypes(
        names,
        counted,
        directive,
        directory=hap_dir,
        masked=masked,
        boundary_files=boundary_files,
    )

    regions = ['tr', 'lntr', 'rntr'] if boundary_files else ['tr']
    outputs = {region: output_path(output_prefix, region) for region in regions}
    for path in outputs.values():
        check_writable(path)

    logger.info('Counting total number of loci')
    nloci = count_loci(haplotypes[0].sequence_file)
    logger.info(f'Found {nloci} loci in {haplotypes[0].sequence_file}')

    table = None
    if boundary_files:
        table = load_boundary_table(
            [haplotype.boundary_file for haplotype in haplotypes],
            nloci,
        )

    accumulator = LocusKmerAccumulator(config, nloci, table)
    accumulator.run(haplotypes)

    logger.info('Writing outputs')
    for region, tables in accumulator.tables().items():
        with KmersFileWriter(outputs[region], config.threshold) as out:
            out.write_tables(tables)
        logger.info(f'Wrote {outputs[region]}')
