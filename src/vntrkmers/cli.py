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

from collections import defaultdict


class CustomCommand(click.Command):
    """
    A command that lists its options under the `option_group` of each one,
    with ungrouped options last.
    """
    col_max = 30

    def format_options(self, ctx, formatter):
        opts = defaultdict(list)
        other = []

        for param in self.get_params(ctx):
            rv = param.get_help_record(ctx)
            if rv is None:
                continue
            group = getattr(param, 'option_group', None)
            if group:
                opts[str(group)].append(rv)
            else:
                other.append(rv)

        if other:
            opts['Other options'].extend(other)

        for name, opts_group in opts.items():
            width = max(len(term) for term, _ in opts_group)
            col_spacing = self.col_max - min(width, self.col_max) + 3
            with formatter.section(name):
                formatter.write_dl(opts_group, self.col_max, col_spacing)


class CustomOption(click.Option):

    def __init__(self, *args, **kwargs):
        self.option_group = kwargs.pop('option_group', None)
        super(CustomOption, self).__init__(*args, **kwargs)


class ExclusiveOption(CustomOption):
    """
    An option that cannot be combined with the options named in
    `exclusive_with`.
    """
    def __init__(self, *args, **kwargs):
        self.exclusive_with = tuple(kwargs.pop('exclusive_with', ()))
        super(ExclusiveOption, self).__init__(*args, **kwargs)

    def handle_parse_result(self, ctx, opts, args):
        if opts.get(self.name):
            conflicts = [name for name in self.exclusive_with if opts.get(name)]
            if conflicts:
                params = {param.name: param for param in ctx.command.params}
                given = ', '.join(
                    params[name].get_error_hint(ctx) for name in conflicts
                )
                raise click.UsageError(
                    f'{self.get_error_hint(ctx)} cannot be used with {given}',
                    ctx=ctx,
                )

        return super(ExclusiveOption, self).handle_parse_result(ctx, opts, args)
