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
import os
import shlex
import sys
import time

from functools import wraps

from vntrkmers import __version__

logger = logging.getLogger()


class LogOption(click.Option):

    def __init__(self, *args, **kwargs):
        self.option_group = 'Logging options'
        super(LogOption, self).__init__(*args, **kwargs)


class LogState:

    def __init__(self):
        self.logfile = None
        self.level = logging.INFO


def logfile_option(func):

    def callback(ctx, param, value):
        log_state = ctx.ensure_object(LogState)
        log_state.logfile = value
        return value

    option = click.option(
        '-l',
        '--logfile',
        cls=LogOption,
        metavar='FILE',
        type=click.Path(dir_okay=False),
        default=None,
        show_default='stderr',
        expose_value=False,
        help='Write logging to FILE',
        callback=callback,
    )

    return option(func)


def level_option(*param_decls, level, help_text):

    def decorator(func):

        def callback(ctx, param, value):
            log_state = ctx.ensure_object(LogState)
            if value:
                log_state.level = level
            return value

        option = click.option(
            *param_decls,
            cls=LogOption,
            is_flag=True,
            default=False,
            expose_value=False,
            help=help_text,
            callback=callback,
        )

        return option(func)

    return decorator


verbose_option = level_option(
    '-v', '--verbose',
    level=logging.DEBUG,
    help_text='Sets the log level to DEBUG',
)

quiet_option = level_option(
    '-q', '--quiet',
    level=logging.WARNING,
    help_text='Sets the log level to WARNING',
)


def log_init(func):

    @wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()
        state = ctx.find_object(LogState)

        logging.basicConfig(
            filename=state.logfile,
            level=state.level,
            format='%(asctime)s | %(levelname)-8s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        )
        logger.setLevel(state.level)

        logger.info(f'Command: {shlex.join(sys.argv)}')
        logger.info(f'Run options: {str(kwargs)}')
        logger.info(f'PID: {os.getpid()}')
        logger.info(f'Version: {__version__}')

        start = time.perf_counter()
        result = func(*args, **kwargs)
        end = time.perf_counter()

        logger.info(time.strftime('Time taken: %H:%M:%S', time.gmtime(end-start)))

        return result

    wrapper = quiet_option(wrapper)
    wrapper = verbose_option(wrapper)
    wrapper = logfile_option(wrapper)

    return wrapper
