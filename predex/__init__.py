__all__ = [
    'ARGS',
    'ARGV',
    'CONFIGURED',
    'PARSE',
    'PARSER',

    'D',
    'init',
]

import logging

from startup import startup as startup_


#
# PARSER ---> PARSE --+--> ARGS ---> CONFIGURED
#                     |
#             ARGV ---+
#
ARGS = 'args'
ARGV = 'argv'
CONFIGURED = 'configured'
PARSE = 'parse'
PARSER = 'parser'


D = {
    'GEN_DIR': 'buck-out/gen',
    'BIN_DIR': 'buck-out/bin',
    'DX': 'dx',
}


_LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def add_arguments(parser: PARSER) -> PARSE:
    group = parser.add_argument_group(__name__)
    group.add_argument(
        '-v', '--verbose', action='count', default=0,
        help='verbose output')
    group.add_argument(
        '--gen-dir', default=D['GEN_DIR'],
        help='set root of generated outputs (default: %(default)s)')
    group.add_argument(
        '--bin-dir', default=D['BIN_DIR'],
        help='set root of build metadata (default: %(default)s)')
    group.add_argument(
        '--dx', default=D['DX'],
        help='set dx command (default: %(default)s)')


def parse_argv(parser: PARSER, argv: ARGV, _: PARSE) -> ARGS:
    return parser.parse_args(argv[1:])


def configure(args: ARGS) -> CONFIGURED:
    if args.verbose == 0:
        level = logging.WARNING
    elif args.verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    D['GEN_DIR'] = args.gen_dir
    D['BIN_DIR'] = args.bin_dir
    D['DX'] = args.dx


def init(startup=startup_):
    startup(add_arguments)
    startup(parse_argv)
    startup(configure)
