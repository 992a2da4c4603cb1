import argparse
from dataclasses import dataclass
from enum import Enum, Flag

from .errors import UsageError
from .transcode import DEFAULT_LINE_INDENT

DEFAULT_OUTPUT_FILENAME = './array.h'


class Mode(Enum):
    PROCESS = 'process'
    HELP = 'help'
    VERSION = 'version'


class EmissionKind(Flag):
    """Which half of the generated code a fragment carries."""
    DECLARATION = 1
    DEFINITION = 2
    BOTH = DECLARATION | DEFINITION


@dataclass(frozen=True)
class RunConfiguration:
    input_filename: str | None = None
    output_filename: str = DEFAULT_OUTPUT_FILENAME
    indent: int = DEFAULT_LINE_INDENT
    progmem: bool = False
    mode: Mode = Mode.PROCESS


def indent_width(value: str) -> int:
    try:
        width = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid indentation width '{value}'")
    if width < 0:
        raise argparse.ArgumentTypeError(f"indentation width must not be negative: '{value}'")
    return width


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='filetoarray', add_help=False, exit_on_error=False)
    parser.add_argument('input', nargs='?', default=None)
    parser.add_argument('-o', dest='output', default=DEFAULT_OUTPUT_FILENAME)
    parser.add_argument('-i', dest='indent', type=indent_width, default=DEFAULT_LINE_INDENT)
    parser.add_argument('-p', dest='progmem', action='store_true')
    parser.add_argument('-h', dest='mode', action='store_const', const=Mode.HELP, default=Mode.PROCESS)
    parser.add_argument('-v', dest='mode', action='store_const', const=Mode.VERSION)
    return parser


def parse_run_configuration(argv: list[str]) -> RunConfiguration:
    """
    Builds the run configuration from command-line arguments (without the
    program name). Raises UsageError for unknown options or bad values.
    Extra positional arguments after the input file are ignored.
    """
    try:
        args, extras = build_parser().parse_known_args(argv)
    except argparse.ArgumentError as err:
        raise UsageError(str(err)) from err

    for token in extras:
        if token.startswith('-') and token != '-':
            raise UsageError(f"unrecognized command-line option '{token}'")

    return RunConfiguration(
        input_filename=args.input,
        output_filename=args.output,
        indent=args.indent,
        progmem=args.progmem,
        mode=args.mode,
    )
