import os
import sys

from . import __version__
from .codegen import process_file
from .config import Mode, parse_run_configuration
from .errors import FileToArrayError, UsageError

USAGE = 'Usage: filetoarray [options] file...\n'
HELP = (
    USAGE
    + 'Options:\n'
    '  -h           Display this information.\n'
    '  -i <width>   Set indentation width.\n'
    '  -o <file>    Place the output into <file>. \n'
    '  -p           Use PROGMEM modifier.\n'
    '  -v           Display version information.\n'
)
VERSION_INFO = f'filetoarray version {__version__}\n'


def report_error(program_name: str, message: str) -> None:
    print(f'{program_name}: {message}', file=sys.stderr)


def main(argv: list[str] | None = None, program_name: str | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if program_name is None:
        program_name = os.path.basename(sys.argv[0]) or 'filetoarray'

    try:
        configuration = parse_run_configuration(argv)
        match configuration.mode:
            case Mode.HELP:
                sys.stdout.write(HELP)
            case Mode.VERSION:
                sys.stdout.write(VERSION_INFO)
            case Mode.PROCESS:
                process_file(configuration)
    except UsageError as err:
        report_error(program_name, f'error: {err}')
        sys.stderr.write(USAGE)
        return 1
    except FileToArrayError as err:
        report_error(program_name, str(err))
        return 1
    except OSError as err:
        report_error(program_name, f'{err.filename or "i/o error"}: {err.strerror or err}')
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
