import io
from contextlib import ExitStack
from datetime import UTC, datetime
from email.utils import format_datetime
from pathlib import Path
from typing import Any, BinaryIO, TextIO, TypeAlias

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .config import EmissionKind, RunConfiguration
from .errors import ConversionError, UsageError
from .names import get_basename, get_varname_from, to_lowercase
from .transcode import calculate_file_size, iter_content

ContextDict: TypeAlias = dict[str, Any]

# Setup Jinja2 environment
TEMPLATE_DIR = Path(__file__).parent / 'templates'
env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(['html', 'xml']),
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
)

PROGMEM_MODIFIER = ' PROGMEM'
HEADER_EXTENSIONS = ('.h', '.hpp')


def render_template(template_name: str, context: ContextDict, output: TextIO) -> None:
    env.get_template(template_name).stream(context).dump(output)


def http_date(now: datetime | None = None) -> str:
    """Formats `now` (default: current time) like 'Sat, 17 Oct 2026 09:05:00 GMT'."""
    return format_datetime((now or datetime.now(UTC)).astimezone(UTC), usegmt=True)


def storage_class_for(kind: EmissionKind) -> str:
    match kind:
        case EmissionKind.DECLARATION:
            return 'extern '
        case EmissionKind.DEFINITION:
            return ''
        case _:
            return 'static '


def emit_source(input_file: BinaryIO, output: TextIO, kind: EmissionKind,
                configuration: RunConfiguration, now: datetime | None = None) -> None:
    """
    Writes one generated fragment to `output`.

    A DECLARATION fragment carries the include guard, the size and
    last-modified defines and an `extern` prototype. A DEFINITION fragment
    includes the paired header and holds the initialized array. Both together
    give a self-contained `static` array. The input is only read when a
    definition is requested, starting from its current position.
    """
    declaration = EmissionKind.DECLARATION in kind
    definition = EmissionKind.DEFINITION in kind
    progmem = configuration.progmem and definition
    symbol = get_varname_from(configuration.input_filename)

    context = {
        'input_name': get_basename(configuration.input_filename),
        'size': calculate_file_size(input_file),
        'declaration': declaration,
        'definition': definition,
        'guard': get_varname_from(configuration.output_filename),
        'header_name': get_basename(configuration.output_filename),
        'symbol': symbol,
        'variable': to_lowercase(symbol),
        'last_modified': http_date(now) if declaration else '',
        'progmem': progmem,
        'modifier': PROGMEM_MODIFIER if progmem else '',
        'storage_class': storage_class_for(kind),
        'body': iter_content(input_file, configuration.indent) if definition else (),
    }
    render_template('array.c.jinja', context, output)


def is_header_file(filename: str) -> bool:
    dot = filename.rfind('.')
    return dot >= 0 and filename[dot:] in HEADER_EXTENSIONS


def convert_header_name_to_source_name(filename: str) -> str:
    """Maps 'foo.h' to 'foo.c' and 'foo.hpp' to 'foo.cpp'."""
    dot = filename.rfind('.')
    if filename[dot + 1:dot + 2] == 'h':
        return f'{filename[:dot + 1]}c{filename[dot + 2:]}'
    return filename


def open_output(stack: ExitStack, filename: str) -> TextIO:
    try:
        return stack.enter_context(open(filename, 'w', encoding='utf-8', errors='surrogateescape', newline=''))
    except OSError as err:
        raise ConversionError(f'cannot open output file {filename}: {err.strerror}') from err


def process_file(configuration: RunConfiguration, now: datetime | None = None) -> list[str]:
    """
    Converts the configured input file and returns the names of the files
    written.

    A header-style output ('.h', '.hpp') produces a declaration header plus a
    companion source file ('.c', '.cpp') holding the definition. Any other
    output name gets a single file with both. If the companion cannot be
    opened the header written before stays on disk.
    """
    if configuration.input_filename is None:
        raise UsageError('no input file')

    output_filename = configuration.output_filename
    with ExitStack() as stack:
        try:
            input_file = stack.enter_context(open(configuration.input_filename, 'rb'))
        except OSError as err:
            raise ConversionError(f'cannot find {configuration.input_filename}: {err.strerror}') from err

        output = open_output(stack, output_filename)
        if not is_header_file(output_filename):
            input_file.seek(0, io.SEEK_SET)
            emit_source(input_file, output, EmissionKind.BOTH, configuration, now)
            return [output_filename]

        emit_source(input_file, output, EmissionKind.DECLARATION, configuration, now)
        output.close()

        definition_filename = convert_header_name_to_source_name(output_filename)
        definition_output = open_output(stack, definition_filename)
        input_file.seek(0, io.SEEK_SET)
        emit_source(input_file, definition_output, EmissionKind.DEFINITION, configuration, now)
        return [output_filename, definition_filename]
