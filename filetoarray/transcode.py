import io
from collections.abc import Iterator
from typing import BinaryIO

BYTES_PER_LINE = 16
DEFAULT_LINE_INDENT = 4
DEFAULT_ELEMENT_INDENT = 1
DEFAULT_IO_BUFFER_SIZE = 8192


def calculate_file_size(stream: BinaryIO) -> int:
    """Measures the stream without moving its current position."""
    current_position = stream.tell()
    size = stream.seek(0, io.SEEK_END)
    stream.seek(current_position, io.SEEK_SET)
    return size


def iter_content(stream: BinaryIO, indent: int = DEFAULT_LINE_INDENT) -> Iterator[str]:
    """
    Yields the array initializer text for every byte left in `stream`.

    Bytes are wrapped 16 per line; the first byte of a line gets `indent`
    spaces, the others a single space after the comma. Nothing follows the
    last byte.
    """
    total_bytes = 0
    while chunk := stream.read(DEFAULT_IO_BUFFER_SIZE):
        for byte in chunk:
            new_line = total_bytes % BYTES_PER_LINE == 0
            separator = ',' if total_bytes else ''
            line_feed = '\n' if new_line and total_bytes else ''
            padding = ' ' * (indent if new_line else DEFAULT_ELEMENT_INDENT)
            yield f'{separator}{line_feed}{padding}0x{byte:02X}'
            total_bytes += 1
