class FileToArrayError(Exception):
    """Base class for every fatal error raised by filetoarray."""


class UsageError(FileToArrayError):
    """Bad command line: missing input, unknown option, invalid value."""


class ConversionError(FileToArrayError):
    """An input or output file could not be opened or read."""
