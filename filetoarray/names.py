MAX_NAME_LENGTH = 2048


def get_basename(path: str) -> str:
    """Returns the part of `path` after the last '/' or '\\'."""
    cut = max(path.rfind('/'), path.rfind('\\'))
    return path[cut + 1:]


def _upper(char: str) -> str:
    if char == '.':
        return '_'
    return char.upper() if char.isascii() else char


def get_varname_from(filename: str, length: int = MAX_NAME_LENGTH) -> str:
    """
    Derives the symbol used for include guards and array names.
    Letters are upper-cased, '.' becomes '_', anything else is kept as is.
    Names longer than `length` are truncated.
    """
    return ''.join(_upper(char) for char in get_basename(filename)[:length])


def to_lowercase(name: str) -> str:
    return ''.join(char.lower() if char.isascii() else char for char in name)
