"""
bmfont.errors - error taxonomy

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""


class FileFormatError(Exception):
    """Incorrect file format."""


def _at_line(line):
    """Line prefix for error messages."""
    if line is None:
        return ''
    return f'line {line}: '


class StreamError(FileFormatError):
    """Underlying read or write failed."""


class TruncatedError(FileFormatError):
    """Binary buffer shorter than a required structure."""

    def __init__(self, message, needed=None, available=None):
        super().__init__(message)
        self.needed = needed
        self.available = available


class InvalidMagicError(FileFormatError):
    """Binary signature not recognised."""

    def __init__(self, magic):
        super().__init__(f'Not a BMFont binary file: signature {magic!r}.')
        self.magic = magic


class UnsupportedVersionError(FileFormatError):
    """Binary version not supported."""

    def __init__(self, version):
        super().__init__(f'Unsupported BMFont binary version {version}.')
        self.version = version


class ParseTagError(FileFormatError):
    """Malformed line in text descriptor."""

    def __init__(self, message, line=None):
        super().__init__(_at_line(line) + message)
        self.line = line


class ParseValueError(FileFormatError, ValueError):
    """Field value could not be parsed or is out of range."""

    def __init__(self, message, key='', value=None, line=None):
        super().__init__(_at_line(line) + message)
        self.key = key
        self.value = value
        self.line = line


class MalformedXMLError(FileFormatError):
    """XML descriptor structurally invalid."""


class MalformedJSONError(FileFormatError):
    """JSON descriptor structurally invalid."""


class DuplicateBlockError(FileFormatError):
    """Singleton block or count given more than once."""

    def __init__(self, tag, line=None):
        super().__init__(_at_line(line) + f'Duplicate `{tag}` block.')
        self.tag = tag
        self.line = line


class UnexpectedBlockError(FileFormatError):
    """Block not recognised or out of order."""

    def __init__(self, message, block_id=None):
        super().__init__(message)
        self.block_id = block_id


class MissingBlockError(FileFormatError):
    """Required block not found."""

    def __init__(self, tag):
        super().__init__(f'No `{tag}` block found.')
        self.tag = tag


class CountMismatchError(FileFormatError):
    """Declared count differs from number of records."""

    def __init__(self, tag, declared, actual):
        super().__init__(
            f'Invalid `{tag}` count: declared {declared}, found {actual}.'
        )
        self.tag = tag
        self.declared = declared
        self.actual = actual


class InvalidReferenceError(FileFormatError):
    """Reference to an undefined page or character."""

    def __init__(self, message, id=None):
        super().__init__(message)
        self.id = id


class UnsafeValueStringError(FileFormatError, ValueError):
    """String value holds a control character."""

    def __init__(self, path, value, code):
        super().__init__(
            f'Unsafe value string in {path}: {value!r} '
            f'holds control character 0x{code:02x}.'
        )
        self.path = path
        self.value = value
        self.code = code


class InvalidCharsetEncodingError(FileFormatError, ValueError):
    """Value cannot be represented in the target format."""

    def __init__(self, path, value, reason=''):
        message = f'Cannot encode {path} value {value!r}'
        if reason:
            message += f': {reason}'
        super().__init__(message + '.')
        self.path = path
        self.value = value
