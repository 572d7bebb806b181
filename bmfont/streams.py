"""
bmfont.streams - reading from sources and writing to sinks

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import io
import logging

from .errors import StreamError


def is_binary(stream):
    """Check if stream is binary."""
    if isinstance(stream, io.TextIOBase):
        return False
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        return True
    if stream.readable():
        # an empty read returns bytes or str
        return isinstance(stream.read(0), bytes)
    try:
        # text streams refuse bytes
        stream.write(b'')
    except TypeError:
        return False
    return True


def get_name(stream):
    """Stream name for messages; empty for in-memory streams."""
    return getattr(stream, 'name', '')


def read_all(stream):
    """Read the whole of a binary or text stream; text is returned utf-8 encoded."""
    try:
        data = stream.read()
    except OSError as e:
        raise StreamError(f"Could not read from '{get_name(stream)}': {e}") from e
    if isinstance(data, str):
        data = data.encode('utf-8')
    logging.debug("Read %d bytes from '%s'.", len(data), get_name(stream))
    return data


def write_all(stream, data):
    """Write bytes to a binary stream, or utf-8 decoded text to a text stream."""
    try:
        if is_binary(stream):
            stream.write(data)
        else:
            stream.write(data.decode('utf-8'))
    except UnicodeDecodeError as e:
        raise StreamError(
            f"Can't write binary data to text stream '{get_name(stream)}'."
        ) from e
    except OSError as e:
        raise StreamError(f"Could not write to '{get_name(stream)}': {e}") from e
    logging.debug("Wrote %d bytes to '%s'.", len(data), get_name(stream))
