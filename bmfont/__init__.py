"""
bmfont - read and write BMFont descriptors in text, binary, XML and JSON formats

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import sys as _sys
assert _sys.version_info >= (3, 9)

import os as _os
import logging as _logging

from .constants import VERSION as __version__
from .font import Font, Info, Common, Page, Char, Kerning, Packing, Chnl
from .basetypes import Padding, Spacing
from .settings import (
    LoadSettings, DEFAULT, IGNORE_COUNTS, IGNORE_COUNTS_AND_DIMS, PERMISSIVE,
)
from .builder import FieldEvent, FontBuilder
from .errors import (
    FileFormatError, StreamError, TruncatedError, InvalidMagicError,
    UnsupportedVersionError, ParseTagError, ParseValueError,
    MalformedXMLError, MalformedJSONError, DuplicateBlockError,
    UnexpectedBlockError, MissingBlockError, CountMismatchError,
    InvalidReferenceError, UnsafeValueStringError, InvalidCharsetEncodingError,
)
from .base import loaders, savers, DEFAULT_FORMAT
from .streams import read_all
from .formats import text, binary, xml, json


def load(infile, format:str='', settings:LoadSettings=None):
    """
    Read a descriptor and return a Font.

    infile: bytes or str holding the descriptor, a readable stream, or a file path
    format: descriptor format, one of 'text', 'binary', 'xml', 'json' (default: detect)
    settings: LoadSettings controlling which checks are relaxed (default: strict)
    """
    if isinstance(infile, (bytes, bytearray, memoryview)):
        data = bytes(infile)
    elif isinstance(infile, str):
        data = infile.encode('utf-8')
    elif isinstance(infile, _os.PathLike):
        try:
            with open(infile, 'rb') as instream:
                data = read_all(instream)
        except OSError as e:
            raise StreamError(f"Could not open '{infile}': {e}") from e
    else:
        data = read_all(infile)
    loader = loaders.get_for(data, format=format)
    _logging.debug('Loading descriptor as `%s`.', loader.format)
    return loader(data, settings)


def save(font, outfile, format:str=DEFAULT_FORMAT, **kwargs):
    """
    Write a Font as descriptor.

    outfile: writable binary or text stream, or a file path
    format: descriptor format, one of 'text', 'binary', 'xml', 'json' (default: 'text')
    kwargs: options for the format's saver
    """
    saver = savers.get_for(format=format or DEFAULT_FORMAT)
    _logging.debug('Saving descriptor as `%s`.', saver.format)
    if isinstance(outfile, _os.PathLike):
        try:
            with open(outfile, 'wb') as outstream:
                saver(font, outstream, **kwargs)
        except OSError as e:
            raise StreamError(f"Could not write '{outfile}': {e}") from e
    else:
        saver(font, outfile, **kwargs)
