"""
bmfont.formats.text - BMFont text descriptor

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import shlex
import logging

from ..base import loaders, savers
from ..magic import Sentinel
from ..builder import FontBuilder, FieldEvent
from ..settings import DEFAULT
from ..font import to_fields
from ..validate import check_font_for_write
from ..streams import read_all, write_all
from ..errors import ParseTagError, ParseValueError, InvalidCharsetEncodingError


# text format: https://www.angelcode.com/products/bmfont/doc/file_format.html
#
# > info face="Arial" size=32 bold=0 italic=0 charset="" unicode=1 stretchH=100 smooth=1 aa=1 padding=0,0,0,0 spacing=1,1
# > common lineHeight=32 base=26 scaleW=256 scaleH=256 pages=1 packed=0
# > page id=0 file="arial_0.png"
# > chars count=95
# > char id=32 x=254 y=0 width=0 height=1 xoffset=0 yoffset=31 xadvance=8 page=0 chnl=15

_TAGS = ('info', 'common', 'page', 'chars', 'char', 'kernings', 'kerning')


##############################################################################
# top-level calls

@loaders.register(
    name='text',
    magic=(Sentinel(b'info'), Sentinel(b'common')),
)
def load(data, settings=None):
    """Load font from BMFont text descriptor."""
    return from_bytes(data, settings)


@savers.register(linked=load)
def save(font, outstream):
    """Save font to BMFont text descriptor."""
    to_writer(font, outstream)


def from_str(text, settings=None):
    """Read font from text descriptor string."""
    builder = FontBuilder()
    builder.observe_all(_parse_text(text))
    return builder.build(settings or DEFAULT)


def from_bytes(data, settings=None):
    """Read font from utf-8 encoded text descriptor."""
    try:
        text = bytes(data).decode('utf-8-sig')
    except UnicodeDecodeError as e:
        raise ParseValueError(f'Text descriptor is not valid utf-8: {e}') from e
    return from_str(text, settings)


def from_reader(instream, settings=None):
    """Read font from binary or text stream holding a text descriptor."""
    return from_bytes(read_all(instream), settings)


def to_string(font):
    """Write font to text descriptor string."""
    check_font_for_write(font)
    return ''.join(_create_lines(font))


def to_bytes(font):
    """Write font to utf-8 encoded text descriptor."""
    return to_string(font).encode('utf-8')


def to_writer(font, outstream):
    """Write font to binary or text stream as text descriptor."""
    write_all(outstream, to_bytes(font))


##############################################################################
# reader

def _parse_text(text):
    """Generate field events from text descriptor."""
    # only LF and CRLF end a line; other line breaks may occur in quoted values
    for lineno, line in enumerate(text.split('\n'), 1):
        if line.endswith('\r'):
            line = line[:-1]
        if not line.strip(' \t'):
            continue
        tag, *items = _split_line(line, lineno)
        if tag not in _TAGS:
            logging.debug('Skipping unknown tag `%s` at line %d.', tag, lineno)
            continue
        yield FieldEvent(tag, _parse_text_dict(items, lineno), lineno)


def _split_line(line, lineno):
    """Split into tag and key=value items, keeping quoted values together."""
    lexer = shlex.shlex(line, posix=True)
    lexer.whitespace_split = True
    # quoted strings may hold anything but a double quote
    lexer.quotes = '"'
    lexer.escape = ''
    lexer.commenters = ''
    try:
        return list(lexer)
    except ValueError as e:
        raise ParseTagError(f'Malformed line: {e}.', lineno) from e


def _parse_text_dict(items, lineno):
    """Parse space separated key=value pairs."""
    textdict = {}
    for item in items:
        key, sep, value = item.partition('=')
        if not sep or not key:
            raise ParseTagError(f'Expected key=value, got `{item}`.', lineno)
        if key in textdict:
            raise ParseValueError(f'Duplicate key `{key}`.', key=key, line=lineno)
        textdict[key] = value
    return textdict


##############################################################################
# writer

def _create_lines(font):
    """Generate the lines of a text descriptor."""
    yield _create_textdict('info', to_fields('info', font.info))
    yield _create_textdict('common', to_fields('common', font.common))
    for page in font.pages:
        yield _create_textdict('page', to_fields('page', page))
    yield _create_textdict('chars', {'count': len(font.chars)})
    for char in font.chars:
        yield _create_textdict('char', to_fields('char', char))
    yield _create_textdict('kernings', {'count': len(font.kernings)})
    for kern in font.kernings:
        yield _create_textdict('kerning', to_fields('kerning', kern))


def _create_textdict(name, textdict):
    """Create a text-dictionary line for bmfontfile."""
    return '{} {}\n'.format(name, ' '.join(
        '{}={}'.format(_k, _to_str(f'{name} {_k}', _v))
        for _k, _v in textdict.items())
    )


def _to_str(path, value):
    """Convert value to str for bmfont file."""
    if isinstance(value, str):
        if '"' in value:
            raise InvalidCharsetEncodingError(
                path, value, 'double quotes are not allowed in text descriptors'
            )
        return '"{}"'.format(value)
    if isinstance(value, (list, tuple)):
        return ','.join(str(_item) for _item in value)
    return str(int(value))
