"""
bmfont.formats.binary - BMFont binary descriptor

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from ..base import loaders, savers
from ..builder import FontBuilder, FieldEvent
from ..settings import DEFAULT
from ..struct import little_endian as le
from ..font import to_fields
from ..validate import check_font_for_write, check_page_list
from ..streams import read_all, write_all
from ..errors import (
    InvalidMagicError, UnsupportedVersionError, TruncatedError,
    UnexpectedBlockError, DuplicateBlockError, ParseValueError,
    InvalidCharsetEncodingError,
)


# binary format: https://www.angelcode.com/products/bmfont/doc/file_format.html

_BMF_MAGIC = b'BMF'
_VERSION = 3


##############################################################################
# top-level calls

@loaders.register(name='binary', magic=(_BMF_MAGIC,))
def load(data, settings=None):
    """Load font from BMFont binary descriptor."""
    return from_bytes(data, settings)


@savers.register(linked=load)
def save(font, outstream):
    """Save font to BMFont binary descriptor."""
    to_writer(font, outstream)


def from_bytes(data, settings=None):
    """Read font from binary descriptor."""
    data = bytes(data)
    head = _HEAD.from_bytes(data)
    if head.magic != _BMF_MAGIC:
        raise InvalidMagicError(head.magic)
    if head.version != _VERSION:
        raise UnsupportedVersionError(head.version)
    builder = FontBuilder()
    builder.observe_all(_parse_blocks(data, _HEAD.size))
    return builder.build(settings or DEFAULT)


def from_reader(instream, settings=None):
    """Read font from binary stream."""
    return from_bytes(read_all(instream), settings)


def to_bytes(font):
    """Write font to binary descriptor."""
    check_font_for_write(font)
    check_page_list(font.pages)
    blocks = [
        (_BLK_INFO, _convert_info(font.info)),
        (_BLK_COMMON, _convert_common(font.common)),
        (_BLK_PAGES, _convert_pages(font.pages)),
        (_BLK_CHARS, _CHAR.pack_many(to_fields('char', _c) for _c in font.chars)),
    ]
    # kernings block is optional
    if font.kernings:
        blocks.append((
            _BLK_KERNINGS,
            _KERNING.pack_many(to_fields('kerning', _k) for _k in font.kernings)
        ))
    return bytes(_HEAD(magic=_BMF_MAGIC, version=_VERSION)) + b''.join(
        bytes(_BLKHEAD(typeId=_id, blkSize=len(_payload))) + _payload
        for _id, _payload in blocks
    )


def to_writer(font, outstream):
    """Write font to binary stream."""
    write_all(outstream, to_bytes(font))


##############################################################################
# BMFont binary layout
# see http://www.angelcode.com/products/bmfont/doc/file_format.html

# file and block headers for binary file

_HEAD = le.Struct(
    magic='3s',
    version='uint8',
)

_BLKHEAD = le.Struct(
    typeId='uint8',
    blkSize='uint32',
)

# type ids, in the order the blocks must appear
_BLK_INFO = 1
_BLK_COMMON = 2
_BLK_PAGES = 3
_BLK_CHARS = 4
_BLK_KERNINGS = 5

_BLOCK_NAMES = {
    _BLK_INFO: 'info',
    _BLK_COMMON: 'common',
    _BLK_PAGES: 'pages',
    _BLK_CHARS: 'chars',
    _BLK_KERNINGS: 'kernings',
}


# info block: fixed header followed by null-terminated font name
_INFO = le.Struct(
    fontSize='int16',
    bitField='uint8',
    charSet='uint8',
    stretchH='uint16',
    aa='uint8',
    paddingUp='uint8',
    paddingRight='uint8',
    paddingDown='uint8',
    paddingLeft='uint8',
    spacingHoriz='uint8',
    spacingVert='uint8',
    outline='uint8',
)

# info bitfield, numbered from the most significant bit
_INFO_SMOOTH = 1 << 7
_INFO_UNICODE = 1 << 6
_INFO_ITALIC = 1 << 5
_INFO_BOLD = 1 << 4
_INFO_FIXED_HEIGHT = 1 << 3

_INFO_FLAGS = {
    'smooth': _INFO_SMOOTH,
    'unicode': _INFO_UNICODE,
    'italic': _INFO_ITALIC,
    'bold': _INFO_BOLD,
    'fixedHeight': _INFO_FIXED_HEIGHT,
}

# BMFont charset constants seem to be undocumented, but a list is here:
# https://github.com/vladimirgamalyan/fontbm/blob/master/src/FontInfo.cpp
# looks like these are equal to the Windows OEM ones
_CHARSET_NUM_MAP = {
    'ANSI': 0x00,
    'DEFAULT': 0x01,
    'SYMBOL':  0x02,
    'MAC': 0x4d,
    'SHIFTJIS': 0x80,
    'HANGUL': 0x81,
    'JOHAB': 0x82,
    'GB2312': 0x86,
    'CHINESEBIG5': 0x88,
    'GREEK': 0xa1,
    'TURKISH': 0xa2,
    'VIETNAMESE': 0xa3,
    'HEBREW': 0xb1,
    'ARABIC': 0xb2,
    'BALTIC': 0xba,
    'RUSSIAN': 0xcc,
    'THAI': 0xde,
    'EASTEUROPE': 0xee,
    'OEM': 0xff,
}
_CHARSET_NUM_REVERSE_MAP = {_v: _k for _k, _v in _CHARSET_NUM_MAP.items()}


# common block
_COMMON = le.Struct(
    lineHeight='uint16',
    base='uint16',
    scaleW='uint16',
    scaleH='uint16',
    pages='uint16',
    bitField='uint8',
    alphaChnl='uint8',
    redChnl='uint8',
    greenChnl='uint8',
    blueChnl='uint8',
)

# common bitfield
_COMMON_PACKED = 1 << 0


# pages block: null-terminated page names, one for each page


# chars block: one struct for each char
_CHAR = le.Struct(
    id='uint32',
    x='uint16',
    y='uint16',
    width='uint16',
    height='uint16',
    xoffset='int16',
    yoffset='int16',
    xadvance='int16',
    page='uint8',
    chnl='uint8',
)


# kernings block: one struct for each kerning pair
_KERNING = le.Struct(
    first='uint32',
    second='uint32',
    amount='int16',
)


##############################################################################
# reader

def _parse_blocks(data, offset):
    """Generate field events from the blocks of a binary descriptor."""
    last_id = 0
    while offset < len(data):
        blkhead = _BLKHEAD.from_bytes(data, offset)
        offset += _BLKHEAD.size
        block_id = blkhead.typeId
        if block_id not in _BLOCK_PARSERS:
            raise UnexpectedBlockError(f'Unknown block id {block_id}.', block_id)
        name = _BLOCK_NAMES[block_id]
        if block_id == last_id:
            raise DuplicateBlockError(name)
        if block_id < last_id:
            raise UnexpectedBlockError(
                f'Block `{name}` follows `{_BLOCK_NAMES[last_id]}` block.', block_id
            )
        last_id = block_id
        end = offset + blkhead.blkSize
        if end > len(data):
            raise TruncatedError(
                f'Block `{name}` needs {blkhead.blkSize} bytes, '
                f'{len(data) - offset} available.',
                needed=blkhead.blkSize, available=len(data) - offset,
            )
        logging.debug('Found `%s` block of %d bytes.', name, blkhead.blkSize)
        yield from _BLOCK_PARSERS[block_id](data[offset:end])
        offset = end


def _parse_info(payload):
    """Parse info block."""
    bininfo = _INFO.from_bytes(payload)
    name = payload[_INFO.size:]
    if b'\0' not in name:
        raise TruncatedError('Font name in `info` block is not null-terminated.')
    name, _, rest = name.partition(b'\0')
    if rest:
        logging.debug('Ignoring %d bytes after font name.', len(rest))
    unicode = bool(bininfo.bitField & _INFO_UNICODE)
    info = {
        'face': _decode(name, 'info face'),
        'size': bininfo.fontSize,
        'charset': _charset_name(bininfo.charSet, unicode),
        'stretchH': bininfo.stretchH,
        'aa': bininfo.aa,
        'padding': (
            bininfo.paddingUp, bininfo.paddingRight,
            bininfo.paddingDown, bininfo.paddingLeft,
        ),
        'spacing': (bininfo.spacingHoriz, bininfo.spacingVert),
        'outline': bininfo.outline,
    }
    info.update({
        _key: bool(bininfo.bitField & _flag)
        for _key, _flag in _INFO_FLAGS.items()
    })
    yield FieldEvent('info', info)


def _parse_common(payload):
    """Parse common block."""
    common = vars(_COMMON.from_bytes(payload))
    common['packed'] = bool(common.pop('bitField') & _COMMON_PACKED)
    yield FieldEvent('common', common)


def _parse_pages(payload):
    """Parse pages block."""
    if not payload:
        return
    if not payload.endswith(b'\0'):
        raise TruncatedError('Page name in `pages` block is not null-terminated.')
    for page_id, name in enumerate(payload[:-1].split(b'\0')):
        yield FieldEvent('page', {'id': page_id, 'file': _decode(name, 'page file')})


def _parse_records(tag, struct):
    """Create parser for block consisting of fixed-size records."""

    def _parse_block(payload):
        count, trailing = divmod(len(payload), struct.size)
        if trailing:
            raise TruncatedError(
                f'Block `{tag}s` of {len(payload)} bytes is not '
                f'a whole number of {struct.size}-byte records.',
                needed=(count+1) * struct.size, available=len(payload),
            )
        for record in struct.unpack_many(payload, count):
            yield FieldEvent(tag, vars(record))

    return _parse_block


_BLOCK_PARSERS = {
    _BLK_INFO: _parse_info,
    _BLK_COMMON: _parse_common,
    _BLK_PAGES: _parse_pages,
    _BLK_CHARS: _parse_records('char', _CHAR),
    _BLK_KERNINGS: _parse_records('kerning', _KERNING),
}


def _decode(name, path):
    """Decode a utf-8 string from a binary block."""
    try:
        return name.decode('utf-8')
    except UnicodeDecodeError as e:
        raise ParseValueError(f'Invalid utf-8 in {path}: {e}', key=path) from e


def _charset_name(charset, unicode):
    """Convert charset byte to name."""
    if unicode and not charset:
        return ''
    return _CHARSET_NUM_REVERSE_MAP.get(charset, str(charset))


##############################################################################
# writer

def _charset_num(charset, unicode):
    """Convert charset name to byte."""
    if unicode:
        if charset:
            raise InvalidCharsetEncodingError(
                'info charset', charset, 'must be empty for unicode fonts'
            )
        return 0
    if charset in _CHARSET_NUM_MAP:
        return _CHARSET_NUM_MAP[charset]
    if not charset:
        raise InvalidCharsetEncodingError(
            'info charset', charset, 'must be given for non-unicode fonts'
        )
    # only numbers that read back unchanged: no sign, leading zero or listed value
    if charset.isascii() and charset.isdigit() and str(int(charset)) == charset:
        number = int(charset)
        if number in _CHARSET_NUM_REVERSE_MAP:
            raise InvalidCharsetEncodingError(
                'info charset', charset,
                f'use the name `{_CHARSET_NUM_REVERSE_MAP[number]}` instead'
            )
        if number < 256:
            return number
    raise InvalidCharsetEncodingError(
        'info charset', charset, 'not a known charset name or byte value'
    )


def _convert_info(info):
    """Convert info record to binary block."""
    fields = to_fields('info', info)
    bitfield = 0
    for key, flag in _INFO_FLAGS.items():
        if fields.get(key, False):
            bitfield |= flag
    bininfo = _INFO(
        fontSize=info.size,
        bitField=bitfield,
        charSet=_charset_num(info.charset, info.unicode),
        stretchH=info.stretch_h,
        aa=info.aa,
        paddingUp=info.padding[0],
        paddingRight=info.padding[1],
        paddingDown=info.padding[2],
        paddingLeft=info.padding[3],
        spacingHoriz=info.spacing[0],
        spacingVert=info.spacing[1],
        outline=info.outline,
    )
    return bytes(bininfo) + info.face.encode('utf-8') + b'\0'


def _convert_common(common):
    """Convert common record to binary block."""
    fields = to_fields('common', common)
    fields['bitField'] = _COMMON_PACKED if fields.pop('packed') else 0
    return bytes(_COMMON(**fields))


def _convert_pages(pages):
    """Convert pages to binary block, in page id order."""
    return b''.join(
        _page.file.encode('utf-8') + b'\0'
        for _page in sorted(pages, key=lambda _p: _p.id)
    )
