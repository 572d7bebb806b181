"""
bmfont.font - BMFont descriptor data model

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from enum import IntEnum, IntFlag
from dataclasses import dataclass, field

from .basetypes import Padding, Spacing, to_int, to_bool, to_str


# https://www.angelcode.com/products/bmfont/doc/file_format.html


class Packing(IntEnum):
    """What a texture channel holds when characters are packed."""
    GLYPH = 0
    OUTLINE = 1
    GLYPH_OUTLINE = 2
    ZERO = 3
    ONE = 4

    @classmethod
    def create(cls, value=0):
        return cls(to_int(value))


class Chnl(IntFlag):
    """Texture channel(s) where the character image is found."""
    NONE = 0
    BLUE = 1
    GREEN = 2
    RED = 4
    ALPHA = 8
    ALL = 15

    @classmethod
    def create(cls, value=15):
        value = to_int(value)
        if not 0 <= value <= 15:
            raise ValueError(f'Channel mask {value} out of range.')
        return cls(value)


@dataclass
class Info:
    """
    How the font was generated.

    face:          name of the true type font
    size:          size of the true type font; negative means matching cell height
    bold:          the font is bold
    italic:        the font is italic
    unicode:       the unicode charset is used
    smooth:        smoothing was turned on
    fixed_height:  fixed height was turned on (binary bit field only)
    charset:       name of the OEM charset used, empty when unicode
    stretch_h:     font height stretch in percentage; 100 means no stretch
    aa:            supersampling level; 1 means no supersampling
    padding:       padding for each character (up, right, down, left)
    spacing:       spacing for each character (horizontal, vertical)
    outline:       outline thickness for the characters
    """
    face: str = ''
    size: int = 0
    bold: bool = False
    italic: bool = False
    unicode: bool = False
    smooth: bool = False
    fixed_height: bool = False
    charset: str = ''
    stretch_h: int = 100
    aa: int = 1
    padding: Padding = Padding(0, 0, 0, 0)
    spacing: Spacing = Spacing(0, 0)
    outline: int = 0


@dataclass
class Common:
    """
    Information common to all characters.

    line_height:  distance in pixels between each line of text
    base:         pixels from the absolute top of the line to the base of the characters
    scale_w:      width of the texture
    scale_h:      height of the texture
    pages:        number of texture pages
    packed:       monochrome characters are packed into each of the texture channels
    *_chnl:       what each channel holds if packed
    """
    line_height: int = 0
    base: int = 0
    scale_w: int = 0
    scale_h: int = 0
    pages: int = 0
    packed: bool = False
    alpha_chnl: Packing = Packing.GLYPH
    red_chnl: Packing = Packing.GLYPH
    green_chnl: Packing = Packing.GLYPH
    blue_chnl: Packing = Packing.GLYPH


@dataclass
class Page:
    """Texture file name for a page."""
    id: int = 0
    file: str = ''


@dataclass
class Char:
    """Character image location and metrics."""
    id: int = 0
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    xoffset: int = 0
    yoffset: int = 0
    xadvance: int = 0
    page: int = 0
    chnl: Chnl = Chnl.ALL


@dataclass
class Kerning:
    """Adjustment to the advance between two characters."""
    first: int = 0
    second: int = 0
    amount: int = 0


@dataclass
class Font:
    """BMFont descriptor: everything in a .fnt file apart from the textures."""
    info: Info = field(default_factory=Info)
    common: Common = field(default_factory=Common)
    pages: list = field(default_factory=list)
    chars: list = field(default_factory=list)
    kernings: list = field(default_factory=list)

    def validate_references(self):
        """Ensure all page and character references resolve."""
        # avoid circular import
        from .validate import check_font_references
        check_font_references(self)


##############################################################################
# field layout shared by all descriptor formats
# BMFont key -> (attribute, converter, integer type)

FIELDS = {
    'info': {
        'face': ('face', to_str, None),
        'size': ('size', to_int, 'int16'),
        'bold': ('bold', to_bool, None),
        'italic': ('italic', to_bool, None),
        'charset': ('charset', to_str, None),
        'unicode': ('unicode', to_bool, None),
        'stretchH': ('stretch_h', to_int, 'uint16'),
        'smooth': ('smooth', to_bool, None),
        'aa': ('aa', to_int, 'uint8'),
        'padding': ('padding', Padding.create, 'uint8'),
        'spacing': ('spacing', Spacing.create, 'uint8'),
        'outline': ('outline', to_int, 'uint8'),
        'fixedHeight': ('fixed_height', to_bool, None),
    },
    'common': {
        'lineHeight': ('line_height', to_int, 'uint16'),
        'base': ('base', to_int, 'uint16'),
        'scaleW': ('scale_w', to_int, 'uint16'),
        'scaleH': ('scale_h', to_int, 'uint16'),
        'pages': ('pages', to_int, 'uint16'),
        'packed': ('packed', to_bool, None),
        'alphaChnl': ('alpha_chnl', Packing.create, None),
        'redChnl': ('red_chnl', Packing.create, None),
        'greenChnl': ('green_chnl', Packing.create, None),
        'blueChnl': ('blue_chnl', Packing.create, None),
    },
    'page': {
        'id': ('id', to_int, 'uint16'),
        'file': ('file', to_str, None),
    },
    'char': {
        'id': ('id', to_int, 'uint32'),
        'x': ('x', to_int, 'uint16'),
        'y': ('y', to_int, 'uint16'),
        'width': ('width', to_int, 'uint16'),
        'height': ('height', to_int, 'uint16'),
        'xoffset': ('xoffset', to_int, 'int16'),
        'yoffset': ('yoffset', to_int, 'int16'),
        'xadvance': ('xadvance', to_int, 'int16'),
        'page': ('page', to_int, 'uint8'),
        'chnl': ('chnl', Chnl.create, None),
    },
    'kerning': {
        'first': ('first', to_int, 'uint32'),
        'second': ('second', to_int, 'uint32'),
        'amount': ('amount', to_int, 'int16'),
    },
    # count lines in text and xml
    'chars': {
        'count': ('count', to_int, 'uint32'),
    },
    'kernings': {
        'count': ('count', to_int, 'uint32'),
    },
}

RECORDS = {
    'info': Info,
    'common': Common,
    'page': Page,
    'char': Char,
    'kerning': Kerning,
}

# fields whose out-of-range values some generators emit
DIMENSION_FIELDS = {
    'char': ('x', 'y', 'width', 'height'),
    'common': ('scaleW', 'scaleH'),
}


def to_fields(tag, record):
    """Convert a record to a dict of BMFont keys and int, bool, str or tuple values."""
    fields = {}
    for key, (attr, _, _) in FIELDS[tag].items():
        value = getattr(record, attr)
        if key == 'fixedHeight' and not value:
            # not part of the documented text format, only write when set
            continue
        if isinstance(value, (IntEnum, IntFlag)):
            value = int(value)
        elif isinstance(value, tuple):
            value = tuple(value)
        fields[key] = value
    return fields
