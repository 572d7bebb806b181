"""
bmfont.formats.xml - BMFont XML descriptor

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
import xml.etree.ElementTree as etree
from xml.sax.saxutils import escape

from ..base import loaders, savers
from ..magic import Sentinel
from ..builder import FontBuilder, FieldEvent
from ..settings import DEFAULT
from ..font import to_fields
from ..validate import check_font_for_write
from ..streams import read_all, write_all
from ..errors import MalformedXMLError


# xml format: https://www.angelcode.com/products/bmfont/doc/file_format.html
#
# > <?xml version="1.0"?>
# > <font>
# >   <info face="Arial" size="32" bold="0" italic="0" charset="" unicode="1" .../>
# >   <common lineHeight="32" base="26" scaleW="256" scaleH="256" pages="1" packed="0"/>
# >   <pages>
# >     <page id="0" file="arial_0.png"/>
# >   </pages>
# >   <chars count="95">
# >     <char id="32" x="254" y="0" width="0" height="1" .../>
# >   </chars>
# > </font>

# list elements and the record elements they hold
_LISTS = {
    'pages': 'page',
    'chars': 'char',
    'kernings': 'kerning',
}

# saxutils.escape handles &, < and >
_ENTITIES = {
    '"': '&quot;',
    "'": '&apos;',
    '\\': '&#92;',
}


##############################################################################
# top-level calls

@loaders.register(
    name='xml',
    magic=(Sentinel(b'<?xml'), Sentinel(b'<font')),
)
def load(data, settings=None):
    """Load font from BMFont XML descriptor."""
    return from_bytes(data, settings)


@savers.register(linked=load)
def save(font, outstream):
    """Save font to BMFont XML descriptor."""
    to_writer(font, outstream)


def from_str(text, settings=None):
    """Read font from XML descriptor string."""
    return _build(_parse_tree(text), settings)


def from_bytes(data, settings=None):
    """Read font from encoded XML descriptor; the encoding declaration is honoured."""
    return _build(_parse_tree(bytes(data)), settings)


def from_reader(instream, settings=None):
    """Read font from binary or text stream holding an XML descriptor."""
    return from_bytes(read_all(instream), settings)


def to_string(font):
    """Write font to XML descriptor string."""
    check_font_for_write(font)
    return ''.join(_create_lines(font))


def to_bytes(font):
    """Write font to utf-8 encoded XML descriptor."""
    return to_string(font).encode('utf-8')


def to_writer(font, outstream):
    """Write font to binary or text stream as XML descriptor."""
    write_all(outstream, to_bytes(font))


##############################################################################
# reader

def _build(root, settings):
    builder = FontBuilder()
    builder.observe_all(_parse_xml(root))
    return builder.build(settings or DEFAULT)


def _parse_tree(data):
    """Parse XML document and check the root element."""
    try:
        root = etree.fromstring(data)
    except etree.ParseError as e:
        raise MalformedXMLError(f'Not a well-formed XML document: {e}') from e
    if root.tag != 'font':
        raise MalformedXMLError(
            f'Not a valid BMFont XML file: root should be <font>, not <{root.tag}>.'
        )
    return root


def _parse_xml(root):
    """Generate field events from the children of the <font> element."""
    for elem in root:
        if elem.tag in ('info', 'common'):
            yield FieldEvent(elem.tag, dict(elem.attrib))
        elif elem.tag in _LISTS:
            if 'count' in elem.attrib:
                yield FieldEvent(elem.tag, {'count': elem.attrib['count']})
            for item in elem:
                if item.tag != _LISTS[elem.tag]:
                    raise MalformedXMLError(
                        f'Unexpected element <{item.tag}> in <{elem.tag}>.'
                    )
                yield FieldEvent(item.tag, dict(item.attrib))
        else:
            logging.debug('Skipping unknown element <%s>.', elem.tag)


##############################################################################
# writer

def _create_lines(font):
    """Generate the lines of an XML descriptor."""
    yield '<?xml version="1.0"?>\n'
    yield '<font>\n'
    yield _create_element('info', to_fields('info', font.info), 1)
    yield _create_element('common', to_fields('common', font.common), 1)
    yield '  <pages>\n'
    for page in font.pages:
        yield _create_element('page', to_fields('page', page), 2)
    yield '  </pages>\n'
    yield f'  <chars count="{len(font.chars)}">\n'
    for char in font.chars:
        yield _create_element('char', to_fields('char', char), 2)
    yield '  </chars>\n'
    if font.kernings:
        yield f'  <kernings count="{len(font.kernings)}">\n'
        for kern in font.kernings:
            yield _create_element('kerning', to_fields('kerning', kern), 2)
        yield '  </kernings>\n'
    yield '</font>\n'


def _create_element(name, attrs, depth):
    """Create an empty element with attributes."""
    return '{}<{} {}/>\n'.format('  ' * depth, name, ' '.join(
        '{}="{}"'.format(_k, _to_attr(_v))
        for _k, _v in attrs.items()
    ))


def _to_attr(value):
    """Convert value to escaped attribute string."""
    if isinstance(value, str):
        return escape(value, _ENTITIES)
    if isinstance(value, (list, tuple)):
        return ','.join(str(_item) for _item in value)
    return str(int(value))
