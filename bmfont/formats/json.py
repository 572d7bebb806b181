"""
bmfont.formats.json - BMFont JSON descriptor

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import json
import logging

from ..base import loaders, savers
from ..magic import Sentinel
from ..builder import FontBuilder, FieldEvent
from ..settings import DEFAULT
from ..font import to_fields
from ..validate import check_font_for_write, check_page_list
from ..streams import read_all, write_all
from ..errors import MalformedJSONError, ParseValueError


# json format: https://github.com/Jam3/load-bmfont/blob/master/json-spec.md
# pages is a list of file names; the index is the page id


##############################################################################
# top-level calls

@loaders.register(name='json', magic=(Sentinel(b'{'),))
def load(data, settings=None):
    """Load font from BMFont JSON descriptor."""
    return from_bytes(data, settings)


@savers.register(linked=load)
def save(font, outstream, bool_as_int:bool=False):
    """
    Save font to BMFont JSON descriptor.

    bool_as_int: write booleans as 0 and 1 (default: False)
    """
    to_writer(font, outstream, bool_as_int=bool_as_int)


def from_str(text, settings=None):
    """Read font from JSON descriptor string."""
    try:
        tree = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedJSONError(f'Not a valid JSON document: {e}') from e
    builder = FontBuilder()
    builder.observe_all(_parse_json(tree))
    return builder.build(settings or DEFAULT)


def from_bytes(data, settings=None):
    """Read font from utf-8 encoded JSON descriptor."""
    try:
        text = bytes(data).decode('utf-8-sig')
    except UnicodeDecodeError as e:
        raise ParseValueError(f'JSON descriptor is not valid utf-8: {e}') from e
    return from_str(text, settings)


def from_reader(instream, settings=None):
    """Read font from binary or text stream holding a JSON descriptor."""
    return from_bytes(read_all(instream), settings)


def to_string(font, bool_as_int=False):
    """Write font to JSON descriptor string."""
    check_font_for_write(font)
    check_page_list(font.pages)
    return json.dumps(_create_tree(font, bool_as_int))


def to_bytes(font, bool_as_int=False):
    """Write font to utf-8 encoded JSON descriptor."""
    return to_string(font, bool_as_int).encode('utf-8')


def to_writer(font, outstream, bool_as_int=False):
    """Write font to binary or text stream as JSON descriptor."""
    write_all(outstream, to_bytes(font, bool_as_int))


##############################################################################
# reader

def _parse_json(tree):
    """Generate field events from a JSON document."""
    if not isinstance(tree, dict):
        raise MalformedJSONError(
            f'Not a valid BMFont JSON file: expected an object, got {type(tree).__name__}.'
        )
    for key in tree:
        if key not in ('info', 'common', 'pages', 'chars', 'kernings'):
            logging.debug('Skipping unknown key `%s`.', key)
    for tag in ('info', 'common'):
        if tag in tree:
            yield FieldEvent(tag, _expect_object(tree[tag], tag))
    for page_id, name in enumerate(_expect_list(tree.get('pages', []), 'pages')):
        if not isinstance(name, str):
            raise MalformedJSONError(
                f'Not a valid BMFont JSON file: page {page_id} is not a string.'
            )
        yield FieldEvent('page', {'id': page_id, 'file': name})
    for tag in ('char', 'kerning'):
        for item in _expect_list(tree.get(f'{tag}s', []), f'{tag}s'):
            yield FieldEvent(tag, _expect_object(item, tag))


def _expect_object(value, path):
    if not isinstance(value, dict):
        raise MalformedJSONError(
            f'Not a valid BMFont JSON file: `{path}` should be an object.'
        )
    return value


def _expect_list(value, path):
    if not isinstance(value, list):
        raise MalformedJSONError(
            f'Not a valid BMFont JSON file: `{path}` should be an array.'
        )
    return value


##############################################################################
# writer

def _create_tree(font, bool_as_int):
    """Convert font to JSON-serialisable tree."""

    def _convert(tag, record):
        return {
            _k: _to_json(_v, bool_as_int)
            for _k, _v in to_fields(tag, record).items()
        }

    return {
        'pages': [
            _page.file for _page in sorted(font.pages, key=lambda _p: _p.id)
        ],
        'chars': [_convert('char', _c) for _c in font.chars],
        'info': _convert('info', font.info),
        'common': _convert('common', font.common),
        'kernings': [_convert('kerning', _k) for _k in font.kernings],
    }


def _to_json(value, bool_as_int):
    if isinstance(value, bool):
        return int(value) if bool_as_int else value
    if isinstance(value, tuple):
        return list(value)
    return value
