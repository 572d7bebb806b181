"""
bmfont.validate - string safety, count, range and reference checks

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .errors import (
    UnsafeValueStringError, CountMismatchError, InvalidReferenceError,
    ParseValueError, InvalidCharsetEncodingError,
)
from .struct import limits
from .font import FIELDS, to_fields


# C0 controls and DEL
_CONTROL_CODES = frozenset(range(32)) | {127}


def check_string_safety(value, path='value'):
    """Raise UnsafeValueStringError if the string holds a control character."""
    for char in value:
        if ord(char) in _CONTROL_CODES:
            raise UnsafeValueStringError(path, value, ord(char))
    return value


def check_counts(tag, declared, actual):
    """Raise CountMismatchError if a declared count differs from the actual one."""
    if declared != actual:
        raise CountMismatchError(tag, declared, actual)


def check_reference(kind, id, valid, context=''):
    """Raise InvalidReferenceError if id is not among the valid ones."""
    if id not in valid:
        message = f'Invalid {kind} reference: {id}'
        if context:
            message += f' ({context})'
        raise InvalidReferenceError(message + '.', id=id)


def check_range(key, value, typename, line=None):
    """Raise ParseValueError if value does not fit the named integer type."""
    low, high = limits(typename)
    if not low <= value <= high:
        raise ParseValueError(
            f'Value {value} for `{key}` out of range [{low}, {high}].',
            key=key, value=value, line=line,
        )
    return value


def check_page_list(pages):
    """Page ids must be the contiguous range starting at zero."""
    ids = sorted(_page.id for _page in pages)
    if ids != list(range(len(pages))):
        raise InvalidReferenceError(
            f'Broken page list: page ids {ids} are not 0..{len(pages)-1}.'
        )


def check_font_references(font):
    """Check that chars reference existing pages and kernings existing chars."""
    check_page_list(font.pages)
    page_ids = {_page.id for _page in font.pages}
    for char in font.chars:
        check_reference('page', char.page, page_ids, f'char {char.id}')
    char_ids = {_char.id for _char in font.chars}
    for kerning in font.kernings:
        context = f'kerning {kerning.first}/{kerning.second}'
        check_reference('kerning char', kerning.first, char_ids, context)
        check_reference('kerning char', kerning.second, char_ids, context)


def check_font_strings(font):
    """Check face, charset and page file names for control characters."""
    check_string_safety(font.info.face, 'info face')
    check_string_safety(font.info.charset, 'info charset')
    for page in font.pages:
        check_string_safety(page.file, f'page {page.id} file')


def check_font_ranges(font):
    """Check all integer fields fit their binary width."""
    records = (
        [('info', font.info), ('common', font.common)]
        + [('page', _p) for _p in font.pages]
        + [('char', _c) for _c in font.chars]
        + [('kerning', _k) for _k in font.kernings]
    )
    for tag, record in records:
        layout = FIELDS[tag]
        for key, value in to_fields(tag, record).items():
            typename = layout[key][2]
            if typename is None:
                continue
            values = value if isinstance(value, tuple) else (value,)
            for item in values:
                check_range(f'{tag} {key}', item, typename)


def check_encoding(value, path='value'):
    """Raise InvalidCharsetEncodingError if the string has no utf-8 encoding."""
    try:
        value.encode('utf-8')
    except UnicodeEncodeError as e:
        raise InvalidCharsetEncodingError(
            path, value, f'not encodable as utf-8: {e.reason}'
        ) from e
    return value


def check_font_encoding(font):
    """Check face, charset and page file names can be written as utf-8."""
    check_encoding(font.info.face, 'info face')
    check_encoding(font.info.charset, 'info charset')
    for page in font.pages:
        check_encoding(page.file, f'page {page.id} file')


def check_font_for_write(font):
    """Checks that apply to every writer, regardless of load settings."""
    check_font_strings(font)
    check_font_encoding(font)
    check_font_ranges(font)
