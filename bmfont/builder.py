"""
bmfont.builder - assemble a Font from a stream of field events

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
from collections import namedtuple

from .font import Font, FIELDS, RECORDS, DIMENSION_FIELDS
from .struct import limits
from .settings import DEFAULT
from .errors import (
    ParseValueError, DuplicateBlockError, MissingBlockError,
    UnexpectedBlockError, InvalidReferenceError,
)
from .validate import (
    check_counts, check_range, check_font_references, check_font_strings,
)


class FieldEvent(namedtuple('FieldEvent', 'tag fields line')):
    """
    One record delivered by a descriptor reader.

    tag:    info, common, page, char, kerning; or chars, kernings for count hints
    fields: mapping of BMFont keys to raw values
    line:   line number in text formats, or None
    """

    def __new__(cls, tag, fields, line=None):
        return super().__new__(cls, tag, fields, line)


class FontBuilder:
    """Collect field events in any order and build a validated Font."""

    _singletons = ('info', 'common')
    _counts = ('chars', 'kernings')
    _sequences = ('page', 'char', 'kerning')

    def __init__(self):
        self._blocks = {}
        self._declared = {}
        self._records = {_tag: [] for _tag in self._sequences}

    def observe(self, event):
        """Record one field group."""
        tag, line = event.tag, event.line
        fields = self._convert(event)
        if tag in self._singletons:
            if tag in self._blocks:
                raise DuplicateBlockError(tag, line)
            self._blocks[tag] = (fields, line)
        elif tag in self._counts:
            if tag in self._declared:
                raise DuplicateBlockError(f'{tag} count', line)
            self._declared[tag] = fields.get('count', 0)
        elif tag in self._sequences:
            self._records[tag].append((fields, line))
        else:
            raise UnexpectedBlockError(f'Unexpected block `{tag}`.')

    def observe_all(self, events):
        """Record a sequence of field groups."""
        for event in events:
            self.observe(event)
        return self

    @staticmethod
    def _convert(event):
        """Convert raw values to python values; ranges are checked on build."""
        try:
            layout = FIELDS[event.tag]
        except KeyError:
            raise UnexpectedBlockError(f'Unexpected block `{event.tag}`.') from None
        logging.debug('Observed `%s` at line %s.', event.tag, event.line)
        fields = {}
        for key, value in event.fields.items():
            try:
                _, converter, _ = layout[key]
            except KeyError:
                logging.debug('Skipping unknown key `%s` in `%s`.', key, event.tag)
                continue
            try:
                fields[key] = converter(value)
            except (ValueError, TypeError) as e:
                raise ParseValueError(
                    f'Invalid value {value!r} for `{event.tag} {key}`: {e}',
                    key=key, value=value, line=event.line,
                ) from e
        return fields

    def build(self, settings=DEFAULT):
        """Validate and return the Font."""
        for tag in self._singletons:
            if tag not in self._blocks:
                raise MissingBlockError(tag)
        font = Font(
            info=self._make('info', *self._blocks['info'], settings),
            common=self._make('common', *self._blocks['common'], settings),
            pages=[self._make('page', *_r, settings) for _r in self._records['page']],
            chars=[self._make('char', *_r, settings) for _r in self._records['char']],
            kernings=[
                self._make('kerning', *_r, settings)
                for _r in self._records['kerning']
            ],
        )
        self._check_counts(font, settings)
        if settings.relax_references:
            try:
                check_font_references(font)
            except InvalidReferenceError as e:
                logging.warning('Ignoring invalid reference: %s', e)
        else:
            check_font_references(font)
        if not settings.allow_unsafe_strings:
            check_font_strings(font)
        return font

    def _check_counts(self, font, settings):
        """Compare declared with actual counts."""
        counts = [('pages', font.common.pages, len(font.pages))]
        counts.extend(
            (_tag, self._declared[_tag], len(getattr(font, _tag)))
            for _tag in self._counts
            if _tag in self._declared
        )
        for tag, declared, actual in counts:
            if settings.ignore_counts:
                if declared != actual:
                    logging.warning(
                        'Ignoring `%s` count mismatch: declared %d, found %d.',
                        tag, declared, actual
                    )
            else:
                check_counts(tag, declared, actual)

    @staticmethod
    def _make(tag, fields, line, settings):
        """Range-check fields and create the record."""
        layout = FIELDS[tag]
        tolerant = DIMENSION_FIELDS.get(tag, ()) if settings.ignore_dims else ()
        kwargs = {}
        for key, value in fields.items():
            attr, _, typename = layout[key]
            if typename is not None:
                if key in tolerant:
                    value = _clamp(f'{tag} {key}', value, typename)
                elif isinstance(value, tuple):
                    for item in value:
                        check_range(f'{tag} {key}', item, typename, line)
                else:
                    check_range(f'{tag} {key}', value, typename, line)
            kwargs[attr] = value
        return RECORDS[tag](**kwargs)


def _clamp(key, value, typename):
    """Force value into range of integer type."""
    low, high = limits(typename)
    clamped = min(max(value, low), high)
    if clamped != value:
        logging.warning('Clamping `%s` value %d to %d.', key, value, clamped)
    return clamped
