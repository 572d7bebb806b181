"""
bmfont test suite
font builder tests
"""

import unittest

from bmfont import (
    FieldEvent, FontBuilder, PERMISSIVE, DEFAULT,
    DuplicateBlockError, MissingBlockError, UnexpectedBlockError,
    InvalidReferenceError, CountMismatchError, ParseValueError,
)
from .base import BaseTester


def _events():
    """Minimal valid event stream, records delivered out of order."""
    return [
        FieldEvent('char', {'id': 65, 'width': 8, 'height': 8, 'page': 0}),
        FieldEvent('kerning', {'first': 65, 'second': 65, 'amount': -1}),
        FieldEvent('page', {'id': 0, 'file': 'a.png'}),
        FieldEvent('common', {'lineHeight': 8, 'pages': 1}),
        FieldEvent('info', {'face': 'Test', 'size': '8'}),
    ]


class TestBuilder(BaseTester):
    """Test assembling fonts from field events."""

    def test_any_order(self):
        font = FontBuilder().observe_all(_events()).build()
        self.assertEqual(font.info.face, 'Test')
        self.assertEqual(font.info.size, 8)
        self.assertEqual(font.common.line_height, 8)
        self.assertEqual([_c.id for _c in font.chars], [65])
        self.assertEqual(font.kernings[0].amount, -1)

    def test_duplicate_singleton(self):
        builder = FontBuilder().observe_all(_events())
        with self.assertRaises(DuplicateBlockError) as cm:
            builder.observe(FieldEvent('common', {}, 12))
        self.assertEqual(cm.exception.tag, 'common')
        self.assertEqual(cm.exception.line, 12)

    def test_duplicate_count(self):
        builder = FontBuilder()
        builder.observe(FieldEvent('chars', {'count': 1}))
        with self.assertRaises(DuplicateBlockError):
            builder.observe(FieldEvent('chars', {'count': 1}))

    def test_unexpected_tag(self):
        with self.assertRaises(UnexpectedBlockError):
            FontBuilder().observe(FieldEvent('glyph', {}))

    def test_missing_block(self):
        events = [_e for _e in _events() if _e.tag != 'info']
        with self.assertRaises(MissingBlockError) as cm:
            FontBuilder().observe_all(events).build()
        self.assertEqual(cm.exception.tag, 'info')

    def test_unknown_key_skipped(self):
        events = _events() + [FieldEvent('char', {'id': 66, 'letter': 'B'})]
        font = FontBuilder().observe_all(events).build()
        self.assertEqual(len(font.chars), 2)

    def test_invalid_value(self):
        builder = FontBuilder()
        with self.assertRaises(ParseValueError) as cm:
            builder.observe(FieldEvent('char', {'id': 'A'}, 7))
        self.assertEqual(cm.exception.key, 'id')
        self.assertEqual(cm.exception.line, 7)

    def test_count_hint(self):
        events = _events() + [FieldEvent('chars', {'count': 2})]
        with self.assertRaises(CountMismatchError):
            FontBuilder().observe_all(events).build()

    def test_page_count(self):
        events = _events() + [FieldEvent('page', {'id': 1, 'file': 'b.png'})]
        with self.assertRaises(CountMismatchError) as cm:
            FontBuilder().observe_all(events).build(DEFAULT)
        self.assertEqual(cm.exception.tag, 'pages')

    def test_relaxed_references(self):
        events = _events() + [
            FieldEvent('kerning', {'first': 65, 'second': 90, 'amount': 1})
        ]
        with self.assertRaises(InvalidReferenceError) as cm:
            FontBuilder().observe_all(events).build()
        self.assertEqual(cm.exception.id, 90)
        with self.assertLogs(level='WARNING'):
            font = FontBuilder().observe_all(events).build(PERMISSIVE)
        self.assertEqual(len(font.kernings), 2)


if __name__ == '__main__':
    unittest.main()
