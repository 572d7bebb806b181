"""
bmfont test suite
JSON descriptor tests
"""

import io
import json as _json
import unittest

from bmfont import (
    json, text, MalformedJSONError, ParseValueError, InvalidReferenceError,
    UnsafeValueStringError, InvalidCharsetEncodingError, PERMISSIVE, Page,
)
from .base import BaseTester


class TestJSON(BaseTester):
    """Test the JSON descriptor codec."""

    def test_roundtrip(self):
        self.assertEqual(json.from_str(json.to_string(self.font)), self.font)
        self.assertEqual(json.from_bytes(json.to_bytes(self.font)), self.font)

    def test_shape(self):
        tree = _json.loads(json.to_string(self.font))
        self.assertEqual(tree['pages'], ['arial_0.png', 'arial_1.png'])
        self.assertEqual(tree['info']['padding'], [1, 2, 3, 4])
        self.assertEqual(tree['info']['spacing'], [1, 1])
        self.assertEqual(tree['info']['face'], 'Arial')
        self.assertEqual(tree['common']['scaleW'], 256)
        self.assertEqual(len(tree['chars']), 3)
        self.assertEqual(
            tree['kernings'], [{'first': 65, 'second': 86, 'amount': -2}]
        )

    def test_native_booleans(self):
        self.font.info.bold = True
        output = json.to_string(self.font)
        tree = _json.loads(output)
        self.assertIs(tree['info']['bold'], True)
        self.assertIs(tree['common']['packed'], False)
        self.assertTrue(json.from_str(output).info.bold)

    def test_integer_booleans(self):
        self.font.info.bold = True
        output = json.to_string(self.font, bool_as_int=True)
        tree = _json.loads(output)
        self.assertEqual(tree['info']['bold'], 1)
        self.assertIsNot(tree['info']['bold'], True)
        self.assertEqual(tree['common']['packed'], 0)
        self.assertIs(json.from_str(output).info.bold, True)

    def test_third_party(self):
        """Read a document with extra keys and string values."""
        tree = _json.loads(json.to_string(self.font))
        tree['distanceField'] = {'fieldType': 'msdf', 'distanceRange': 4}
        tree['chars'][1]['char'] = 'A'
        tree['chars'][1]['index'] = 12
        tree['info']['padding'] = '1,2,3,4'
        tree['info']['size'] = 32.0
        self.assertEqual(json.from_str(_json.dumps(tree)), self.font)

    def test_unsafe_strings(self):
        tree = _json.loads(json.to_string(self.font))
        tree['pages'][1] = 'arial\n1.png'
        document = _json.dumps(tree)
        with self.assertRaises(UnsafeValueStringError):
            json.from_str(document)
        self.assertEqual(json.from_str(document, PERMISSIVE).pages[1].file, 'arial\n1.png')

    def test_malformed(self):
        for document in ('', '[1, 2]', '{"info": 3}', '{"pages": "a.png"}', '{"pages": [1]}', '{"chars": [1]}'):
            with self.subTest(document=document):
                with self.assertRaises(MalformedJSONError):
                    json.from_str(document)

    def test_bad_value(self):
        tree = _json.loads(json.to_string(self.font))
        tree['chars'][0]['width'] = 'wide'
        with self.assertRaises(ParseValueError):
            json.from_str(_json.dumps(tree))

    def test_non_finite_numbers(self):
        tree = _json.loads(json.to_string(self.font))
        for value in (float('inf'), float('-inf'), float('nan')):
            with self.subTest(value=value):
                tree['info']['size'] = value
                with self.assertRaises(ParseValueError) as cm:
                    json.from_str(_json.dumps(tree))
                self.assertEqual(cm.exception.key, 'size')

    def test_write_surrogate(self):
        """Lone surrogates from \\u escapes load but can't be written."""
        document = json.to_string(self.font).replace('"Arial"', '"Arial\\ud800"')
        font = json.from_str(document)
        self.assertEqual(font.info.face, 'Arial\ud800')
        with self.assertRaises(InvalidCharsetEncodingError):
            json.to_bytes(font)

    def test_broken_page_list(self):
        self.font.pages = [Page(0, 'arial_0.png'), Page(2, 'arial_2.png')]
        with self.assertRaises(InvalidReferenceError):
            json.to_string(self.font)

    def test_same_font_as_text(self):
        self.assertEqual(
            json.from_str(json.to_string(text.from_str(self.reference_text))),
            text.from_str(self.reference_text)
        )

    def test_streams(self):
        outstream = io.BytesIO()
        json.to_writer(self.font, outstream, bool_as_int=True)
        outstream.seek(0)
        self.assertEqual(json.from_reader(outstream), self.font)


if __name__ == '__main__':
    unittest.main()
