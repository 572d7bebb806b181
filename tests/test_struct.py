"""
bmfont test suite
binary structure tests
"""

import unittest

from bmfont.struct import little_endian as le, limits, TYPES
from bmfont.errors import TruncatedError, ParseValueError
from .base import BaseTester


_RECORD = le.Struct(
    id='uint32',
    amount='int16',
)


class TestStruct(BaseTester):
    """Test fixed-layout binary structures."""

    def test_limits(self):
        """Integer type limits."""
        self.assertEqual(limits('uint8'), (0, 255))
        self.assertEqual(limits('int16'), (-32768, 32767))
        self.assertEqual(limits('uint32'), (0, 0xffffffff))
        self.assertEqual(limits('uint16'), (0, 0xffff))

    def test_field_types(self):
        """Only types used in descriptor records are known."""
        self.assertEqual(set(TYPES), {'uint8', 'uint16', 'int16', 'uint32'})
        with self.assertRaises(ValueError):
            le.Struct(value='int32')

    def test_pack(self):
        """Structs pack little-endian without alignment padding."""
        self.assertEqual(_RECORD.size, 6)
        record = _RECORD(id=0x0102, amount=-2)
        self.assertEqual(bytes(record), b'\x02\x01\0\0\xfe\xff')

    def test_unpack(self):
        """Structs unpack at an offset."""
        record = _RECORD.from_bytes(b'xx\x02\x01\0\0\xfe\xff', 2)
        self.assertEqual(vars(record), {'id': 0x0102, 'amount': -2})

    def test_char_array(self):
        """Char array fields hold bytes."""
        head = le.Struct(magic='3s', version='uint8')
        self.assertEqual(head.from_bytes(b'BMF\3').magic, b'BMF')

    def test_out_of_range(self):
        """Values that don't fit are refused."""
        with self.assertRaises(ParseValueError):
            _RECORD(id=-1, amount=0)
        with self.assertRaises(ParseValueError):
            _RECORD(id=0, amount=40000)

    def test_unknown_field(self):
        """Fields must be part of the structure."""
        with self.assertRaises(TypeError):
            _RECORD(id=0, colour=1)

    def test_truncated(self):
        """Short buffers raise TruncatedError."""
        with self.assertRaises(TruncatedError) as cm:
            _RECORD.from_bytes(b'\0\0\0')
        self.assertEqual(cm.exception.needed, 6)
        self.assertEqual(cm.exception.available, 3)

    def test_unpack_many(self):
        """Consecutive records unpack at the right positions."""
        for count in (0, 1, 2, 5):
            with self.subTest(count=count):
                records = [{'id': _i, 'amount': -_i} for _i in range(count)]
                data = b'head' + _RECORD.pack_many(records)
                self.assertEqual(len(data), 4 + 6*count)
                unpacked = _RECORD.unpack_many(data, count, offset=4)
                self.assertEqual([vars(_r) for _r in unpacked], records)

    def test_unpack_many_truncated(self):
        """Too few bytes for the requested count."""
        data = _RECORD.pack_many([{'id': 1, 'amount': 1}] * 2)
        with self.assertRaises(TruncatedError):
            _RECORD.unpack_many(data[:-1], 2)


if __name__ == '__main__':
    unittest.main()
