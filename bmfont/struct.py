"""
bmfont.struct - little-endian binary records

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import ctypes
from types import SimpleNamespace

from .errors import TruncatedError, ParseValueError


##############################################################################
# field types

TYPES = {
    'uint8': ctypes.c_uint8,
    'uint16': ctypes.c_uint16,
    'int16': ctypes.c_int16,
    'uint32': ctypes.c_uint32,
}

_SIGNED = (ctypes.c_int16,)


def limits(typename):
    """Smallest and largest value that fits the named integer type."""
    ctype = TYPES[typename]
    bits = 8 * ctypes.sizeof(ctype)
    if ctype in _SIGNED:
        return -(1 << (bits-1)), (1 << (bits-1)) - 1
    return 0, (1 << bits) - 1


def _ctype_for(typename):
    """Integer type name or 'Ns' for a fixed-length byte string."""
    if typename in TYPES:
        return TYPES[typename]
    if typename.endswith('s') and typename[:-1].isdigit():
        return ctypes.c_char * int(typename[:-1])
    raise ValueError(f'Field type `{typename}` not understood.')


##############################################################################
# records

class Record:
    """One unpacked binary record; fields are attributes, vars() gives a dict."""

    def __init__(self, cvalue):
        self._cvalue = cvalue

    def __getattr__(self, attr):
        if attr.startswith('_'):
            raise AttributeError(attr)
        return getattr(self._cvalue, attr)

    def __bytes__(self):
        return bytes(self._cvalue)

    @property
    def __dict__(self):
        return {
            _name: getattr(self._cvalue, _name)
            for _name, _ in self._cvalue._fields_
        }

    def __repr__(self):
        return 'Record({})'.format(
            ', '.join(f'{_k}={_v!r}' for _k, _v in vars(self).items())
        )


class RecordType:
    """
    Fixed-layout little-endian record without alignment padding.

    >>> pair = RecordType(first='uint8', second='uint16')
    >>> bytes(pair(first=1, second=2))
    b'\\x01\\x02\\x00'
    >>> vars(pair.from_bytes(b'\\x01\\x02\\x00'))
    {'first': 1, 'second': 2}
    """

    def __init__(self, **fields):
        self.fields = fields

        class _LittleEndian(ctypes.LittleEndianStructure):
            _pack_ = 1
            _fields_ = [
                (_name, _ctype_for(_type)) for _name, _type in fields.items()
            ]

        self._ctype = _LittleEndian

    @property
    def size(self):
        """Size of the record in bytes."""
        return ctypes.sizeof(self._ctype)

    def __call__(self, **values):
        """Create a record, refusing values that would be truncated."""
        for name, value in values.items():
            if name not in self.fields:
                raise TypeError(f'Unknown record field `{name}`.')
            typename = self.fields[name]
            if typename in TYPES:
                low, high = limits(typename)
                if not low <= value <= high:
                    raise ParseValueError(
                        f'Value {value} out of range for `{name}` ({typename}).',
                        key=name, value=value,
                    )
        return Record(self._ctype(**values))

    def from_bytes(self, data, offset=0):
        """Unpack one record from a buffer at the given offset."""
        available = max(0, len(data) - offset)
        if available < self.size:
            raise TruncatedError(
                f'Need {self.size} bytes for record, {available} available.',
                needed=self.size, available=available,
            )
        return Record(self._ctype.from_buffer_copy(data, offset))

    def unpack_many(self, data, count, offset=0):
        """Unpack `count` consecutive records from a buffer."""
        needed = count * self.size
        available = max(0, len(data) - offset)
        if count < 0 or available < needed:
            raise TruncatedError(
                f'Need {needed} bytes for {count} records, {available} available.',
                needed=needed, available=available,
            )
        return [
            self.from_bytes(data, offset + _i*self.size)
            for _i in range(count)
        ]

    def pack_many(self, records):
        """Pack a sequence of field dicts into consecutive records."""
        return b''.join(bytes(self(**_values)) for _values in records)


# BMFont binary descriptors are little-endian throughout
little_endian = SimpleNamespace(Struct=RecordType)
