"""
bmfont.basetypes - base data types and converters

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import math
from collections import namedtuple
from numbers import Integral


def to_int(value):
    """Convert from int, bool or decimal string; reject fractional numbers."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, float):
        if not math.isfinite(value) or value != int(value):
            raise ValueError(f'Expected an integer, got {value!r}.')
        return int(value)
    if isinstance(value, str):
        value = value.strip()
        if value.lower() == 'true':
            return 1
        if value.lower() == 'false':
            return 0
        return int(value, 10)
    raise ValueError(f"Can't convert {value!r} to integer.")


def to_bool(value):
    """Convert 0/1, true/false to bool."""
    number = to_int(value)
    if number not in (0, 1):
        raise ValueError(f'Expected 0 or 1, got {value!r}.')
    return bool(number)


def to_str(value):
    """Ensure value is a str."""
    if not isinstance(value, str):
        raise ValueError(f'Expected a string, got {value!r}.')
    return value


def to_tuple(value, *, length):
    """Convert comma-separated string or sequence to tuple of ints."""
    if isinstance(value, str):
        value = value.split(',') if value.strip() else ()
    elif isinstance(value, bytes) or not hasattr(value, '__iter__'):
        raise ValueError(f"Can't convert {value!r} to tuple.")
    value = tuple(to_int(_i) for _i in value)
    if len(value) != length:
        raise ValueError(
            f'Expected {length} comma-separated values, got {len(value)}.'
        )
    return value


class _VectorMixin:
    """Tuple representation in BMFont descriptors."""

    def __str__(self):
        return ','.join(f'{_e}' for _e in self)


class Padding(_VectorMixin, namedtuple('Padding', 'up right down left')):
    """Padding for each character (up, right, down, left)."""

    @classmethod
    def create(cls, value=(0, 0, 0, 0)):
        return cls(*to_tuple(value, length=4))


class Spacing(_VectorMixin, namedtuple('Spacing', 'horizontal vertical')):
    """Spacing for each character (horizontal, vertical)."""

    @classmethod
    def create(cls, value=(0, 0)):
        return cls(*to_tuple(value, length=2))
