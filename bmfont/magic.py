"""
bmfont.magic - descriptor format recognition

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from .errors import FileFormatError


class MagicRegistry:
    """Look up descriptor converters by format name or by signature."""

    def __init__(self, default=''):
        self._converters = {}
        self._signatures = []
        self._default = default

    def get_formats(self):
        """Names of the registered formats."""
        return tuple(self._converters)

    def get_for(self, data=None, format=''):
        """Converter for the named format, or for the format the data looks like."""
        if format:
            if format not in self._converters:
                raise FileFormatError(
                    f'Descriptor format `{format}` not recognised; '
                    f"should be one of {', '.join(self.get_formats())}."
                )
            return self._converters[format]
        converter = self.identify(data)
        if converter is None:
            logging.debug(
                'Could not infer descriptor format; assuming `%s`.', self._default
            )
            converter = self._converters[self._default]
        return converter

    def register(self, name='', magic=(), linked=None):
        """
        Decorator to register a converter.

        name: format name; taken from `linked` if empty
        magic: signatures that identify the format; taken from `linked` if empty
        linked: loader whose registration a saver shares
        """

        def _decorator(converter):
            converter.format = name or getattr(linked, 'format', '')
            converter.magic = tuple(magic or getattr(linked, 'magic', ()))
            if not converter.format:
                raise ValueError('Converter registered without a format name.')
            if converter.format in self._converters:
                raise ValueError(
                    f'Format `{converter.format}` is already registered.'
                )
            self._converters[converter.format] = converter
            self._signatures.extend(
                (_sig if isinstance(_sig, Magic) else Magic(_sig), converter)
                for _sig in converter.magic
            )
            # longest signatures are tried first
            self._signatures.sort(key=lambda _item: len(_item[0]), reverse=True)
            return converter

        return _decorator

    def identify(self, data):
        """Converter whose signature matches the data, or None."""
        if not data:
            return None
        for signature, converter in self._signatures:
            if signature.matches(data):
                logging.debug('Data looks like `%s` format.', converter.format)
                return converter
        return None


###############################################################################
# signatures

class Magic:
    """Signature at the very start of the data."""

    def __init__(self, value):
        if not isinstance(value, bytes):
            raise TypeError(f'Signature must be bytes, not {type(value).__name__}.')
        self.value = value

    def __len__(self):
        return len(self.value)

    def matches(self, data):
        return bytes(data[:len(self.value)]) == self.value


class Sentinel(Magic):
    """Signature at the start of text data, after a BOM and whitespace."""

    _skip = b'\xef\xbb\xbf \t\r\n'

    def matches(self, data):
        return bytes(data[:256]).lstrip(self._skip).startswith(self.value)
