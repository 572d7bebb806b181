"""
bmfont.formats - descriptor codecs

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from . import text, binary, xml, json
