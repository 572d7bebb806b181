"""
bmfont test suite
testing utilities
"""

import tempfile
import unittest
import logging
from pathlib import Path

from bmfont import (
    Font, Info, Common, Page, Char, Kerning, Packing, Chnl, Padding, Spacing,
)


# reference descriptor in the exact form the text writer produces
REFERENCE_TEXT = """\
info face="Arial" size=32 bold=0 italic=1 charset="" unicode=1 stretchH=100 smooth=1 aa=1 padding=1,2,3,4 spacing=1,1 outline=0
common lineHeight=32 base=26 scaleW=256 scaleH=256 pages=2 packed=0 alphaChnl=1 redChnl=0 greenChnl=0 blueChnl=0
page id=0 file="arial_0.png"
page id=1 file="arial_1.png"
chars count=3
char id=32 x=0 y=0 width=0 height=0 xoffset=0 yoffset=31 xadvance=8 page=0 chnl=15
char id=65 x=10 y=0 width=20 height=22 xoffset=-1 yoffset=4 xadvance=19 page=0 chnl=15
char id=86 x=0 y=0 width=21 height=22 xoffset=-1 yoffset=4 xadvance=19 page=1 chnl=15
kernings count=1
kerning first=65 second=86 amount=-2
"""


def make_reference_font():
    """Font equal to what REFERENCE_TEXT describes."""
    return Font(
        info=Info(
            face='Arial', size=32, italic=True, unicode=True, smooth=True,
            padding=Padding(1, 2, 3, 4), spacing=Spacing(1, 1),
        ),
        common=Common(
            line_height=32, base=26, scale_w=256, scale_h=256, pages=2,
            alpha_chnl=Packing.OUTLINE,
        ),
        pages=[Page(0, 'arial_0.png'), Page(1, 'arial_1.png')],
        chars=[
            Char(32, 0, 0, 0, 0, 0, 31, 8, 0, Chnl.ALL),
            Char(65, 10, 0, 20, 22, -1, 4, 19, 0, Chnl.ALL),
            Char(86, 0, 0, 21, 22, -1, 4, 19, 1, Chnl.ALL),
        ],
        kernings=[Kerning(65, 86, -2)],
    )


def make_font(nchars=0, nkernings=0):
    """Single-page font with consecutive chars and kerning pairs."""
    font = Font(
        info=Info(face='Test', size=8, unicode=True),
        common=Common(line_height=8, base=7, scale_w=64, scale_h=64, pages=1),
        pages=[Page(0, 'test_0.png')],
    )
    font.chars = [
        Char(id=0x41 + _i, x=8*_i, width=8, height=8, xadvance=8)
        for _i in range(nchars)
    ]
    font.kernings = [
        Kerning(first=0x41, second=0x41 + _i, amount=-1)
        for _i in range(nkernings)
    ]
    return font


def assert_text_eq(text, model):
    assert text == model, f'"""\\\n{text}"""\n != \n"""\\\n{model}"""'


class BaseTester(unittest.TestCase):
    """Base class for testers."""

    logging.basicConfig(level=logging.WARNING)

    reference_text = REFERENCE_TEXT

    def setUp(self):
        """Setup ahead of each test."""
        bar = '-' * 20
        logging.debug('%s %s %s', bar, self.id(), bar)
        # fonts are mutable, so build a fresh one for each test
        self.font = make_reference_font()
        self.temp_dir = tempfile.TemporaryDirectory()
        self.temp_path = Path(self.temp_dir.name)

    def tearDown(self):
        """Clean up after each test."""
        self.temp_dir.cleanup()

    def reference_with(self, old, new):
        """Reference descriptor text with one substitution."""
        assert old in self.reference_text, old
        return self.reference_text.replace(old, new, 1)
