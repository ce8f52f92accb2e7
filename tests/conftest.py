import pytest

SAMPLE_BDF = '''\
STARTFONT 2.1
FONT -misc-fixed-medium-r-normal--13-120-75-75-C-80-ISO10646-1
SIZE 13 75 75
FONTBOUNDINGBOX 8 13 0 -2
STARTPROPERTIES 1
FONT_ASCENT 11
ENDPROPERTIES
CHARS 1
STARTCHAR A
ENCODING 65
SWIDTH 568 0
DWIDTH 8 0
BBX 8 13 0 -2
BITMAP
00
38
7C
C6
C6
C6
FE
C6
C6
C6
C6
00
00
ENDCHAR
ENDFONT
'''

SAMPLE_ROWS = [
    '\t________,',
    '\t__XXX___,',
    '\t_XXXXX__,',
    '\tXX___XX_,',
    '\tXX___XX_,',
    '\tXX___XX_,',
    '\tXXXXXXX_,',
    '\tXX___XX_,',
    '\tXX___XX_,',
    '\tXX___XX_,',
    '\tXX___XX_,',
    '\t________,',
    '\t________,',
]


def make_bdf(bbox, chars, glyphs):
    """Build BDF text. glyphs is a list of (name, lines) pairs."""
    out = ['STARTFONT 2.1', 'FONTBOUNDINGBOX %d %d %d %d' % bbox,
           'CHARS %d' % chars]
    for name, lines in glyphs:
        out.append('STARTCHAR %s' % name)
        out.extend(lines)
        out.append('ENDCHAR')
    out.append('ENDFONT')
    return '\n'.join(out) + '\n'


@pytest.fixture
def sample_bdf():
    return SAMPLE_BDF


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / 'sample.bdf'
    path.write_text(SAMPLE_BDF)
    return path
