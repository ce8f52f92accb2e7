#!/usr/bin/env python3
# Renders a packed glyph bitmap as rows of X/_ characters, one C initializer
# line per bitmap row. The X/_ names are the bit pattern macros from font.h.

SET_PIXEL = 'X'
CLEAR_PIXEL = '_'


def render_byte(c):
    return ''.join([
        SET_PIXEL if (c >> i & 1 != 0) else CLEAR_PIXEL
        for i in range(7, -1, -1)])


def render_rows(bitmap, width, height, vertical_offset, prefix=''):
    """Return exactly `height` lines for the cell.

    A positive vertical_offset puts that many blank rows above the glyph,
    a negative one drops that many rows off the top of the glyph and pads
    blank rows below it.
    """
    stride = (width + 7) // 8
    blank = '\t%s%s' % (prefix, (CLEAR_PIXEL * 8 + ',') * stride)
    pad = min(abs(vertical_offset), height)
    first = -vertical_offset if vertical_offset < 0 else 0

    lines = []
    if vertical_offset > 0:
        lines.extend([blank] * pad)
    for y in range(height - pad):
        row = bitmap.row(first + y)
        lines.append('\t%s%s' % (prefix, ''.join([
            render_byte(c) + ',' for c in row[:stride]])))
    if vertical_offset < 0:
        lines.extend([blank] * pad)
    return lines
