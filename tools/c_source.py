#!/usr/bin/env python3
# Text of the generated C file and of the font.h header it includes.

VERSION = '4'


def font_header():
    """font.h: the bitmap_font structure and the X/_ bit pattern macros."""
    lines = [
        '// bitmap font structure, generated by bdf2c',
        '',
        '\t/// bitmap font structure',
        'struct bitmap_font {',
        '\tunsigned char Width;\t\t///< max. character width',
        '\tunsigned char Height;\t\t///< character height',
        '\tunsigned short Chars;\t\t///< number of characters in font',
        '\tconst unsigned char *Widths;\t///< width of each character',
        '\tconst unsigned short *Index;\t///< encoding to character index',
        '\tconst unsigned char *Bitmap;\t///< bitmap of all characters',
        '};',
        '',
        '\t/// @{ defines to have human readable font files',
    ]
    for i in range(256):
        pattern = ''.join([
            'X' if (i >> bit & 1 != 0) else '_' for bit in range(7, -1, -1)])
        lines.append('#define %s 0x%02X' % (pattern, i))
    lines.append('\t/// @}')
    return '\n'.join(lines) + '\n'


def file_header(name):
    return (
        '// Created from bdf2c Version %s\n'
        '\n#include "font.h"\n\n'
        '\t/// character bitmap for each encoding\n'
        'static const unsigned char __%s_bitmap__[] = {\n' % (VERSION, name))


def bounding_box_comment(header):
    return '// FONTBOUNDINGBOX %d %d %d %d\n' % (
        header.cell_width, header.cell_height,
        header.x_offset, header.y_offset)


def glyph_comment(glyph):
    # width and bbx as declared in the font, before they were adjusted
    width, bbx = glyph.declared_width_bbx()
    return (
        '// %3d $%02x \'%s\'\n'
        '//\twidth %d, bbx %d, bby %d, bbw %d, bbh %d\n' % (
            glyph.encoding, glyph.encoding & 0xFFFF, glyph.name,
            width, bbx, glyph.bby, glyph.bbw, glyph.bbh))


def width_table(name, widths):
    out = ['};\n\n',
           '\t/// character width for each encoding\n',
           'static const unsigned char __%s_widths__[] = {\n' % name]
    out.extend(['\t%u,\n' % w for w in widths])
    return ''.join(out)


def encoding_table(name, encodings):
    # The table is unsigned short in C
    out = ['};\n\n',
           '\t/// character encoding for each index entry\n',
           'static const unsigned short __%s_index__[] = {\n' % name]
    out.extend(['\t%u,\n' % (e & 0xFFFF) for e in encodings])
    return ''.join(out)


def footer(name, width, height, chars):
    return (
        '};\n\n'
        '\t/// bitmap font structure\n'
        'const struct bitmap_font %s = {\n'
        '\t.Width = %d, .Height = %d,\n'
        '\t.Chars = %d,\n'
        '\t.Widths = __%s_widths__,\n'
        '\t.Index = __%s_index__,\n'
        '\t.Bitmap = __%s_bitmap__,\n'
        '};\n\n' % (name, width, height, chars, name, name, name))
