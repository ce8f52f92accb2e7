#!/usr/bin/env python3
# Converts a BDF bitmap font into C source: one packed bitmap table for all
# glyphs, a width table and an encoding table, tied together by a
# struct bitmap_font (declared in the font.h written by -c / -C).
#
# Glyphs whose BBX doesn't line up with FONTBOUNDINGBOX are shifted right
# into the cell and padded with blank rows above or below. Glyphs that
# stick out of the cell also get their unshifted bitmap written as a
# comment, so broken fonts are easy to spot in the output.
import argparse
import io
import logging
import sys

import bdf_reader
import c_source
import fontpic
import glyph_dump
import packed_bitmap

# BDF is ASCII, but COMMENT and COPYRIGHT lines often carry Latin-1 bytes
BDF_ENCODING = 'latin-1'


def glyph_flags(header, glyph):
    """Return (shifted, overflow) for a glyph placed in the font cell."""
    shifted = False
    overflow = False
    if glyph.bbx != header.x_offset:
        shifted = True
        if glyph.bbx < header.x_offset:
            overflow = True
        elif glyph.bbx + glyph.bbw > header.x_offset + header.cell_width:
            overflow = True
    if glyph.bby + glyph.bbh != header.y_offset + header.cell_height:
        shifted = True
        if glyph.bby < header.y_offset:
            overflow = True
        elif glyph.bby + glyph.bbh > header.y_offset + header.cell_height:
            overflow = True
    return shifted, overflow


def vertical_offset(header, glyph):
    """Number of cell rows above the top of the glyph's bounding box."""
    return header.cell_height - (glyph.bby - header.y_offset + glyph.bbh)


def write_glyph(out, header, glyph, bitmap, outline, picture):
    width = header.cell_width
    height = header.cell_height
    shifted, overflow = glyph_flags(header, glyph)

    out.write(c_source.glyph_comment(glyph))

    unshifted = None
    if overflow:
        logging.debug('Glyph %r overflows the font bounding box', glyph.name)
        unshifted = glyph_dump.render_rows(bitmap, width, height, 0, '//')

    if glyph.bbx != header.x_offset:
        packed_bitmap.rotate(bitmap, glyph.bbx - header.x_offset)
    if outline:
        packed_bitmap.rotate(bitmap, 1)
        packed_bitmap.outline(bitmap)

    yoff = vertical_offset(header, glyph)
    picture.add(bitmap, width, height, 0, yoff, glyph.encoding,
                shifted, overflow)

    if unshifted:
        out.write('\n'.join(unshifted) + '\n')
    rows = glyph_dump.render_rows(bitmap, width, height, yoff)
    out.write('\n'.join(rows) + '\n')


def convert(bdf, out, name='font', outline=False, preview=None):
    """Read BDF lines from bdf and write the C source to out.

    Returns the FontTables with the width and encoding of every glyph.
    """
    parser = bdf_reader.BdfParser(outline=outline)
    lines = iter(bdf)
    header = parser.read_header(lines)

    bitmap = packed_bitmap.PackedBitmap(header.cell_width, header.cell_height)
    picture = fontpic.FontPicture()
    picture.initialize(preview, header.glyph_count, header.cell_width,
                       header.cell_height, header.name)

    out.write(c_source.file_header(name))
    out.write(c_source.bounding_box_comment(header))

    try:
        for line in lines:
            glyph = parser.feed(line, bitmap)
            if glyph is not None:
                write_glyph(out, header, glyph, bitmap, outline, picture)
        glyph = parser.finish()
        if glyph is not None:
            write_glyph(out, header, glyph, bitmap, outline, picture)
    except bdf_reader.BdfError:
        picture.clear()
        raise

    tables = parser.tables
    if len(tables) < header.glyph_count:
        logging.warning('Font declares %d characters but only %d were read',
                        header.glyph_count, len(tables))
    for encoding in tables.encodings:
        if encoding != -1 and encoding & 0xFFFF != encoding:
            logging.warning('Encoding %d does not fit the 16 bit index, '
                            'written as %d', encoding, encoding & 0xFFFF)

    out.write(c_source.width_table(name, tables.widths))
    out.write(c_source.encoding_table(name, tables.encodings))
    out.write(c_source.footer(name, header.cell_width, header.cell_height,
                              len(tables)))
    picture.finalize()
    return tables


def print_version():
    print('bdf2c Version %s' % c_source.VERSION)


def make_parser():
    parser = argparse.ArgumentParser(
        prog='bdf2c', add_help=False,
        description='Convert a BDF bitmap font into C source')
    parser.add_argument('-h', '-?', dest='help', action='store_true',
                        help='Print this short page on stdout')
    parser.add_argument('-b', dest='stdio', action='store_true',
                        help='Read bdf file from stdin, write to stdout')
    parser.add_argument('-c', dest='header_stdout', action='store_true',
                        help='Create font header on stdout')
    parser.add_argument('-C', dest='header_file', metavar='file',
                        help='Create font header file')
    parser.add_argument('-n', dest='name', metavar='name', default='font',
                        help='Name of c font variable')
    parser.add_argument('-i', dest='input', metavar='file',
                        help='Input bdf file (default stdin)')
    parser.add_argument('-o', dest='output', metavar='file',
                        help='Output c file (default stdout)')
    parser.add_argument('-p', dest='preview', metavar='file',
                        help='Write a PNG preview of all glyphs')
    parser.add_argument('-O', dest='outline', action='store_true',
                        help='Create outline for the font')
    parser.add_argument('-v', dest='verbose', action='store_true',
                        help='Print debug messages')
    parser.add_argument('extra', nargs='*', help=argparse.SUPPRESS)
    return parser


def main(argv=None):
    parser = make_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(format='%(levelname)s: %(message)s',
                        level=logging.DEBUG if args.verbose else logging.INFO)

    if args.help:
        print_version()
        parser.print_help(sys.stdout)
        return 0
    for arg in args.extra:
        logging.warning('Unhandled argument %r', arg)

    if args.header_stdout:
        sys.stdout.write(c_source.font_header())
        return 0
    if args.header_file:
        try:
            with open(args.header_file, 'w') as fp:
                fp.write(c_source.font_header())
        except OSError as e:
            print('Error: Can\'t open file %r: %s' % (args.header_file, e),
                  file=sys.stderr)
            return 1

    if args.stdio:
        args.input = None
        args.output = None

    source = io.StringIO()
    try:
        if args.input:
            with open(args.input, 'r', encoding=BDF_ENCODING) as fp:
                convert(fp, source, args.name, args.outline, args.preview)
        else:
            stdin = io.TextIOWrapper(sys.stdin.buffer, encoding=BDF_ENCODING)
            try:
                convert(stdin, source, args.name, args.outline, args.preview)
            finally:
                stdin.detach()
    except OSError as e:
        print('Error: input file error: %s' % e, file=sys.stderr)
        return 1
    except bdf_reader.BdfError as e:
        print('Error: %s' % e, file=sys.stderr)
        return 1

    if args.output:
        try:
            with open(args.output, 'w') as fp:
                fp.write(source.getvalue())
        except OSError as e:
            print('Error: output file error: %s' % e, file=sys.stderr)
            return 1
    else:
        sys.stdout.write(source.getvalue())
    return 0


if __name__ == '__main__':
    sys.exit(main())
