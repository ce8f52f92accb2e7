#!/usr/bin/env python3
# Preview image of a converted font. Every glyph cell is drawn into a grid
# and the whole sheet is written as a palette PNG once the font is done.
import logging
import os

import png

GLYPHS_PER_ROW = 16

BACKGROUND = 0
GRID = 1
INK = 2
INK_SHIFTED = 3
INK_OVERFLOW = 4

PALETTE = [
    (0xff, 0xff, 0xff),
    (0xc0, 0xc0, 0xc0),
    (0x00, 0x00, 0x00),
    (0x00, 0x00, 0xc0),
    (0xc0, 0x00, 0x00),
]


class FontPicture:
    """Collects glyph cells and writes them as one PNG sheet.

    Any failure to open or write the image is logged and turns the preview
    off; the font conversion itself carries on.
    """

    def __init__(self):
        self.fp = None
        self.path = None
        self.rows = None
        self.count = 0
        self.written = False

    @property
    def active(self):
        return self.fp is not None

    def initialize(self, path, glyph_count, cell_width, cell_height,
                   font_name=''):
        self.clear()
        if not path:
            return False
        self.written = False
        try:
            self.fp = open(path, 'wb')
        except OSError as e:
            logging.warning('Cannot create preview %s: %s', path, e)
            return False

        self.path = path
        self.glyph_count = glyph_count
        self.cell_width = cell_width
        self.cell_height = cell_height
        columns = min(glyph_count, GLYPHS_PER_ROW)
        lines = (glyph_count + GLYPHS_PER_ROW - 1) // GLYPHS_PER_ROW
        self.width = columns * (cell_width + 1) + 1
        self.height = lines * (cell_height + 1) + 1

        self.rows = [bytearray(self.width) for y in range(self.height)]
        for y, row in enumerate(self.rows):
            if y % (cell_height + 1) == 0:
                row[:] = bytes([GRID]) * self.width
            else:
                for x in range(0, self.width, cell_width + 1):
                    row[x] = GRID
        logging.debug('Preview %s: %r, %d glyphs in a %dx%d image', path,
                      font_name, glyph_count, self.width, self.height)
        return True

    def add(self, bitmap, cell_width, cell_height, x_offset, y_offset,
            encoding, shifted, overflow):
        if not self.active:
            return
        if self.count >= self.glyph_count:
            logging.debug('Preview full, glyph %d not drawn', encoding)
            return

        if overflow:
            ink = INK_OVERFLOW
        elif shifted:
            ink = INK_SHIFTED
        else:
            ink = INK
        left = (self.count % GLYPHS_PER_ROW) * (self.cell_width + 1) + 1
        top = (self.count // GLYPHS_PER_ROW) * (self.cell_height + 1) + 1
        self.count += 1

        width = min(cell_width, self.cell_width)
        height = min(cell_height, self.cell_height)
        for y in range(height):
            src_y = y - y_offset
            if src_y < 0 or src_y >= cell_height:
                continue
            row = self.rows[top + y]
            for x in range(width):
                src_x = x - x_offset
                if 0 <= src_x < cell_width and bitmap.get_pixel(src_x, src_y):
                    row[left + x] = ink

    def finalize(self):
        if not self.active:
            return
        try:
            w = png.Writer(self.width, self.height, palette=PALETTE,
                           bitdepth=8)
            w.write(self.fp, self.rows)
            self.written = True
        except (OSError, png.Error) as e:
            logging.warning('Cannot write preview %s: %s', self.path, e)
        finally:
            self.clear()

    def clear(self):
        """Close the image. A file that was never written is removed."""
        if self.fp is not None:
            self.fp.close()
            if not self.written:
                try:
                    os.remove(self.path)
                except OSError as e:
                    logging.warning('Cannot remove preview %s: %s',
                                    self.path, e)
        self.fp = None
        self.rows = None
        self.count = 0
