#!/usr/bin/env python3
# Packed 1bpp glyph buffer plus the in-place transforms applied to it before
# a glyph is written out. Rows are byte aligned, MSB of each byte is the
# leftmost pixel (the same layout BDF uses for its BITMAP rows).
import logging


class PackedBitmap:
    """Scratch buffer for one glyph cell.

    The buffer reserves twice the rows of the visible cell so that
    oversized glyphs can be read in before they are shifted into place.
    Only the first `height` rows take part in transforms and output.
    """

    def __init__(self, width, height):
        if width <= 0 or height <= 0:
            raise ValueError('Invalid bitmap size %dx%d' % (width, height))
        self.width = width
        self.height = height
        self.stride = (width + 7) // 8
        self.capacity = height * 2
        self.data = bytearray(self.stride * self.capacity)

    def clear(self):
        self.data[:] = bytes(len(self.data))

    def row(self, y):
        if y < 0 or y >= self.capacity:
            raise IndexError('Row %d out of range' % y)
        return self.data[y * self.stride:(y + 1) * self.stride]

    def set_row(self, y, row_bytes):
        """Copy row_bytes into row y. Returns the number of bytes dropped."""
        if y < 0 or y >= self.capacity:
            raise IndexError('Row %d out of range' % y)
        kept = row_bytes[:self.stride]
        off = y * self.stride
        self.data[off:off + len(kept)] = kept
        return len(row_bytes) - len(kept)

    def get_pixel(self, x, y):
        return self.data[y * self.stride + x // 8] & (0x80 >> x % 8) != 0

    def set_pixel(self, x, y, value=True):
        idx = y * self.stride + x // 8
        if value:
            self.data[idx] |= 0x80 >> x % 8
        else:
            self.data[idx] &= ~(0x80 >> x % 8) & 0xFF

    def cell_bytes(self):
        return bytes(self.data[:self.stride * self.height])


def rotate(bitmap, shift_x, shift_y=0):
    """Shift every row of the cell right by shift_x pixels.

    Bits pushed past the end of a row are lost, the vacated columns on the
    left are cleared. Vertical shifting is not done here, the emitter pads
    rows instead, so only shift_y <= 0 is accepted (and ignored).
    Returns False when the shift is outside the supported range.
    """
    if shift_x < 0 or shift_x >= bitmap.width:
        logging.warning(
            'Unsupported shift_x %d for a %dx%d cell (shift_y %d), ignored',
            shift_x, bitmap.width, bitmap.height, shift_y)
        return False
    if shift_y > 0:
        logging.warning(
            'Unsupported shift_y %d for a %dx%d cell (shift_x %d), ignored',
            shift_y, bitmap.width, bitmap.height, shift_x)
        return False

    data = bitmap.data
    stride = bitmap.stride
    byte_shift = shift_x // 8
    bit_shift = shift_x % 8

    for y in range(bitmap.height):
        start = y * stride
        for dst in range(stride - 1, -1, -1):
            src = dst - byte_shift
            val = 0
            if src >= 0:
                val = data[start + src] >> bit_shift
                if bit_shift and src > 0:
                    val |= (data[start + src - 1] << (8 - bit_shift)) & 0xFF
            data[start + dst] = val
    return True


def outline(bitmap):
    """Replace the cell with the outline of its set pixels.

    A pixel of the result is set when the source pixel is clear and at
    least one of its up, left, right or down neighbours is set.
    """
    width = bitmap.width
    height = bitmap.height
    result = bytearray(bitmap.stride * height)

    for y in range(height):
        for x in range(width):
            if bitmap.get_pixel(x, y):
                continue
            if ((y > 0 and bitmap.get_pixel(x, y - 1)) or
                    (x > 0 and bitmap.get_pixel(x - 1, y)) or
                    (x < width - 1 and bitmap.get_pixel(x + 1, y)) or
                    (y < height - 1 and bitmap.get_pixel(x, y + 1))):
                result[y * bitmap.stride + x // 8] |= 0x80 >> x % 8

    bitmap.data[:len(result)] = result
