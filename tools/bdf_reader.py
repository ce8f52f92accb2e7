#!/usr/bin/env python3
# Line oriented BDF reader. The font header is read once, then every glyph
# is fed line by line and its bitmap rows are decoded straight into the
# caller's scratch bitmap.
import enum
import logging


class BdfError(Exception):
    pass


class FatalConfig(BdfError):
    pass


class MissingHeader(FatalConfig):
    pass


class MissingWidth(FatalConfig):
    pass


class MalformedRow(BdfError):
    pass


class MalformedDirective(BdfError):
    pass


class GlyphCountExceeded(BdfError):
    pass


def decode_hex_row(token):
    """Decode one BITMAP row: two hex digits per byte, high nibble first."""
    if len(token) % 2:
        raise MalformedRow('Odd number of hex digits in row %r' % token)
    try:
        return bytearray.fromhex(token)
    except ValueError:
        raise MalformedRow('Invalid hex digits in row %r' % token) from None


class FontHeader:
    def __init__(self, cell_width, cell_height, x_offset, y_offset,
                 glyph_count, name=''):
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.x_offset = x_offset
        self.y_offset = y_offset
        self.glyph_count = glyph_count
        self.name = name

    def __repr__(self):
        return 'FontHeader(%d x %d, offset %d,%d, %d chars, %r)' % (
            self.cell_width, self.cell_height, self.x_offset, self.y_offset,
            self.glyph_count, self.name)


class GlyphRecord:
    # device_width starts out as the cell width; a BITMAP seen before any
    # STARTCHAR has no record at all and fails with MissingWidth.
    def __init__(self, name, device_width):
        self.name = name
        self.encoding = -1
        self.device_width = device_width
        self.bbw = 0
        self.bbh = 0
        self.bbx = 0
        self.bby = 0
        self.declared = None

    def declared_width_bbx(self):
        """DWIDTH and BBX x as read from the font, before any adjustment."""
        return self.declared or (self.device_width, self.bbx)

    def adjust_width(self):
        # Widen the advance so the whole bounding box fits inside it
        self.declared = (self.device_width, self.bbx)
        if self.bbx < 0:
            self.device_width -= self.bbx
            self.bbx = 0
        if self.bbx + self.bbw > self.device_width:
            self.device_width = self.bbx + self.bbw


class FontTables:
    """Width and encoding of every glyph, in the order they were read."""

    def __init__(self, glyph_count):
        self.glyph_count = glyph_count
        self.widths = []
        self.encodings = []

    def __len__(self):
        return len(self.widths)

    def full(self):
        return len(self.widths) >= self.glyph_count

    def append(self, width, encoding):
        if self.full():
            raise GlyphCountExceeded(
                'More than %d glyphs in font' % self.glyph_count)
        self.widths.append(width)
        self.encodings.append(encoding)


class State(enum.Enum):
    AWAIT_FONT_HEADER = 1
    AWAIT_GLYPH_COUNT = 2
    AWAIT_GLYPH = 3
    IN_GLYPH_METADATA = 4
    IN_GLYPH_BITMAP = 5


def _ints(args, count, lineno, directive):
    if len(args) < count:
        raise MalformedDirective('%s needs %d values (line %d)' % (
            directive, count, lineno))
    try:
        return [int(a) for a in args[:count]]
    except ValueError:
        raise MalformedDirective('Bad %s values %r (line %d)' % (
            directive, ' '.join(args), lineno)) from None


class BdfParser:
    """Reads a BDF font as a state machine over its lines.

    read_header() consumes lines up to CHARS. feed() then takes one line at
    a time together with the scratch bitmap the rows are decoded into, and
    returns the GlyphRecord once its ENDCHAR is reached.
    """

    def __init__(self, outline=False):
        self.outline = outline
        self.state = State.AWAIT_FONT_HEADER
        self.lineno = 0
        self.header = None
        self.tables = None
        self.glyph = None
        self.row = 0
        self.glyphs_started = 0

        self._bbox = None
        self._name = ''

        self.handlers = {
            State.AWAIT_FONT_HEADER: {
                'FONTBOUNDINGBOX': self._font_bounding_box,
                'FONT': self._font_name,
                'CHARS': self._chars,
            },
            State.AWAIT_GLYPH: {
                'STARTCHAR': self._start_char,
                'BITMAP': self._bitmap_without_glyph,
            },
            State.IN_GLYPH_METADATA: {
                'STARTCHAR': self._restart_char,
                'ENCODING': self._encoding,
                'DWIDTH': self._dwidth,
                'BBX': self._bbx,
                'BITMAP': self._bitmap,
                'ENDCHAR': self._end_char_without_bitmap,
            },
        }
        self.handlers[State.AWAIT_GLYPH_COUNT] = \
            self.handlers[State.AWAIT_FONT_HEADER]

    def read_header(self, lines):
        for line in lines:
            self.lineno += 1
            tokens = line.split()
            if not tokens:
                continue
            self._dispatch(tokens)
            if self.state == State.AWAIT_GLYPH:
                return self.header

        if self._bbox is None or self._bbox[0] <= 0 or self._bbox[1] <= 0:
            raise MissingHeader('Need to know the character size')
        raise MissingHeader('Need to know the number of characters')

    def feed(self, line, bitmap):
        if self.header is None:
            raise MissingHeader('Font header has not been read')
        self.lineno += 1
        tokens = line.split()
        if not tokens:
            return None

        if self.state == State.IN_GLYPH_BITMAP:
            if tokens[0].upper() == 'ENDCHAR':
                return self._end_char()
            self._bitmap_row(tokens[0], bitmap)
            return None

        self._dispatch(tokens, bitmap)
        return None

    def finish(self):
        """Called at end of input.

        A glyph whose rows were being read is returned so that it can still
        be written out; its width was already recorded. A glyph that never
        reached BITMAP is dropped.
        """
        glyph = None
        if self.state == State.IN_GLYPH_BITMAP:
            logging.warning('Input ended inside the bitmap of %r',
                            self.glyph.name)
            glyph = self.glyph
        elif self.state == State.IN_GLYPH_METADATA:
            logging.warning('Input ended inside glyph %r', self.glyph.name)
        self.state = State.AWAIT_GLYPH
        self.glyph = None
        return glyph

    def _dispatch(self, tokens, bitmap=None):
        handler = self.handlers[self.state].get(tokens[0].upper())
        if handler is not None:
            handler(tokens[1:], bitmap)

    # Header

    def _font_bounding_box(self, args, bitmap):
        self._bbox = _ints(args, 4, self.lineno, 'FONTBOUNDINGBOX')
        self.state = State.AWAIT_GLYPH_COUNT

    def _font_name(self, args, bitmap):
        self._name = args[0] if args else ''

    def _chars(self, args, bitmap):
        count, = _ints(args, 1, self.lineno, 'CHARS')
        if self._bbox is None or self._bbox[0] <= 0 or self._bbox[1] <= 0:
            raise MissingHeader('Need to know the character size')
        if count <= 0:
            raise MissingHeader('Need to know the number of characters')

        width, height, xoff, yoff = self._bbox
        if self.outline:
            # Reserve space for the outline border
            width += 1
            height += 1
        self.header = FontHeader(width, height, xoff, yoff, count, self._name)
        self.tables = FontTables(count)
        self.state = State.AWAIT_GLYPH

    # Glyphs

    def _start_char(self, args, bitmap):
        if self.glyphs_started == self.header.glyph_count:
            logging.warning(
                'Too many bitmaps for characters, chars=%d, line=%d',
                self.header.glyph_count, self.lineno)
        self.glyphs_started += 1
        name = args[0] if args else 'unknown character'
        self.glyph = GlyphRecord(name, self.header.cell_width)
        self.state = State.IN_GLYPH_METADATA

    def _restart_char(self, args, bitmap):
        logging.warning('STARTCHAR without ENDCHAR for %r, line=%d',
                        self.glyph.name, self.lineno)
        self.glyphs_started -= 1
        self._start_char(args, bitmap)

    def _bitmap_without_glyph(self, args, bitmap):
        raise MissingWidth(
            'Character width not specified (line %d)' % self.lineno)

    def _encoding(self, args, bitmap):
        self.glyph.encoding, = _ints(args, 1, self.lineno, 'ENCODING')

    def _dwidth(self, args, bitmap):
        self.glyph.device_width, = _ints(args, 1, self.lineno, 'DWIDTH')

    def _bbx(self, args, bitmap):
        glyph = self.glyph
        glyph.bbw, glyph.bbh, glyph.bbx, glyph.bby = _ints(
            args, 4, self.lineno, 'BBX')

    def _bitmap(self, args, bitmap):
        glyph = self.glyph
        if glyph.encoding == -1:
            logging.warning('Glyph %r has no ENCODING (line %d)',
                            glyph.name, self.lineno)

        glyph.adjust_width()
        if self.outline:
            glyph.device_width += 1
        self.tables.append(glyph.device_width, glyph.encoding)

        bitmap.clear()
        # Outlined glyphs keep their first row empty
        self.row = 1 if self.outline else 0
        self.state = State.IN_GLYPH_BITMAP

    def _bitmap_row(self, token, bitmap):
        if self.row >= bitmap.capacity:
            raise MalformedRow('Too many bitmap rows in %r (line %d)' % (
                self.glyph.name, self.lineno))
        row_bytes = decode_hex_row(token)
        dropped = bitmap.set_row(self.row, row_bytes)
        if dropped:
            logging.debug('Dropped %d bytes of row %d in %r', dropped,
                          self.row, self.glyph.name)
        self.row += 1

    def _end_char_without_bitmap(self, args, bitmap):
        logging.warning('Glyph %r has no BITMAP, skipped (line %d)',
                        self.glyph.name, self.lineno)
        self._end_char()

    def _end_char(self):
        glyph = self.glyph
        self.glyph = None
        self.state = State.AWAIT_GLYPH
        return glyph
