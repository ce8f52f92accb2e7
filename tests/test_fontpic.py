import logging

import png

import fontpic
from packed_bitmap import PackedBitmap


def read_png(path):
    width, height, rows, info = png.Reader(filename=str(path)).read()
    return width, height, [list(row) for row in rows], info


def test_grid_layout(tmp_path):
    path = tmp_path / 'font.png'
    picture = fontpic.FontPicture()
    assert picture.initialize(str(path), 20, 4, 3, 'test')
    picture.finalize()

    width, height, rows, info = read_png(path)
    assert width == 16 * 5 + 1
    assert height == 2 * 4 + 1
    assert len(info['palette']) == len(fontpic.PALETTE)
    assert rows[0] == [fontpic.GRID] * width
    assert rows[4] == [fontpic.GRID] * width
    assert rows[1][0] == fontpic.GRID
    assert rows[1][5] == fontpic.GRID
    assert rows[1][1] == fontpic.BACKGROUND


def test_add_draws_glyph(tmp_path):
    path = tmp_path / 'font.png'
    picture = fontpic.FontPicture()
    picture.initialize(str(path), 2, 8, 3, 'test')

    bitmap = PackedBitmap(8, 3)
    bitmap.set_row(0, b'\x80')
    picture.add(bitmap, 8, 3, 0, 0, 65, False, False)
    # Second cell, shifted down one row
    picture.add(bitmap, 8, 3, 0, 1, 66, True, False)
    picture.finalize()

    width, height, rows, info = read_png(path)
    assert (width, height) == (19, 5)
    assert rows[1][1] == fontpic.INK
    assert rows[1][2] == fontpic.BACKGROUND
    assert rows[1][10] == fontpic.BACKGROUND
    assert rows[2][10] == fontpic.INK_SHIFTED


def test_overflow_ink(tmp_path):
    path = tmp_path / 'font.png'
    picture = fontpic.FontPicture()
    picture.initialize(str(path), 1, 8, 1)
    bitmap = PackedBitmap(8, 1)
    bitmap.set_row(0, b'\x01')
    picture.add(bitmap, 8, 1, 0, 0, 65, True, True)
    picture.finalize()

    width, height, rows, info = read_png(path)
    assert rows[1][8] == fontpic.INK_OVERFLOW


def test_extra_glyphs_are_ignored(tmp_path):
    path = tmp_path / 'font.png'
    picture = fontpic.FontPicture()
    picture.initialize(str(path), 1, 8, 1)
    bitmap = PackedBitmap(8, 1)
    picture.add(bitmap, 8, 1, 0, 0, 65, False, False)
    picture.add(bitmap, 8, 1, 0, 0, 66, False, False)
    picture.finalize()
    assert path.exists()


def test_no_path_disables_preview():
    picture = fontpic.FontPicture()
    assert not picture.initialize(None, 1, 8, 8)
    assert not picture.active
    picture.add(PackedBitmap(8, 8), 8, 8, 0, 0, 65, False, False)
    picture.finalize()


def test_initialize_failure_is_not_fatal(tmp_path, caplog):
    path = tmp_path / 'missing' / 'font.png'
    picture = fontpic.FontPicture()
    with caplog.at_level(logging.WARNING):
        assert not picture.initialize(str(path), 1, 8, 8)
    assert 'Cannot create preview' in caplog.text
    picture.add(PackedBitmap(8, 8), 8, 8, 0, 0, 65, False, False)
    picture.finalize()
    assert not path.exists()


def test_clear_removes_unwritten_image(tmp_path):
    path = tmp_path / 'font.png'
    picture = fontpic.FontPicture()
    assert picture.initialize(str(path), 1, 8, 8)
    assert path.exists()
    picture.clear()
    assert not path.exists()
