import pytest

from solong.canvas import Canvas, convert_color, rgb_shifts
from solong.xpm import TRANSPARENT, XpmImage

WIN1_SX = 242
WIN1_SY = 242
IM1_SX = 42
IM1_SY = 42


def _map_color(x, y, w, h, kind):
    if kind == 2:
        return (y * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)
    return (x * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)


@pytest.mark.parametrize(
    "width,height,kind",
    [(IM1_SX, IM1_SY, 1), (WIN1_SX, WIN1_SY, 1), (WIN1_SX, WIN1_SY, 2)],
)
def test_color_map_fill_reads_back(width, height, kind):
    canvas = Canvas(width, height)
    for y in range(height):
        for x in range(width):
            canvas.put_pixel(x, y, convert_color(_map_color(x, y, width, height, kind), 24, ()))
    for y in range(height):
        for x in range(width):
            assert canvas.get_pixel(x, y) == _map_color(x, y, width, height, kind)


def test_image_layout():
    canvas = Canvas(IM1_SX, IM1_SY)
    assert canvas.bits_per_pixel == 32
    assert canvas.line_size == IM1_SX * 4
    assert canvas.endian == 0
    assert len(canvas.to_bytes()) == IM1_SX * IM1_SY * 4


def test_little_endian_bytes():
    canvas = Canvas(2, 1)
    canvas.put_pixel(1, 0, 0x11223344)
    assert canvas.to_bytes() == b"\x00\x00\x00\x00\x44\x33\x22\x11"


def test_new_canvas_is_black():
    canvas = Canvas(3, 3)
    assert set(canvas.to_bytes()) == {0}


def test_transparent_pixel_skipped():
    canvas = Canvas(2, 2)
    canvas.put_pixel(0, 0, 0x00FF99FF)
    assert canvas.put_pixel(0, 0, TRANSPARENT) is False
    assert canvas.get_pixel(0, 0) == 0x00FF99FF


def test_out_of_bounds_ignored():
    canvas = Canvas(2, 2)
    assert canvas.put_pixel(2, 0, 0x00FFFF) is False
    assert canvas.put_pixel(0, -1, 0x00FFFF) is False
    assert set(canvas.to_bytes()) == {0}


def test_get_pixel_out_of_bounds():
    with pytest.raises(IndexError):
        Canvas(2, 2).get_pixel(2, 2)


def test_invalid_size():
    with pytest.raises(ValueError):
        Canvas(0, 5)


def test_blit_offsets_and_transparency():
    canvas = Canvas(4, 4)
    canvas.put_pixel(2, 1, 0x00FFFF)
    image = XpmImage(2, 2, ((0xFF0000, 0x0000FF), (TRANSPARENT, 0x00FF00)))
    canvas.blit(image, 1, 1)
    assert canvas.get_pixel(1, 1) == 0xFF0000
    assert canvas.get_pixel(2, 1) == 0x0000FF
    assert canvas.get_pixel(1, 2) == 0
    assert canvas.get_pixel(2, 2) == 0x00FF00


def test_blit_clips_at_edges():
    canvas = Canvas(2, 2)
    image = XpmImage(2, 2, ((1, 2), (3, 4)))
    canvas.blit(image, 1, 1)
    assert canvas.get_pixel(1, 1) == 1
    assert canvas.get_pixel(0, 0) == 0


def test_rgb_shifts_truecolor():
    assert rgb_shifts(0xFF0000, 0x00FF00, 0x0000FF) == (16, 8, 8, 8, 0, 8)


def test_rgb_shifts_565():
    assert rgb_shifts(0xF800, 0x07E0, 0x001F) == (11, 5, 5, 6, 0, 5)


def test_rgb_shifts_zero_mask():
    with pytest.raises(ValueError):
        rgb_shifts(0, 0x00FF00, 0x0000FF)


def test_convert_color_deep_display_is_identity():
    assert convert_color(0xFF99FF, 24, rgb_shifts(0xFF0000, 0x00FF00, 0x0000FF)) == 0xFF99FF


def test_convert_color_565():
    shifts = rgb_shifts(0xF800, 0x07E0, 0x001F)
    assert convert_color(0xFFFFFF, 16, shifts) == 0xFFFF
    assert convert_color(0xFF0000, 16, shifts) == 0xF800
    assert convert_color(0x000000, 16, shifts) == 0


def test_convert_color_truecolor_masks_round_trip():
    shifts = rgb_shifts(0xFF0000, 0x00FF00, 0x0000FF)
    assert convert_color(0x00FFFF, 16, shifts) == 0x00FFFF