import pytest

from fractol.image import Image

IM1_SX = 42
IM1_SY = 42
IM3_SX = 242
IM3_SY = 242


def color_map(x, y, w, h, kind):
    if kind == 2:
        return (y * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)
    return (x * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)


def fill_color_map(image, kind):
    for y in range(image.height):
        for x in range(image.width):
            image.put_pixel(x, y, color_map(x, y, image.width, image.height, kind))


@pytest.mark.parametrize("size", [(IM1_SX, IM1_SY), (IM3_SX, IM3_SY)])
def test_size_line_for_32_bit_images(size):
    image = Image(*size)
    assert image.bits_per_pixel == 32
    assert image.line_length == size[0] * 4
    assert len(image.data) == image.line_length * size[1]


@pytest.mark.parametrize("kind", [1, 2])
@pytest.mark.parametrize("size", [(IM1_SX, IM1_SY), (IM3_SX, IM3_SY)])
def test_color_map_round_trip(size, kind):
    image = Image(*size)
    fill_color_map(image, kind)
    w, h = size
    for y in (0, h // 2, h - 1):
        for x in (0, w // 3, w - 1):
            assert image.get_pixel(x, y) == color_map(x, y, w, h, kind)


@pytest.mark.parametrize("big_endian", [False, True])
def test_color_map_byte_layout(big_endian):
    image = Image(IM1_SX, IM1_SY, 32, big_endian)
    fill_color_map(image, 1)
    opp = image.bits_per_pixel // 8
    for y in (0, 7, IM1_SY - 1):
        for x in (0, 13, IM1_SX - 1):
            color = color_map(x, y, IM1_SX, IM1_SY, 1)
            native = color.to_bytes(4, "little")
            start = y * image.line_length + x * opp
            for dec in range(opp):
                expected = native[opp - 1 - dec] if big_endian else native[dec]
                assert image.data[start + dec] == expected


def test_endian_sample_value():
    little = Image(1, 1, 32, False)
    big = Image(1, 1, 32, True)
    little.put_pixel(0, 0, 0x11223344)
    big.put_pixel(0, 0, 0x11223344)
    assert bytes(little.data) == b"\x44\x33\x22\x11"
    assert bytes(big.data) == b"\x11\x22\x33\x44"


def test_rows_pad_to_32_bits():
    image = Image(3, 2, 24)
    assert image.line_length == 12
    image.put_pixel(2, 1, 0xABCDEF)
    assert list(image.rows()) == [(0, 0, 0), (0, 0, 0xABCDEF)]


def test_pixel_keeps_only_bits_that_fit():
    image = Image(2, 2, 16)
    image.put_pixel(1, 1, 0x123456)
    assert image.get_pixel(1, 1) == 0x3456


def test_fill_sets_every_pixel():
    image = Image(5, 3)
    image.fill(0x00FF80)
    rows = list(image.rows())
    assert len(rows) == 3
    assert all(row == (0x00FF80,) * 5 for row in rows)


@pytest.mark.parametrize("point", [(-1, 0), (0, -1), (IM1_SX, 0), (0, IM1_SY)])
def test_out_of_range_pixel_raises(point):
    image = Image(IM1_SX, IM1_SY)
    with pytest.raises(IndexError):
        image.put_pixel(*point, 0)
    with pytest.raises(IndexError):
        image.get_pixel(*point)


@pytest.mark.parametrize("args", [(0, 4), (4, -1), (4, 4, 12), (4, 4, 64)])
def test_invalid_image_parameters(args):
    with pytest.raises(ValueError):
        Image(*args)