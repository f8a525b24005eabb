import pytest

from fractol.image import Image
from fractol.xpm import (
    TRANSPARENT,
    XpmError,
    find,
    find_unquoted,
    images_compatible,
    parse_xpm,
    read_xpm_file,
    split_words,
    strip_comments,
    text_color,
    xpm_lines,
)


def test_find_locates_substring():
    assert find("abcdef", "cd", 6) == 2


def test_find_missing_and_too_long():
    assert find("abcdef", "xy", 6) == -1
    assert find("abcdef", "abc", 2) == -1


def test_find_unquoted_skips_quoted_match():
    text = '"a/*b" /*c*/'
    assert find(text, "/*", len(text)) == 2
    assert find_unquoted(text, "/*", len(text)) == 7


def test_find_unquoted_none_outside_quotes():
    text = '"/*"'
    assert find_unquoted(text, "/*", len(text)) == -1


def test_split_words_on_spaces_and_tabs():
    assert split_words(" a\tb  c ") == ["a", "b", "c"]
    assert split_words("a\nb") == ["a\nb"]
    assert split_words("   ") == []


def test_strip_comments_block():
    text = "x /* c */ y"
    result = strip_comments(text)
    assert result == "x" + " " * 9 + "y"
    assert len(result) == len(text)


def test_strip_comments_line():
    text = "a // b\nc"
    result = strip_comments(text)
    assert result == "a" + " " * 6 + "c"
    assert len(result) == len(text)


def test_strip_comments_keeps_quoted_markers():
    text = '"/*" x "//"'
    assert strip_comments(text) == text


def test_xpm_lines_extracts_quoted_strings():
    assert list(xpm_lines('a "one", "two" b "open')) == ["one", "two"]


def test_text_color_hex_and_names():
    assert text_color("#FF0000") == 0xFF0000
    assert text_color("red") == 0xFF0000
    assert text_color("RED") == 0xFF0000
    assert text_color("light", "blue") == 0xADD8E6
    assert text_color("none") == -1


def test_text_color_unknown_is_zero():
    assert text_color("nosuchcolour") == 0
    assert text_color("red", "extra") == 0
    assert text_color("#") == 0


def test_parse_xpm_pixels():
    image = parse_xpm(["2 2 2 1", "a c #FF0000", "b c None", "ab", "ba"])
    assert image.size == (2, 2)
    assert image.get_pixel(0, 0) == 0xFF0000
    assert image.get_pixel(1, 0) == TRANSPARENT
    assert image.get_pixel(0, 1) == TRANSPARENT
    assert image.get_pixel(1, 1) == 0xFF0000


def test_parse_xpm_big_endian_bytes():
    image = parse_xpm(["1 1 1 1", "a c #FF0000", "a"], 32, True)
    assert bytes(image.data[:4]) == bytes([0x00, 0xFF, 0x00, 0x00])
    little = parse_xpm(["1 1 1 1", "a c #FF0000", "a"], 32, False)
    assert bytes(little.data[:4]) == bytes([0x00, 0x00, 0xFF, 0x00])


def test_parse_xpm_short_codes_later_definition_wins():
    image = parse_xpm(["1 1 2 1", "a c #000001", "a c #000002", "a"])
    assert image.get_pixel(0, 0) == 2


def test_parse_xpm_long_codes_first_definition_wins():
    image = parse_xpm(["1 1 2 3", "abc c #000001", "abc c #000002", "abc"])
    assert image.get_pixel(0, 0) == 1


def test_parse_xpm_undefined_code_is_zero():
    image = parse_xpm(["2 1 1 1", "a c #123456", "az"])
    assert image.get_pixel(0, 0) == 0x123456
    assert image.get_pixel(1, 0) == 0


@pytest.mark.parametrize(
    "lines",
    [
        [],
        ["2 2 1"],
        ["0 2 1 1", "a c #FFFFFF", "aa", "aa"],
        ["2 2 1 1", "a c #FFFFFF", "aa"],
        ["1 1 1 1", "a s red", "a"],
        ["1 1 1 1", "a c", "a"],
        ["1 1 2 1", "a c #FFFFFF"],
    ],
)
def test_parse_xpm_errors(lines):
    with pytest.raises(XpmError):
        parse_xpm(lines)


def test_read_xpm_file(tmp_path):
    path = tmp_path / "img.xpm"
    path.write_text(
        "/* XPM */\n"
        "static char *img[] = {\n"
        "// width height colours chars\n"
        '"3 2 2 1",\n'
        '". c #00FF00",\n'
        '"x c blue",\n'
        '"..x",\n'
        '"x.."\n'
        "};\n"
    )
    image = read_xpm_file(path)
    assert image.size == (3, 2)
    assert list(image.rows()) == [
        (0x00FF00, 0x00FF00, 0x0000FF),
        (0x0000FF, 0x00FF00, 0x00FF00),
    ]


def test_read_xpm_file_missing(tmp_path):
    with pytest.raises(OSError):
        read_xpm_file(tmp_path / "absent.xpm")


def test_images_compatible():
    assert images_compatible(Image(4, 3), Image(4, 3))
    assert not images_compatible(Image(4, 3), Image(4, 3, 16))
    assert not images_compatible(Image(4, 3), Image(3, 4))
    assert not images_compatible(Image(4, 3), Image(4, 3, 32, True))