import pytest

from fractol.colors import Palette
from fractol.fractal import (
    Button,
    Fractal,
    Key,
    Kind,
    escape_color,
    map_range,
)


def small(kind=Kind.MANDELBROT, **kwargs):
    kwargs.setdefault("width", 8)
    kwargs.setdefault("height", 8)
    kwargs.setdefault("iterations", 5)
    return Fractal(kind, **kwargs)


def test_map_range_endpoints():
    assert map_range(0, -2, 2, 650) == -2
    assert map_range(650, -2, 2, 650) == 2
    assert map_range(650, 2, -2, 650) == -2


def test_escape_color_ramp():
    assert escape_color(0, 101) == Palette.BLACK
    assert escape_color(101, 101) == Palette.RED
    colors = [escape_color(step, 101) for step in range(101)]
    assert colors == sorted(colors)
    assert all(color < Palette.RED for color in colors)


def test_defaults_match_window():
    fractal = Fractal(Kind.MANDELBROT)
    assert (fractal.width, fractal.height) == (650, 650)
    assert fractal.iterations == 101
    assert fractal.image.size == (650, 650)


def test_kind_from_name():
    assert Fractal("julia", width=4, height=4).kind is Kind.JULIA


def test_mandelbrot_point_starts_at_zero():
    fractal = small()
    z, c = fractal.point(0, 0)
    assert z == 0
    assert c == complex(-2, 2)


def test_julia_point_uses_constant():
    fractal = small(Kind.JULIA, c=0.25 - 0.5j)
    z, c = fractal.point(0, 0)
    assert z == complex(-2, 2)
    assert c == 0.25 - 0.5j


def test_centre_of_mandelbrot_never_escapes():
    fractal = small()
    assert fractal.point(4, 4)[1] == 0
    assert fractal.escape_time(4, 4) is None


def test_corner_escapes_immediately():
    assert small().escape_time(0, 0) == 0


def test_render_colours():
    fractal = small()
    image = fractal.render()
    assert image.get_pixel(4, 4) == Palette.NEON_FOREST
    assert image.get_pixel(0, 0) == escape_color(0, fractal.iterations)


def test_arrow_keys_round_trip():
    fractal = small()
    assert fractal.handle_key(Key.LEFT) is True
    assert fractal.shift_x == 0.5 * fractal.zoom
    fractal.handle_key(Key.RIGHT)
    assert fractal.shift_x == 0
    fractal.handle_key(Key.UP)
    assert fractal.shift_y == -0.5 * fractal.zoom
    fractal.handle_key(Key.DOWN)
    assert fractal.shift_y == 0


def test_plus_and_minus_change_iterations(capsys):
    fractal = small(iterations=21)
    fractal.handle_key(Key.PLUS)
    assert fractal.iterations == 31
    fractal.handle_key(Key.MINUS)
    assert fractal.iterations == 21
    assert capsys.readouterr().out == "31\n21\n"


def test_minus_stops_at_one(capsys):
    fractal = small(iterations=1)
    fractal.handle_key(Key.MINUS)
    assert fractal.iterations == 1
    assert capsys.readouterr().out == ""


def test_escape_asks_to_quit():
    fractal = small()
    assert fractal.handle_key(Key.ESCAPE) is False
    assert (fractal.shift_x, fractal.shift_y) == (0, 0)


def test_wheel_zoom():
    fractal = small()
    fractal.handle_mouse(Button.WHEEL_DOWN, 0, 0)
    assert fractal.zoom == pytest.approx(1.05)
    fractal.handle_mouse(Button.WHEEL_UP, 0, 0)
    assert fractal.zoom == pytest.approx(1.05 * 0.95)


def test_click_picks_julia_constant():
    fractal = small(Kind.JULIA, c=0.3 + 0.5j)
    fractal.handle_mouse(Button.LEFT, 2, 6)
    assert fractal.c == fractal.point(2, 6)[0]
    assert fractal.escape_time(4, 4) == fractal.escape_time(4, 4)


def test_click_leaves_mandelbrot_constant():
    fractal = small(c=0.3 + 0.5j)
    fractal.handle_mouse(Button.LEFT, 2, 6)
    assert fractal.c == 0.3 + 0.5j
    assert fractal.zoom == 1