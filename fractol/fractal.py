"""Mandelbrot and Julia escape-time rendering with keyboard and mouse control."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional

from fractol.colors import Palette
from fractol.image import Image
from fractol.textfmt import printf

WIN_WIDTH = 650
WIN_HEIGHT = 650
DEFAULT_ITERATIONS = 101
ITERATION_STEP = 10
PAN_FACTOR = 0.5
ZOOM_OUT = 1.05
ZOOM_IN = 0.95
_ESCAPE_RADIUS_SQUARED = 4.0


class Kind(str, Enum):
    """Which set is drawn."""

    MANDELBROT = "mandelbrot"
    JULIA = "julia"


class Key(IntEnum):
    """Key symbols the viewer reacts to."""

    ESCAPE = 0xFF1B
    LEFT = 0xFF51
    UP = 0xFF52
    RIGHT = 0xFF53
    DOWN = 0xFF54
    PLUS = 0x2B
    MINUS = 0x2D


class Button(IntEnum):
    """Mouse buttons; 4 and 5 are the wheel."""

    LEFT = 1
    MIDDLE = 2
    RIGHT = 3
    WHEEL_UP = 4
    WHEEL_DOWN = 5


def map_range(value: float, new_min: float, new_max: float, old_max: float) -> float:
    """Scale ``value`` from [0, old_max] linearly onto [new_min, new_max]."""
    return new_min + value * (new_max - new_min) / old_max


def escape_color(step: int, iterations: int) -> int:
    """Colour of a point that escaped at ``step``: a ramp from black to red."""
    return int(map_range(step, Palette.BLACK, Palette.RED, iterations))


@dataclass
class Fractal:
    """View state of a fractal and the image it renders into."""

    kind: Kind
    c: complex = 0j
    width: int = WIN_WIDTH
    height: int = WIN_HEIGHT
    iterations: int = DEFAULT_ITERATIONS
    shift_x: float = 0.0
    shift_y: float = 0.0
    zoom: float = 1.0
    image: Image = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.kind = Kind(self.kind)
        self.image = Image(self.width, self.height)

    def _plane(self, x: float, y: float, y_span: float) -> complex:
        real = map_range(x, -2, 2, self.width) * self.zoom + self.shift_x
        imag = map_range(y, 2, -2, y_span) * self.zoom + self.shift_y
        return complex(real, imag)

    def point(self, x: int, y: int) -> tuple[complex, complex]:
        """Return the starting ``(z, c)`` for the pixel at (x, y)."""
        here = self._plane(x, y, self.height)
        if self.kind is Kind.MANDELBROT:
            return 0j, here
        return here, self.c

    def escape_time(self, x: int, y: int) -> Optional[int]:
        """Return the step at which the orbit leaves radius 2, or None if it stays."""
        z, c = self.point(x, y)
        zr, zi = z.real, z.imag
        cr, ci = c.real, c.imag
        for step in range(self.iterations):
            zr, zi = zr * zr - zi * zi + cr, 2 * zr * zi + ci
            if zr * zr + zi * zi > _ESCAPE_RADIUS_SQUARED:
                return step
        return None

    def render(self) -> Image:
        """Draw every pixel into ``self.image`` and return it."""
        for y in range(self.height):
            for x in range(self.width):
                step = self.escape_time(x, y)
                if step is None:
                    color = Palette.NEON_FOREST
                else:
                    color = escape_color(step, self.iterations)
                self.image.put_pixel(x, y, color)
        return self.image

    def handle_key(self, key: int) -> bool:
        """Apply a key press and redraw; return False when Escape asks to quit."""
        if key == Key.ESCAPE:
            return False
        if key == Key.LEFT:
            self.shift_x += PAN_FACTOR * self.zoom
        elif key == Key.RIGHT:
            self.shift_x -= PAN_FACTOR * self.zoom
        elif key == Key.UP:
            self.shift_y -= PAN_FACTOR * self.zoom
        elif key == Key.DOWN:
            self.shift_y += PAN_FACTOR * self.zoom
        elif key == Key.PLUS:
            self.iterations += ITERATION_STEP
            printf("%d\n", self.iterations)
        elif key == Key.MINUS and self.iterations > 1:
            self.iterations -= ITERATION_STEP
            printf("%d\n", self.iterations)
        self.render()
        return True

    def handle_mouse(self, button: int, x: int, y: int) -> None:
        """Apply a mouse press and redraw.

        A left click on a Julia set picks a new constant from the clicked
        point; the wheel zooms.
        """
        if button == Button.LEFT:
            if self.kind is Kind.JULIA:
                self.c = self._plane(x, y, self.width)
        elif button == Button.WHEEL_DOWN:
            self.zoom *= ZOOM_OUT
        elif button == Button.WHEEL_UP:
            self.zoom *= ZOOM_IN
        self.render()