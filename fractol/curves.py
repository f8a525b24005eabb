"""Plotting a parabola and an elliptic curve onto a pixel grid."""

from __future__ import annotations

import math
import re
import sys
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Sequence

from fractol.fractal import Button, Key
from fractol.image import Image

WIN_WIDTH = 800
WIN_HEIGHT = 800
CURVE_COLOR = 0xFF0000
STEP = 0.01
PAN_STEP = 50
ZOOM_IN = 1.1
ZOOM_OUT = 0.9
TITLE = "Parabolic try"

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:infinity|inf|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))",
    re.IGNORECASE,
)


def _strtod(text: str) -> float:
    """Read the longest leading decimal number of ``text``; 0.0 if there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _trunc(value: float) -> Optional[int]:
    """Truncate towards zero; non-finite values have no pixel."""
    return int(value) if math.isfinite(value) else None


def _sweep(start: float, stop: float) -> Iterator[float]:
    x = start
    while x <= stop:
        yield x
        x += STEP


@dataclass
class CurveView:
    """Coefficients of y = a*x^2 + b*x + c and how the plot is panned and zoomed."""

    a: float = 1.0
    b: float = 1.0
    c: float = 1.0
    x_min: float = -5.0
    x_max: float = 5.0
    shift_x: float = 0.0
    shift_y: float = 0.0
    zoom: float = 1.0

    def handle_key(self, key: int) -> bool:
        """Pan or zoom for a released key; return False when Escape asks to quit."""
        if key == Key.ESCAPE:
            print(f"The {key}d key (ESC) has been pressed\n")
            return False
        if key == Key.LEFT:
            self.shift_x -= PAN_STEP
        elif key == Key.RIGHT:
            self.shift_x += PAN_STEP
        elif key == Key.UP:
            self.shift_y -= PAN_STEP
        elif key == Key.DOWN:
            self.shift_y += PAN_STEP
        elif key == Key.PLUS:
            self.zoom *= ZOOM_IN
        elif key == Key.MINUS:
            self.zoom *= ZOOM_OUT
        print(f"The {key} key has been pressed\n")
        return True

    def handle_mouse(self, button: int, x: int, y: int) -> None:
        """Report a click; the wheel zooms in (up) and out (down)."""
        if button == Button.LEFT:
            print(f"Left click at ({x}, {y})")
        elif button == Button.RIGHT:
            print(f"Right click at ({x}, {y})")
        elif button == Button.WHEEL_UP:
            print(f"Zoom in at ({x}, {y})")
            self.zoom *= ZOOM_IN
        elif button == Button.WHEEL_DOWN:
            print(f"Zoom out at ({x}, {y})")
            self.zoom *= ZOOM_OUT
        else:
            print(f"Mouse button {button} clicked at ({x}, {y})")
        print(f"The {button} key has been pressed\n")


def parabola_pixels(
    view: CurveView, width: int = WIN_WIDTH, height: int = WIN_HEIGHT
) -> Iterator[tuple[int, int]]:
    """Yield the on-screen pixels of the view's parabola, sampled every 0.01."""
    span = view.x_max - view.x_min
    scale_x = width / span
    scale_y = height / span
    for x in _sweep(view.x_min, view.x_max):
        y = view.a * x ** 2 + view.b * x + view.c
        column = _trunc((x - view.x_min) * scale_x)
        row = _trunc(height // 2 - y * scale_y)
        if column is None or row is None:
            continue
        screen_x = _trunc(column * view.zoom + view.shift_x)
        screen_y = _trunc(row * view.zoom + view.shift_y)
        if screen_x is None or screen_y is None:
            continue
        if 0 <= screen_x < width and 0 <= screen_y < height:
            yield screen_x, screen_y


def elliptic_pixels(
    a: float = 1.0,
    b: float = 0.0,
    c: float = 7.0,
    x_min: int = -20,
    x_max: int = 20,
    width: int = WIN_WIDTH,
    height: int = WIN_HEIGHT,
) -> Iterator[tuple[int, int]]:
    """Yield the on-screen pixels of y^2 = a*x^3 + b*x + c.

    The scale is the whole number of pixels per unit, so the plot may not
    fill the window. For each sampled x the upper branch comes first.
    """
    span = x_max - x_min
    scale_x = width // span
    scale_y = height // span
    for x in _sweep(x_min, x_max):
        discriminant = a * x ** 3 + b * x + c
        if not discriminant >= 0:
            continue
        root = math.sqrt(discriminant)
        screen_x = _trunc((x - x_min) * scale_x)
        if screen_x is None or not 0 <= screen_x < width:
            continue
        for y in (root, -root):
            screen_y = _trunc(height // 2 - y * scale_y)
            if screen_y is not None and 0 <= screen_y < height:
                yield screen_x, screen_y


def _draw(view: CurveView, image: Image) -> None:
    for x, y in parabola_pixels(view, image.width, image.height):
        image.put_pixel(x, y, CURVE_COLOR)


def _present(pygame: Any, screen: Any, image: Image) -> None:
    data = image.data
    rgb = bytearray(image.width * image.height * 3)
    rgb[0::3] = data[2::4]
    rgb[1::3] = data[1::4]
    rgb[2::3] = data[0::4]
    surface = pygame.image.frombuffer(bytes(rgb), image.size, "RGB")
    screen.fill((0, 0, 0))
    screen.blit(surface, (0, 0))
    pygame.display.flip()


def _keysym(pygame: Any, event: Any) -> int:
    special = {
        pygame.K_ESCAPE: Key.ESCAPE,
        pygame.K_LEFT: Key.LEFT,
        pygame.K_RIGHT: Key.RIGHT,
        pygame.K_UP: Key.UP,
        pygame.K_DOWN: Key.DOWN,
        pygame.K_KP_PLUS: Key.PLUS,
        pygame.K_KP_MINUS: Key.MINUS,
    }
    if event.key in special:
        return int(special[event.key])
    if getattr(event, "unicode", "") == "+":
        return int(Key.PLUS)
    return int(event.key)


def _show(view: CurveView) -> int:
    import pygame

    try:
        pygame.init()
        screen = pygame.display.set_mode((WIN_WIDTH, WIN_HEIGHT))
    except pygame.error:
        print("Error: No se pudo crear la ventana.")
        pygame.quit()
        return 1
    try:
        pygame.display.set_caption(TITLE)
        image = Image(WIN_WIDTH, WIN_HEIGHT)
        print(
            f"Line_len {image.line_length} <-> SIDE_LEN {WIN_HEIGHT}\n"
            f"bpp {image.bits_per_pixel}\n"
            f"endian {int(image.big_endian)}"
        )
        _draw(view, image)
        _present(pygame, screen, image)
        while True:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                print("Cerrando la ventana...")
                return 1
            if event.type == pygame.KEYUP:
                if not view.handle_key(_keysym(pygame, event)):
                    return 1
            elif event.type == pygame.MOUSEBUTTONDOWN:
                view.handle_mouse(event.button, *event.pos)
            else:
                continue
            _draw(view, image)
            _present(pygame, screen, image)
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Plot y = a*x^2 + b*x + c from the three coefficients given as arguments."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 3:
        print("Se requieren al menos tres argumentos.")
        return 1
    view = CurveView(a=_strtod(args[0]), b=_strtod(args[1]), c=_strtod(args[2]))
    return _show(view)


if __name__ == "__main__":
    sys.exit(main())