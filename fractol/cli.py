"""Command line entry point: draw a Mandelbrot or Julia set in a window."""

from __future__ import annotations

import sys
from typing import Any, Optional, Sequence

from fractol.fractal import Fractal, Key, Kind
from fractol.image import Image
from fractol.numparse import ParameterError, parse_parameter
from fractol.textfmt import printf, strncmp

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

USAGE = (
    'Introduce un formato válido:\n\t"./a.out mandelbrotor '
    '\n\t"./a.out julia <valor_real> <valor_imaginario>"\n'
)
STARTUP_ERROR = "Falló la reserva de memoria al iniciar X-server"


class UsageError(ValueError):
    """Raised when the arguments name neither form the program accepts."""

    def __init__(self) -> None:
        super().__init__(USAGE)


def parse_args(argv: Sequence[str]) -> tuple[str, Kind, complex]:
    """Return the window title, the set to draw and the Julia constant.

    Accepted forms are ``mandelbrot`` and ``julia <real> <imaginary>``; the
    name is matched on its first 10 (mandelbrot) or 5 (julia) characters.
    """
    args = list(argv)
    if len(args) == 1 and strncmp(args[0], "mandelbrot", 10) == 0:
        return args[0], Kind.MANDELBROT, 0j
    if len(args) == 3 and strncmp(args[0], "julia", 5) == 0:
        c = complex(parse_parameter(args[1]), parse_parameter(args[2]))
        return args[0], Kind.JULIA, c
    raise UsageError()


def _present(pygame: Any, screen: Any, image: Image) -> None:
    data = image.data
    rgb = bytearray(image.width * image.height * 3)
    rgb[0::3] = data[2::4]
    rgb[1::3] = data[1::4]
    rgb[2::3] = data[0::4]
    surface = pygame.image.frombuffer(bytes(rgb), image.size, "RGB")
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


def _run(fractal: Fractal, title: str) -> int:
    import pygame

    try:
        pygame.init()
        screen = pygame.display.set_mode((fractal.width, fractal.height))
    except pygame.error as error:
        print(f"{STARTUP_ERROR}: {error}", file=sys.stderr)
        pygame.quit()
        return EXIT_FAILURE
    try:
        pygame.display.set_caption(title)
        fractal.render()
        _present(pygame, screen, fractal.image)
        while True:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                return EXIT_SUCCESS
            if event.type == pygame.KEYDOWN:
                if not fractal.handle_key(_keysym(pygame, event)):
                    return EXIT_SUCCESS
            elif event.type == pygame.MOUSEBUTTONDOWN:
                fractal.handle_mouse(event.button, *event.pos)
            else:
                continue
            _present(pygame, screen, fractal.image)
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse the arguments, then show the chosen fractal until the window closes."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        title, kind, c = parse_args(args)
    except UsageError:
        printf(USAGE)
        return EXIT_FAILURE
    except ParameterError as error:
        printf("%s\n", str(error))
        return EXIT_FAILURE
    return _run(Fractal(kind, c), title)


if __name__ == "__main__":
    sys.exit(main())