# fractol

An interactive explorer for the Mandelbrot set and Julia sets, drawn in a
pygame window. It also has a plotter for parabolas, an XPM image reader and a
small in-memory pixel display with event hooks.

## Installation

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## Exploring fractals

Start the Mandelbrot set:

    fractol mandelbrot

Start a Julia set. Give the real and imaginary parts of the constant `c`:

    fractol julia -0.8 0.156

Each part must be a plain decimal number between -2 and 2. Leading whitespace
and `+`/`-` signs are accepted. Exponents, a second `.`, trailing characters
and numbers with no digits are rejected: the program prints
`Introduce un numero real válido entre -2 y 2` and exits with status 1.

Only the first characters of the set's name are compared (10 for
`mandelbrot`, 5 for `julia`). The name is also used as the window title. Any
other arguments print a usage message, and the program exits with status 1. If
the window cannot be opened, an error goes to standard error and the exit
status is 1.

The window is 650 × 650 pixels. It starts at 101 iterations, with no pan and a
zoom of 1.

### Controls

| Input               | Effect                                                              |
|---------------------|---------------------------------------------------------------------|
| Arrow keys          | Pan the view by half the current zoom                               |
| `+`                 | Add 10 iterations and print the new count                           |
| `-`                 | Remove 10 iterations and print the new count (only while above 1)   |
| Mouse wheel up      | Zoom in (×0.95)                                                     |
| Mouse wheel down    | Zoom out (×1.05)                                                    |
| Left click (Julia)  | Use the point under the cursor as the new constant `c`              |
| Escape, close box   | Quit with status 0                                                  |

Points that stay within radius 2 for every iteration are drawn green
(`0x66FF66`). Points that escape are shaded on a ramp from black to red by the
step at which they escape.

## Plotting a parabola

    fractol-curves 1 1 1

This draws `y = a·x² + b·x + c` in red over `x` in [-5, 5], in an 800 × 800
window. The three arguments are `a`, `b` and `c`. Each is read as the longest
number at its start, and text that does not start with a number counts as 0.
With fewer than three arguments, the command prints
`Se requieren al menos tres argumentos.` and exits with status 1.

- Arrow keys pan the curve by 50 pixels.
- `+` and wheel up zoom in (×1.1).
- `-` and wheel down zoom out (×0.9).
- Other clicks print where they happened.
- Escape or the close box ends the program, with status 1.

## Using it as a library

### Fractals

    from fractol.fractal import Fractal, Kind

    julia = Fractal(Kind.JULIA, c=complex(-0.8, 0.156), width=80, height=80)
    image = julia.render()

- `Fractal.point(x, y)` returns the starting `(z, c)` for a pixel.
- `Fractal.escape_time(x, y)` returns the step at which the orbit escapes, or
  `None` if it stays bounded.
- `Fractal.render()` fills `Fractal.image` and returns it.
- `Fractal.handle_key(key)` applies one key press and redraws. It returns
  `False` for Escape.
- `Fractal.handle_mouse(button, x, y)` applies one click or wheel step and
  redraws.
- `Key` and `Button` name the keys and buttons these methods react to.
- `map_range` and `escape_color` are the scaling and shading helpers used by
  the renderer.

### Parameters and text

- `fractol.numparse.parse_parameter(text)` parses a Julia parameter. It raises
  `ParameterError`, a `ValueError`, when the text is malformed or out of range.
- `fractol.textfmt.cformat(fmt, *args)` formats text with `%s %c %d %i %u %x
  %X %p %%`. `printf` does the same and writes the result to standard output.
- `fractol.textfmt` also has `strncmp`, `to_base`, `format_pointer` and
  `putstr_fd`.

### Images and colours

- `fractol.image.Image(width, height, bits_per_pixel=32, big_endian=False)` is
  a pixel buffer with rows padded to 32 bits. It has `put_pixel`, `get_pixel`,
  `fill` and `rows`.
- `fractol.colors.lookup_color(name)` resolves X colour names such as
  `"light blue"` or `"gray50"`, ignoring case. `"none"` gives -1, and unknown
  names raise `KeyError`.
- `Palette` holds the fractal colours.
- `mask_shifts` and `good_color` convert `0xRRGGBB` to pixel values for
  visuals shallower than 24 bits.

### XPM pictures

    from fractol.xpm import read_xpm_file

    image = read_xpm_file("picture.xpm")

`read_xpm_file` strips comments and reads the quoted strings into a 32-bit
little-endian `Image`. `parse_xpm(lines, bits_per_pixel, big_endian)` takes
the strings directly. Colours may be given as `#RRGGBB` or as a name:

- transparent (`None`) pixels are stored as `0xFF000000`;
- pixel codes with no colour definition become 0;
- malformed or truncated data raises `XpmError`.

### Curves

`fractol.curves.parabola_pixels(view, width, height)` yields the pixels of the
parabola described by a `CurveView`. `elliptic_pixels(a, b, c, x_min, x_max,
width, height)` yields the pixels of `y² = a·x³ + b·x + c`.

### In-memory display

`fractol.window.Display` keeps windows and a queue of events in memory.

- `Display.new_window` creates a `Window`.
- `Display.post` queues an event.
- `Display.loop` delivers events to each window's hooks, and `Display.loop_end`
  stops it.
- `Window` offers `hook`, `key_hook`, `mouse_hook`, `expose_hook`,
  `pixel_put`, `put_image`, `clear`, `string_put`, `pixel` and `destroy`.

Without a loop hook, `loop` blocks until an event is posted.

## What it does not do

- `fractol.window.Display` draws nothing on a real screen. Its windows are
  framebuffers in memory, and `string_put` only records the text and its
  position. The two commands use pygame directly for their windows.
- The elliptic curve is available only through `elliptic_pixels`. No command
  draws it.
- Neither command can save a rendered image to a file.