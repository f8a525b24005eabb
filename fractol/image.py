"""Off-screen pixel buffers laid out like a ZPixmap image."""

from __future__ import annotations

from typing import Iterator

_SUPPORTED_DEPTHS = (8, 16, 24, 32)
_LINE_PAD_BITS = 32


class Image:
    """A width x height pixel buffer with padded rows and a fixed byte order.

    Each row holds ``line_length`` bytes: the pixels followed by padding up to
    a 32-bit boundary. A pixel takes ``bits_per_pixel / 8`` bytes, stored most
    significant byte first when ``big_endian`` is true.
    """

    def __init__(
        self,
        width: int,
        height: int,
        bits_per_pixel: int = 32,
        big_endian: bool = False,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        if bits_per_pixel not in _SUPPORTED_DEPTHS:
            raise ValueError(f"unsupported bits per pixel: {bits_per_pixel}")
        self.width = width
        self.height = height
        self.bits_per_pixel = bits_per_pixel
        self.big_endian = bool(big_endian)
        self.bytes_per_pixel = bits_per_pixel // 8
        self.line_length = (
            (width * bits_per_pixel + _LINE_PAD_BITS - 1) // _LINE_PAD_BITS
        ) * (_LINE_PAD_BITS // 8)
        self.data = bytearray(self.line_length * height)

    @property
    def byteorder(self) -> str:
        """The byte order of stored pixels, as ``int.to_bytes`` expects it."""
        return "big" if self.big_endian else "little"

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"pixel ({x}, {y}) outside {self.width}x{self.height} image"
            )
        return y * self.line_length + x * self.bytes_per_pixel

    def _encode(self, color: int) -> bytes:
        mask = (1 << self.bits_per_pixel) - 1
        return (color & mask).to_bytes(self.bytes_per_pixel, self.byteorder)

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store ``color`` at (x, y), keeping only the bits that fit a pixel."""
        offset = self._offset(x, y)
        self.data[offset:offset + self.bytes_per_pixel] = self._encode(color)

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel value stored at (x, y)."""
        offset = self._offset(x, y)
        return int.from_bytes(
            self.data[offset:offset + self.bytes_per_pixel], self.byteorder
        )

    def fill(self, color: int) -> None:
        """Set every pixel to ``color``; row padding is left zeroed."""
        pixels = self._encode(color) * self.width
        row = pixels + bytes(self.line_length - len(pixels))
        self.data[:] = row * self.height

    def rows(self) -> Iterator[tuple[int, ...]]:
        """Yield each row, top to bottom, as a tuple of pixel values."""
        step = self.bytes_per_pixel
        order = self.byteorder
        used = self.width * step
        for start in range(0, len(self.data), self.line_length):
            line = self.data[start:start + used]
            yield tuple(
                int.from_bytes(line[i:i + step], order)
                for i in range(0, used, step)
            )