"""Framebuffer: 64x32 monochrome pixel grid with XOR sprite drawing."""

from __future__ import annotations

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32


class Framebuffer:
    """Row-major boolean pixel grid.

    Mutated only by ``clear``, ``fill`` and ``draw_sprite``.
    """

    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT) -> None:
        self.width = width
        self.height = height
        self._pixels: list[bool] = [False] * (width * height)

    def get(self, x: int, y: int) -> bool:
        """Return the pixel at (x, y). Coordinates wrap."""
        return self._pixels[(y % self.height) * self.width + (x % self.width)]

    def clear(self) -> None:
        """Unlight every pixel."""
        for i in range(len(self._pixels)):
            self._pixels[i] = False

    def fill(self) -> None:
        """Light every pixel."""
        for i in range(len(self._pixels)):
            self._pixels[i] = True

    def draw_sprite(self, x: int, y: int, sprite: bytes) -> bool:
        """XOR a sprite onto the display.

        Each byte of `sprite` is one 8-pixel row, most significant bit
        leftmost. Both the origin and every pixel past an edge wrap around
        the screen.

        Args:
            x: Column of the sprite's top-left corner.
            y: Row of the sprite's top-left corner.
            sprite: Sprite rows.

        Returns:
            True if any lit pixel was turned off (collision).
        """
        collision = False
        width = self.width
        height = self.height
        pixels = self._pixels
        for row, bits in enumerate(sprite):
            py = (y + row) % height
            for col in range(8):
                if not bits & (0x80 >> col):
                    continue
                idx = py * width + (x + col) % width
                if pixels[idx]:
                    collision = True
                pixels[idx] = not pixels[idx]
        return collision

    def rows(self) -> tuple[tuple[bool, ...], ...]:
        """Return a read-only copy of the grid, one tuple per row."""
        w = self.width
        return tuple(
            tuple(self._pixels[r * w:(r + 1) * w]) for r in range(self.height)
        )

    def lit_count(self) -> int:
        """Number of lit pixels."""
        return sum(self._pixels)
