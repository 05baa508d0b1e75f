"""Screen panel: renders the framebuffer as Rich text using half-block glyphs."""

from __future__ import annotations

from rich.text import Text

# (top lit, bottom lit) -> glyph
_HALF_BLOCKS: dict[tuple[bool, bool], str] = {
    (False, False): " ",
    (True, False): "▀",  # upper half block
    (False, True): "▄",  # lower half block
    (True, True): "█",  # full block
}


def format_screen(rows: tuple[tuple[bool, ...], ...]) -> list[str]:
    """Pack a pixel grid into text lines, two pixel rows per line.

    A 64x32 display becomes 16 lines of 64 characters. An odd trailing row
    is paired with an unlit row.

    Args:
        rows: Row-major pixel grid, as returned by ``Framebuffer.rows()``.

    Returns:
        One string per pair of pixel rows.
    """
    lines: list[str] = []
    for top_idx in range(0, len(rows), 2):
        top = rows[top_idx]
        bottom = rows[top_idx + 1] if top_idx + 1 < len(rows) else (False,) * len(top)
        lines.append("".join(_HALF_BLOCKS[(t, b)] for t, b in zip(top, bottom)))
    return lines


def render_screen(rows: tuple[tuple[bool, ...], ...], style: str = "bright_green") -> Text:
    """Build a Rich Text of the display, suitable for a Panel."""
    return Text("\n".join(format_screen(rows)), style=style, no_wrap=True)
