"""Turn the 64x32 display into images."""

from typing import NamedTuple, Tuple

import numpy as np
from PIL import Image

RGB = Tuple[int, int, int]


class Palette(NamedTuple):
    """Colors for lit and dark pixels."""
    on: RGB
    off: RGB


PALETTES = {
    "classic": Palette(on=(255, 255, 255), off=(0, 0, 0)),     # COSMAC VIP white
    "phosphor": Palette(on=(51, 255, 102), off=(0, 20, 0)),    # P1 green CRT
    "amber": Palette(on=(255, 176, 0), off=(24, 12, 0)),
    "lcd": Palette(on=(15, 56, 15), off=(155, 188, 15)),       # dark on pea green
}


def create_color_scheme(scheme: str = "classic") -> Palette:
    """Look up a named palette."""
    try:
        return PALETTES[scheme]
    except KeyError:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {sorted(PALETTES)}"
        ) from None


def chip8_display_to_rgb(
    display: np.ndarray,
    scale: int = 8,
    palette: Palette = PALETTES["classic"],
) -> np.ndarray:
    """Render a (64, 32) boolean display as a (32*scale, 64*scale, 3) uint8 image.

    The display is indexed [x, y]; images are row-major, hence the transpose.
    """
    lookup = np.array([palette.off, palette.on], dtype=np.uint8)
    frame = lookup[np.asarray(display, dtype=np.uint8).T]
    if scale > 1:
        frame = frame.repeat(scale, axis=0).repeat(scale, axis=1)
    return frame


def save_screenshot(
    display: np.ndarray,
    filename: str,
    scale: int = 8,
    color_scheme: str = "classic",
) -> None:
    """Save a single display frame as an image file (format from extension)."""
    frame = chip8_display_to_rgb(display, scale, create_color_scheme(color_scheme))
    Image.fromarray(frame).save(filename)
