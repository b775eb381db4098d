"""Geometry of an image box that can draw at a fixed scale, centred, or zoomed to fit."""

from __future__ import annotations

import enum
from dataclasses import dataclass

IMAGE_WIDTH = 160
IMAGE_HEIGHT = 120
MIN_SCALE = 0.01
MAX_SCALE = 100.0


class PictureMode(enum.Enum):
    """How the image is laid out inside the box."""

    FIXED_SIZE = 0
    FIX_SIZE_CENTRED = 1
    AUTO_ZOOM = 2
    AUTO_SIZE = 3


def _qround(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


@dataclass
class PictureBox:
    """An image holder that works out where and how large its image is drawn."""

    image_width: int = IMAGE_WIDTH
    image_height: int = IMAGE_HEIGHT
    scale: float = 1.0
    mode: PictureMode = PictureMode.FIXED_SIZE
    background: str = "white"
    fixed_size: tuple[int, int] | None = None

    def _scaled_size(self) -> tuple[int, int]:
        return (_qround(self.image_width * self.scale), _qround(self.image_height * self.scale))

    def set_mode(self, mode: PictureMode) -> None:
        """Switch layout mode; AUTO_SIZE pins the box to the scaled image size."""
        self.mode = PictureMode(mode)
        self.fixed_size = self._scaled_size() if self.mode is PictureMode.AUTO_SIZE else None

    def set_image(self, width: int, height: int, scale: float = 1.0) -> bool:
        """Take a new image size and scale; returns False for an empty image."""
        if width <= 0 or height <= 0:
            return False
        self.image_width = width
        self.image_height = height
        self.scale = min(max(scale, MIN_SCALE), MAX_SCALE)
        if self.mode is PictureMode.AUTO_SIZE:
            self.fixed_size = self._scaled_size()
        return True

    def set_background(self, colour: str) -> None:
        """Set the colour the box is cleared with."""
        self.background = colour

    def placement(self, window_width: float, window_height: float) -> tuple[int, int, float]:
        """Return (offset_x, offset_y, scale) for drawing into a window of the given size."""
        if self.mode in (PictureMode.FIXED_SIZE, PictureMode.AUTO_SIZE):
            return 0, 0, self.scale
        if self.mode is PictureMode.FIX_SIZE_CENTRED:
            factor = self.scale
        else:
            factor = min(window_width / self.image_width, window_height / self.image_height)
        offset_x = int((window_width - factor * self.image_width) / 2)
        offset_y = int((window_height - factor * self.image_height) / 2)
        return offset_x, offset_y, factor