"""Type definitions for the preprocessing module."""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from src.preprocessing.regions import FieldType


@dataclass(frozen=True)
class PixelRect:
    """Pixel rectangle clamped inside a card image.

    Attributes:
        x: Left edge in pixels
        y: Top edge in pixels
        width: Width in pixels (at least 1)
        height: Height in pixels (at least 1)
    """

    x: int
    y: int
    width: int
    height: int

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)


@dataclass
class ExtractedRegion:
    """Cropped and preprocessed field image.

    Attributes:
        field_type: Field the crop was extracted for
        image: Preprocessed crop (binary for text fields, color for PHOTO)
        rect: Source rectangle on the card
    """

    field_type: FieldType
    image: np.ndarray
    rect: PixelRect

    @property
    def is_binary(self) -> bool:
        """Check if the crop holds at most two intensity values."""
        return self.image.ndim == 2 and len(np.unique(self.image)) <= 2
