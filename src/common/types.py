"""
Common type definitions for the ID card pipeline.

This module provides Pydantic-based type definitions for the core data
structures shared by every stage: camera frames and corner points.

These types provide:
- Type validation and conversion
- Consistent interfaces across modules
- Integration with numpy arrays and OpenCV
"""

from enum import Enum
from typing import Tuple, Union

import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator


class ChannelOrder(Enum):
    """Byte order of the channels in a pixel buffer."""

    GRAY = "GRAY"
    BGR = "BGR"
    RGB = "RGB"
    BGRA = "BGRA"
    RGBA = "RGBA"


# Number of channels implied by each channel order
CHANNEL_COUNTS = {
    ChannelOrder.GRAY: 1,
    ChannelOrder.BGR: 3,
    ChannelOrder.RGB: 3,
    ChannelOrder.BGRA: 4,
    ChannelOrder.RGBA: 4,
}


class Frame(BaseModel):
    """
    Type-safe wrapper for a camera frame handed over by the platform bridge.

    The frame owns its pixel buffer. Pipeline stages never write into it;
    every transform returns a new array.

    Attributes:
        data: The underlying numpy array containing image data.
            Shape: (H, W, C) for color images, (H, W) for grayscale.
            Dtype: uint8 (0-255).
        channel_order: Byte order of the channels (BGR unless the bridge
            says otherwise).

    Example:
        >>> import cv2
        >>> frame = Frame(data=cv2.imread("card.jpg"))
        >>> print(frame.shape, frame.channels)  # (720, 1280, 3) 3
        >>> rgba = Frame(data=buffer, channel_order=ChannelOrder.RGBA)
    """

    data: np.ndarray = Field(..., description="Image data as numpy array")
    channel_order: ChannelOrder = Field(
        default=ChannelOrder.BGR, description="Channel byte order"
    )

    model_config = {"arbitrary_types_allowed": True}

    @field_validator("data")
    @classmethod
    def _validate_image(cls, v: np.ndarray) -> np.ndarray:
        """
        Validate that the numpy array is a valid image.

        Empty arrays are allowed: the pipeline treats them as "no frame"
        and degrades to neutral results instead of failing.

        Raises:
            ValueError: If array is not a valid image format.
        """
        if not isinstance(v, np.ndarray):
            raise ValueError(f"Expected numpy.ndarray, got {type(v)}")

        if v.size == 0:
            return v

        if len(v.shape) not in (2, 3):
            raise ValueError(
                f"Expected 2D (grayscale) or 3D (color) image, got shape {v.shape}"
            )

        if len(v.shape) == 3 and v.shape[2] not in (1, 3, 4):
            raise ValueError(
                f"Expected 1, 3, or 4 channels for color image, got {v.shape[2]}"
            )

        if v.dtype != np.uint8:
            raise ValueError(
                f"Expected uint8 dtype for image, got {v.dtype}. "
                "Images should be in range [0, 255]"
            )

        return v

    @model_validator(mode="after")
    def _validate_channel_order(self) -> "Frame":
        """Check that the declared channel order matches the buffer."""
        if self.data.size == 0:
            return self
        expected = CHANNEL_COUNTS[self.channel_order]
        if self.channels != expected:
            raise ValueError(
                f"Channel order {self.channel_order.value} expects {expected} "
                f"channels, got {self.channels}"
            )
        return self

    @property
    def shape(self) -> Tuple[int, ...]:
        """Get image shape (H, W) or (H, W, C)."""
        return self.data.shape

    @property
    def channels(self) -> int:
        """Get number of channels (1 for grayscale, 3 for color, 4 with alpha)."""
        if len(self.data.shape) == 2:
            return 1
        return int(self.data.shape[2])

    def __repr__(self) -> str:
        """String representation of Frame."""
        return (
            f"Frame(shape={self.shape}, dtype={self.data.dtype}, "
            f"channel_order={self.channel_order.value})"
        )


class Point(BaseModel):
    """
    Type-safe representation of a 2D point (x, y).

    Used for card corners handed across the pipeline boundary.

    Example:
        >>> point = Point(x=100, y=200)
        >>> arr = point.to_numpy()  # array([100., 200.], dtype=float32)
    """

    x: int = Field(..., description="X-coordinate (horizontal)")
    y: int = Field(..., description="Y-coordinate (vertical)")

    @field_validator("x", "y", mode="before")
    @classmethod
    def _convert_to_int(cls, v: Union[int, float, np.number]) -> int:
        """Convert coordinate to int, rounding if float."""
        if isinstance(v, (int, float, np.number)):
            return int(round(float(v)))
        raise ValueError(f"Coordinate must be numeric, got {type(v)}")

    def to_numpy(self, dtype: type = np.float32) -> np.ndarray:
        """Convert Point to numpy array of shape (2,)."""
        return np.array([self.x, self.y], dtype=dtype)

    def __repr__(self) -> str:
        """String representation of Point."""
        return f"Point(x={self.x}, y={self.y})"
