"""
Pixel buffer helpers shared by the geometry, preprocessing and quality stages.

Every stage accepts either a ``Frame`` or a bare numpy array. Bare arrays
follow the OpenCV convention (BGR / BGRA).
"""

import logging
from typing import Optional, Tuple, Union

import cv2
import numpy as np

from src.common.types import ChannelOrder, Frame

logger = logging.getLogger(__name__)

ImageLike = Union[Frame, np.ndarray]

_GRAY_CONVERSIONS = {
    ChannelOrder.BGR: cv2.COLOR_BGR2GRAY,
    ChannelOrder.RGB: cv2.COLOR_RGB2GRAY,
    ChannelOrder.BGRA: cv2.COLOR_BGRA2GRAY,
    ChannelOrder.RGBA: cv2.COLOR_RGBA2GRAY,
}


def unwrap(image: Optional[ImageLike]) -> Tuple[Optional[np.ndarray], ChannelOrder]:
    """
    Split an image argument into its pixel array and channel order.

    Args:
        image: Frame, numpy array or None.

    Returns:
        Tuple of (array or None, channel order). Bare arrays are reported
        as GRAY, BGR or BGRA depending on their channel count.
    """
    if image is None:
        return None, ChannelOrder.BGR

    if isinstance(image, Frame):
        return image.data, image.channel_order

    array = np.asarray(image)
    if array.ndim == 2 or (array.ndim == 3 and array.shape[2] == 1):
        return array, ChannelOrder.GRAY
    if array.ndim == 3 and array.shape[2] == 4:
        return array, ChannelOrder.BGRA
    return array, ChannelOrder.BGR


def is_empty(image: Optional[ImageLike]) -> bool:
    """Check if an image argument is None or carries no pixels."""
    array, _ = unwrap(image)
    return array is None or array.size == 0 or array.ndim < 2


def to_grayscale(image: ImageLike) -> np.ndarray:
    """
    Convert an image to a single-channel intensity image.

    Args:
        image: Frame or numpy array (grayscale, 3 or 4 channels).

    Returns:
        New 2D uint8 array. Grayscale input is copied, never aliased.

    Raises:
        ValueError: If image is None or empty.
    """
    array, order = unwrap(image)
    if array is None or array.size == 0:
        raise ValueError("Invalid image: image is None or empty")

    if array.ndim == 2:
        return array.copy()
    if array.shape[2] == 1:
        return array[:, :, 0].copy()

    return cv2.cvtColor(array, _GRAY_CONVERSIONS[order])


def crop(image: np.ndarray, x: int, y: int, w: int, h: int) -> np.ndarray:
    """Copy the (x, y, w, h) rectangle out of an image."""
    return image[y : y + h, x : x + w].copy()
