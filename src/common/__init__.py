"""
Common types and utilities shared across all modules.

This module provides standardized data types for the ID card pipeline,
ensuring consistency across geometry, preprocessing, quality and MRZ modules.
"""

from src.common.image_ops import ImageLike, is_empty, to_grayscale, unwrap
from src.common.types import ChannelOrder, Frame, Point

__all__ = [
    "ChannelOrder",
    "Frame",
    "ImageLike",
    "Point",
    "is_empty",
    "to_grayscale",
    "unwrap",
]
