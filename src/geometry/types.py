"""
Data types and structures for the Geometry module.

Provides type-safe containers for configuration and detection results.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np


class Orientation(Enum):
    """Orientation of the rectified card."""

    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"


@dataclass(frozen=True)
class DetectionConfig:
    """Configuration for contour-based card localization."""

    blur_kernel_size: int
    canny_low: float
    canny_high: float
    dilate_kernel_size: int
    dilate_iterations: int
    min_area_ratio: float  # Minimum contour area / frame area
    approx_epsilon_ratio: float  # approxPolyDP epsilon / perimeter
    aspect_ratio_min: float
    aspect_ratio_max: float
    full_confidence_area_ratio: float  # Area ratio mapped to confidence 1.0


@dataclass(frozen=True)
class NormalizationConfig:
    """Configuration for perspective normalization."""

    target_width: int  # Landscape width; swapped with height for portrait
    target_height: int
    interpolation: str


@dataclass(frozen=True)
class GeometryConfig:
    """Complete geometry module configuration."""

    detection: DetectionConfig
    normalization: NormalizationConfig


@dataclass
class GeometryResult:
    """
    Output from card localization.

    Attributes:
        detected: True if a card-like quadrilateral was found.
        corners: The 4 quadrilateral vertices as found (unordered), shape
                 (4, 2). None if nothing was detected.
        confidence: Share of the frame covered by the card, mapped to
                    [0.0, 1.0].
        area: Contour area of the retained quadrilateral in pixels.
    """

    detected: bool
    corners: Optional[np.ndarray]
    confidence: float
    area: float = 0.0

    @classmethod
    def not_detected(cls) -> "GeometryResult":
        """Neutral result for frames without a card."""
        return cls(detected=False, corners=None, confidence=0.0, area=0.0)
