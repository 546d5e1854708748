"""
Card Localization & Perspective Normalization

Finds the ID card in a raw camera frame and rectifies it to the canonical
ID-1 rectangle used by every later stage.

Pipeline stages:
1. Edge detection (blur + fixed-threshold Canny + dilation)
2. Contour scoring (largest convex quadrilateral with a plausible ratio)
3. Corner ordering (TL, TR, BR, BL)
4. Perspective warp to 856x540 (landscape) or 540x856 (portrait)
"""

from src.geometry.config_loader import get_default_config, load_config
from src.geometry.detector import find_card_corners, select_card_quad
from src.geometry.normalizer import (
    calculate_aspect_ratio,
    calculate_edge_lengths,
    order_corners,
    warp_to_canonical,
)
from src.geometry.types import (
    DetectionConfig,
    GeometryConfig,
    GeometryResult,
    NormalizationConfig,
    Orientation,
)

__all__ = [
    "find_card_corners",
    "select_card_quad",
    "warp_to_canonical",
    "order_corners",
    "calculate_aspect_ratio",
    "calculate_edge_lengths",
    "load_config",
    "get_default_config",
    "DetectionConfig",
    "GeometryConfig",
    "GeometryResult",
    "NormalizationConfig",
    "Orientation",
]
