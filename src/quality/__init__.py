"""
Frame Quality Scoring

Glare, blur and inter-frame stability metrics used to gate auto-capture.
Works on raw frames as well as normalized cards.
"""

from src.quality.scorer import (
    assess_frame_quality,
    calculate_blur_score,
    calculate_stability,
    detect_glare,
    zone_glare,
)
from src.quality.types import QualityConfig, QualityMetrics

__all__ = [
    "assess_frame_quality",
    "calculate_blur_score",
    "calculate_stability",
    "detect_glare",
    "zone_glare",
    "QualityConfig",
    "QualityMetrics",
]
