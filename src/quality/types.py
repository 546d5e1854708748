"""
Data structures for frame quality scoring.

Scores feed the external auto-capture loop; no thresholds are applied here.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class QualityConfig:
    """Configuration for glare, blur and stability scoring."""

    glare_threshold: int = 240  # Pixels at or above this count as glare
    blur_scale: float = 20.0  # Laplacian variance multiplier
    blur_max: float = 100.0  # Upper bound of the blur score
    stability_width: int = 200  # Common size when frame sizes differ
    stability_height: int = 126


@dataclass
class QualityMetrics:
    """
    Quality measurements for a single frame.

    Attributes:
        glare_score: Fraction of saturated pixels [0.0, 1.0]; lower is better.
        blur_score: Scaled Laplacian variance [0.0, 100.0]; higher is sharper.
        stability_score: Similarity to the previous frame [0.0, 1.0]; None
                         when no previous frame was supplied.
    """

    glare_score: float
    blur_score: float
    stability_score: Optional[float] = None
