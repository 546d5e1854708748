"""Type definitions for the card processing pipeline."""

from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass
class ProcessedFrame:
    """
    Result of running one camera frame through the OCR preparation pipeline.

    Attributes:
        detected: True if a card was found and rectified.
        confidence: Detection confidence in [0.0, 1.0].
        glare_score: Glare share of the raw frame in [0.0, 1.0].
        normalized: Canonical card image (856x540 or 540x856).
        binarized: Whole card binarized with the OCR profile.
        mrz_region: Binarized MRZ band of the card.
        width: Width of the normalized card (0 if not detected).
        height: Height of the normalized card (0 if not detected).
    """

    detected: bool
    confidence: float
    glare_score: float
    normalized: Optional[np.ndarray] = None
    binarized: Optional[np.ndarray] = None
    mrz_region: Optional[np.ndarray] = None
    width: int = 0
    height: int = 0

    @classmethod
    def not_detected(cls, confidence: float = 0.0, glare_score: float = 1.0) -> "ProcessedFrame":
        """Result for frames where no usable card could be produced."""
        return cls(detected=False, confidence=confidence, glare_score=glare_score)

    def is_detected(self) -> bool:
        """Check if the frame produced a normalized card."""
        return self.detected and self.normalized is not None
