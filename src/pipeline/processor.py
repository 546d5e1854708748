"""
Card processing pipeline and caller-facing entry points.

Orchestrates the stages that turn a raw camera frame into OCR-ready images:
1. Card localization (largest convex quadrilateral)
2. Glare measurement on the raw frame
3. Perspective normalization to the canonical ID-1 rectangle
4. Whole-card binarization
5. MRZ band extraction

The module-level functions are the stable boundary used by callers. Each one
logs and swallows unexpected errors and returns a neutral value instead, so a
single bad frame never breaks a capture loop.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np

from src.common.image_ops import ImageLike
from src.geometry import config_loader as geometry_config_loader
from src.geometry.detector import find_card_corners as _find_card_corners
from src.geometry.normalizer import CornersLike
from src.geometry.normalizer import warp_to_canonical as _warp_to_canonical
from src.geometry.types import GeometryConfig, GeometryResult
from src.mrz.types import ValidationResult
from src.mrz.validator import validate_tckn as _validate_tckn
from src.mrz.validator import validate_with_score
from src.pipeline.types import ProcessedFrame
from src.preprocessing import config_loader as preprocessing_config_loader
from src.preprocessing.config_loader import PreprocessingModuleConfig
from src.preprocessing.frame_preprocessor import binarize_for_ocr as _binarize_for_ocr
from src.preprocessing.frame_preprocessor import extract_mrz_region as _extract_mrz_region
from src.preprocessing.region_extractor import extract_region as _extract_region
from src.preprocessing.regions import FieldType
from src.quality.scorer import calculate_blur_score, calculate_stability
from src.quality.scorer import detect_glare as _detect_glare
from src.quality.types import QualityConfig

logger = logging.getLogger(__name__)


class CardPipeline:
    """
    Processor for turning camera frames into OCR-ready card images.

    Example:
        >>> pipeline = CardPipeline()
        >>> frame = cv2.imread("card.jpg")
        >>> result = pipeline.process_for_ocr(frame)
        >>> if result.detected:
        ...     cv2.imwrite("card_binary.png", result.binarized)
    """

    def __init__(
        self,
        geometry_config: Optional[GeometryConfig] = None,
        preprocessing_config: Optional[PreprocessingModuleConfig] = None,
        quality_config: Optional[QualityConfig] = None,
        geometry_config_path: Optional[Path] = None,
        preprocessing_config_path: Optional[Path] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            geometry_config: Pre-loaded geometry configuration.
            preprocessing_config: Pre-loaded preprocessing configuration.
            quality_config: Quality thresholds. Uses defaults if None.
            geometry_config_path: YAML file to load the geometry configuration
                                  from when geometry_config is None.
            preprocessing_config_path: YAML file to load the preprocessing
                                       configuration from when
                                       preprocessing_config is None.
        """
        if geometry_config is not None:
            self.geometry_config = geometry_config
        elif geometry_config_path is not None:
            self.geometry_config = geometry_config_loader.load_config(geometry_config_path)
            logger.info(f"Loaded geometry configuration from {geometry_config_path}")
        else:
            self.geometry_config = geometry_config_loader.get_default_config()

        if preprocessing_config is not None:
            self.preprocessing_config = preprocessing_config
        elif preprocessing_config_path is not None:
            self.preprocessing_config = preprocessing_config_loader.load_config(
                preprocessing_config_path
            )
            logger.info(
                f"Loaded preprocessing configuration from {preprocessing_config_path}"
            )
        else:
            self.preprocessing_config = preprocessing_config_loader.get_default_config()

        self.quality_config = quality_config or QualityConfig()

    def process_for_ocr(self, frame: ImageLike) -> ProcessedFrame:
        """
        Run the full preparation pipeline on one frame.

        Stages stop early when no card is found or the warp fails; the
        result then has ``detected=False`` and no images.

        Args:
            frame: Raw camera frame (BGR array or Frame).

        Returns:
            ProcessedFrame with the normalized card, its binarized version and
            the binarized MRZ band.
        """
        logger.info("[Stage 1/5] Card Localization")
        detection = _find_card_corners(frame, self.geometry_config)

        if not detection.detected:
            logger.warning("Pipeline stopped at Stage 1: No card detected")
            return ProcessedFrame.not_detected()

        logger.info(f"Card found (confidence={detection.confidence:.2f})")

        logger.info("[Stage 2/5] Glare Measurement")
        glare = _detect_glare(frame, config=self.quality_config)

        logger.info("[Stage 3/5] Perspective Normalization")
        normalized = _warp_to_canonical(frame, detection.corners, self.geometry_config)

        if normalized is None:
            logger.warning("Pipeline stopped at Stage 3: Warp failed")
            return ProcessedFrame.not_detected(
                confidence=detection.confidence, glare_score=glare
            )

        height, width = normalized.shape[:2]
        logger.info(f"Normalized card size: {width}x{height}")

        logger.info("[Stage 4/5] Binarization")
        binarized = _binarize_for_ocr(normalized, self.preprocessing_config)

        logger.info("[Stage 5/5] MRZ Extraction")
        mrz_region = _extract_mrz_region(normalized, self.preprocessing_config)

        logger.info(
            f"Pipeline complete: confidence={detection.confidence:.2f}, glare={glare:.3f}"
        )

        return ProcessedFrame(
            detected=True,
            confidence=detection.confidence,
            glare_score=glare,
            normalized=normalized,
            binarized=binarized,
            mrz_region=mrz_region,
            width=width,
            height=height,
        )


_default_pipeline: Optional[CardPipeline] = None


def _get_pipeline() -> CardPipeline:
    global _default_pipeline
    if _default_pipeline is None:
        _default_pipeline = CardPipeline()
    return _default_pipeline


def process_for_ocr(frame: ImageLike) -> ProcessedFrame:
    """Run the default pipeline; any error yields a not-detected result."""
    try:
        return _get_pipeline().process_for_ocr(frame)
    except Exception:
        logger.exception("process_for_ocr failed")
        return ProcessedFrame.not_detected()


def find_card_corners(frame: ImageLike) -> GeometryResult:
    """Locate the card; any error yields a not-detected result."""
    try:
        return _find_card_corners(frame)
    except Exception:
        logger.exception("find_card_corners failed")
        return GeometryResult.not_detected()


def warp_to_canonical(frame: ImageLike, corners: CornersLike) -> Optional[np.ndarray]:
    """Rectify the card to 856x540 (or 540x856); None on any error."""
    try:
        return _warp_to_canonical(frame, corners)
    except Exception:
        logger.exception("warp_to_canonical failed")
        return None


def binarize_for_ocr(image: ImageLike) -> Optional[np.ndarray]:
    """Binarize with the full OCR profile; None on any error."""
    try:
        return _binarize_for_ocr(image)
    except Exception:
        logger.exception("binarize_for_ocr failed")
        return None


def extract_mrz_region(card: ImageLike) -> Optional[np.ndarray]:
    """Crop and binarize the MRZ band; None on any error."""
    try:
        return _extract_mrz_region(card)
    except Exception:
        logger.exception("extract_mrz_region failed")
        return None


def detect_glare(image: ImageLike) -> float:
    """Glare share of the image; 1.0 (worst) on any error."""
    try:
        return _detect_glare(image)
    except Exception:
        logger.exception("detect_glare failed")
        return 1.0


def extract_region(
    card: ImageLike,
    field_type: Union[FieldType, int],
    is_back_side: bool = False,
) -> Optional[np.ndarray]:
    """
    Crop and preprocess one card field.

    Args:
        card: Normalized card image.
        field_type: FieldType or its integer ordinal.
        is_back_side: Resolve the field on the back side (always the MRZ).

    Returns:
        Field image (raw crop for PHOTO, binary otherwise), or None for an
        empty card, an unknown field type or any other error.
    """
    try:
        region = _extract_region(card, field_type, is_back_side)
        return region.image if region is not None else None
    except Exception:
        logger.exception(f"extract_region failed for field_type={field_type!r}")
        return None


def blur_score(image: ImageLike) -> float:
    """Sharpness score in [0, 100]; 0.0 on any error."""
    try:
        return calculate_blur_score(image)
    except Exception:
        logger.exception("blur_score failed")
        return 0.0


def stability(current: ImageLike, previous: ImageLike) -> float:
    """Inter-frame stability in [0, 1]; 0.0 on any error."""
    try:
        return calculate_stability(current, previous)
    except Exception:
        logger.exception("stability failed")
        return 0.0


def validate_mrz(line1: str, line2: str, line3: str) -> ValidationResult:
    """Score three MRZ lines (0-60); an all-invalid result on any error."""
    try:
        return validate_with_score(line1, line2, line3)
    except Exception:
        logger.exception("validate_mrz failed")
        return ValidationResult()


def validate_tckn(tckn: str) -> bool:
    """Validate a TCKN; False on any error."""
    try:
        return _validate_tckn(tckn)
    except Exception:
        logger.exception("validate_tckn failed")
        return False
