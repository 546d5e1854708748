"""
Pytest Configuration and Shared Fixtures

This file contains pytest configuration and fixtures that are available
to all test modules.
"""

import cv2
import numpy as np
import pytest

# Sample TD-1 MRZ with valid check digits (TCKN 12345678950)
VALID_MRZ_LINES = (
    "I<TURA12C345672<<<<<<<<<<<<<<<",
    "9001158M3001019TUR123456789504",
    "YILMAZ<<AHMET<<<<<<<<<<<<<<<<<",
)


@pytest.fixture
def card_corners():
    """Fixture providing the corners of the synthetic card, TL/TR/BR/BL."""
    return np.array(
        [[300, 150], [985, 150], [985, 582], [300, 582]],
        dtype=np.float32,
    )


@pytest.fixture
def card_frame(card_corners):
    """Fixture providing a 1280x720 BGR frame with a light card on a dark table."""
    frame = np.full((720, 1280, 3), 30, dtype=np.uint8)
    cv2.fillPoly(frame, [card_corners.astype(np.int32)], (200, 200, 200))

    # Some dark print inside the card, away from its border
    cv2.putText(
        frame, "12345678950", (420, 330), cv2.FONT_HERSHEY_SIMPLEX, 1.5, (40, 40, 40), 3
    )
    cv2.rectangle(frame, (340, 200), (460, 350), (90, 90, 90), -1)

    return frame


@pytest.fixture
def tilted_card_frame():
    """Fixture providing a frame with a perspective-distorted card."""
    frame = np.full((720, 1280, 3), 25, dtype=np.uint8)
    pts = np.array([[320, 180], [960, 140], [1010, 590], [280, 560]], dtype=np.int32)
    cv2.fillPoly(frame, [pts], (210, 210, 210))
    return frame, pts.astype(np.float32)


@pytest.fixture
def uniform_frame():
    """Fixture providing a featureless gray frame."""
    return np.full((720, 1280, 3), 128, dtype=np.uint8)


@pytest.fixture
def normalized_card():
    """Fixture providing a canonical 856x540 card with dark text on a light base."""
    card = np.full((540, 856, 3), 215, dtype=np.uint8)

    cv2.putText(card, "12345678950", (30, 160), cv2.FONT_HERSHEY_SIMPLEX, 1.2, (20, 20, 20), 2)
    cv2.putText(card, "YILMAZ", (280, 240), cv2.FONT_HERSHEY_SIMPLEX, 1.0, (20, 20, 20), 2)
    cv2.rectangle(card, (40, 220), (240, 480), (120, 120, 120), -1)

    # MRZ-like band at the bottom
    for i, y in enumerate((430, 475, 520)):
        cv2.putText(
            card, f"I<TUR{i}<<<<<<<<<<", (30, y), cv2.FONT_HERSHEY_SIMPLEX, 1.0, (10, 10, 10), 2
        )

    return card


@pytest.fixture
def valid_mrz_lines():
    """Fixture providing three valid TD-1 MRZ lines."""
    return VALID_MRZ_LINES
