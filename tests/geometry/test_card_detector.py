"""
Unit tests for card localization.
"""

import cv2
import numpy as np
import pytest

from src.common.types import ChannelOrder, Frame
from src.geometry.config_loader import get_default_config
from src.geometry.detector import detect_edges, find_card_corners, select_card_quad
from src.geometry.normalizer import order_corners


class TestDetectEdges:
    """Tests for the edge map."""

    def test_uniform_image_has_no_edges(self, uniform_frame):
        """Test that a flat image produces an empty edge map."""
        gray = cv2.cvtColor(uniform_frame, cv2.COLOR_BGR2GRAY)
        edges = detect_edges(gray, get_default_config().detection)

        assert edges.shape == gray.shape
        assert np.count_nonzero(edges) == 0

    def test_edges_are_binary(self, card_frame):
        """Test that the edge map only contains 0 and 255."""
        gray = cv2.cvtColor(card_frame, cv2.COLOR_BGR2GRAY)
        edges = detect_edges(gray, get_default_config().detection)

        assert set(np.unique(edges)) <= {0, 255}
        assert np.count_nonzero(edges) > 0


class TestFindCardCorners:
    """Tests for find_card_corners."""

    def test_detects_card(self, card_frame, card_corners):
        """Test that the synthetic card is found at its true position."""
        result = find_card_corners(card_frame)

        assert result.detected
        assert result.corners.shape == (4, 2)
        np.testing.assert_allclose(order_corners(result.corners), card_corners, atol=8)

    def test_confidence_from_area(self, card_frame):
        """Test confidence = area / (half the frame area), capped at 1."""
        result = find_card_corners(card_frame)

        frame_area = card_frame.shape[0] * card_frame.shape[1]
        expected = min(1.0, result.area / (frame_area * 0.5))

        assert 0.0 < result.confidence <= 1.0
        assert result.confidence == pytest.approx(expected)

    def test_uniform_frame_not_detected(self, uniform_frame):
        """Test that a featureless frame yields no detection."""
        result = find_card_corners(uniform_frame)

        assert not result.detected
        assert result.corners is None
        assert result.confidence == 0.0

    def test_empty_frame_not_detected(self):
        """Test that an empty frame yields no detection."""
        result = find_card_corners(np.zeros((0, 0, 3), dtype=np.uint8))

        assert not result.detected
        assert result.confidence == 0.0

    def test_small_quad_ignored(self):
        """Test that quadrilaterals under 5% of the frame are ignored."""
        frame = np.full((720, 1280, 3), 30, dtype=np.uint8)
        cv2.rectangle(frame, (100, 100), (250, 200), (220, 220, 220), -1)

        result = find_card_corners(frame)

        assert not result.detected

    def test_largest_quad_wins(self, card_frame):
        """Test that the largest of two candidates is retained."""
        frame = card_frame.copy()
        # Second, smaller card-like rectangle next to the first one
        cv2.rectangle(frame, (1010, 200), (1260, 400), (200, 200, 200), -1)

        result = find_card_corners(frame)

        assert result.detected
        xs = result.corners[:, 0]
        assert xs.min() < 310
        assert xs.max() < 1000

    def test_circle_not_detected(self):
        """Test that a large non-quadrilateral blob is rejected."""
        frame = np.full((720, 1280, 3), 30, dtype=np.uint8)
        cv2.circle(frame, (640, 360), 300, (220, 220, 220), -1)

        result = find_card_corners(frame)

        assert not result.detected

    def test_grayscale_and_frame_inputs(self, card_frame):
        """Test that grayscale arrays and RGB Frames are accepted."""
        gray = cv2.cvtColor(card_frame, cv2.COLOR_BGR2GRAY)
        rgb = Frame(
            data=cv2.cvtColor(card_frame, cv2.COLOR_BGR2RGB),
            channel_order=ChannelOrder.RGB,
        )

        assert find_card_corners(gray).detected
        assert find_card_corners(rgb).detected



    def test_elongated_strip_not_detected(self):
        """Test that a large quad outside the aspect ratio window is rejected."""
        frame = np.full((720, 1280, 3), 30, dtype=np.uint8)
        cv2.rectangle(frame, (40, 330), (1240, 390), (220, 220, 220), -1)

        result = find_card_corners(frame)

        assert not result.detected


def _quad(points):
    """Build an OpenCV contour of shape (N, 1, 2) from (x, y) pairs."""
    return np.array(points, dtype=np.int32).reshape(-1, 1, 2)


FRAME_AREA = 1280.0 * 720.0


class TestSelectCardQuad:
    """Tests for the candidate filters and the area-only score."""

    @pytest.fixture
    def config(self):
        return get_default_config().detection

    def test_single_candidate(self, config):
        """Test that a plausible quad is returned with its area."""
        quad = _quad([(100, 100), (500, 100), (500, 350), (100, 350)])

        approx, area = select_card_quad([quad], FRAME_AREA, config)

        assert approx is not None
        assert area == pytest.approx(100000.0)

    def test_equal_areas_keep_first(self, config):
        """Test that a later candidate of the same area does not replace the first."""
        first = _quad([(100, 100), (500, 100), (500, 350), (100, 350)])
        second = _quad([(700, 100), (1100, 100), (1100, 350), (700, 350)])

        approx, _ = select_card_quad([first, second], FRAME_AREA, config)
        assert approx[:, 0, 0].max() == 500

        approx, _ = select_card_quad([second, first], FRAME_AREA, config)
        assert approx[:, 0, 0].min() == 700

    def test_larger_later_candidate_wins(self, config):
        """Test that a strictly larger later candidate replaces the best."""
        small = _quad([(100, 100), (500, 100), (500, 350), (100, 350)])
        large = _quad([(600, 100), (1100, 100), (1100, 420), (600, 420)])

        approx, area = select_card_quad([small, large], FRAME_AREA, config)

        assert approx[:, 0, 0].min() == 600
        assert area == pytest.approx(500.0 * 320.0)

    def test_aspect_ratio_window(self, config):
        """Test that ratios outside [0.2, 5.0] are rejected."""
        wide = _quad([(40, 300), (1240, 300), (1240, 360), (40, 360)])
        tall = _quad([(600, 10), (680, 10), (680, 710), (600, 710)])

        assert select_card_quad([wide], FRAME_AREA, config) == (None, 0.0)
        assert select_card_quad([tall], FRAME_AREA, config) == (None, 0.0)

    def test_non_convex_rejected(self, config):
        """Test that a concave 4-vertex polygon is rejected."""
        arrowhead = _quad([(100, 100), (700, 400), (100, 700), (300, 400)])

        assert select_card_quad([arrowhead], FRAME_AREA, config) == (None, 0.0)

    def test_too_small_rejected(self, config):
        """Test that a quad under the minimum area ratio is rejected."""
        small = _quad([(100, 100), (300, 100), (300, 200), (100, 200)])

        assert select_card_quad([small], FRAME_AREA, config) == (None, 0.0)
