"""Unit tests for the shared Frame and Point types."""

import numpy as np
import pytest

from src.common.types import ChannelOrder, Frame, Point


class TestFrame:
    """Test Frame validation."""

    def test_color_frame(self):
        """Test a BGR frame and its derived properties."""
        frame = Frame(data=np.zeros((720, 1280, 3), dtype=np.uint8))

        assert frame.channel_order == ChannelOrder.BGR
        assert frame.shape == (720, 1280, 3)
        assert frame.channels == 3

    def test_grayscale_frame(self):
        """Test that a 2D buffer is a single-channel frame."""
        frame = Frame(data=np.zeros((10, 20), dtype=np.uint8), channel_order=ChannelOrder.GRAY)

        assert frame.channels == 1

    def test_empty_frame_allowed(self):
        """Test that an empty buffer is accepted as 'no frame'."""
        frame = Frame(data=np.zeros((0, 0, 3), dtype=np.uint8), channel_order=ChannelOrder.RGBA)

        assert frame.shape == (0, 0, 3)

    def test_wrong_dtype(self):
        """Test that non-uint8 buffers are rejected."""
        with pytest.raises(ValueError, match="uint8"):
            Frame(data=np.zeros((10, 10, 3), dtype=np.float32))

    def test_wrong_channel_count(self):
        """Test that 2-channel buffers are rejected."""
        with pytest.raises(ValueError, match="channels"):
            Frame(data=np.zeros((10, 10, 2), dtype=np.uint8))

    def test_channel_order_mismatch(self):
        """Test that the declared order must match the channel count."""
        with pytest.raises(ValueError, match="RGBA expects 4"):
            Frame(data=np.zeros((10, 10, 3), dtype=np.uint8), channel_order=ChannelOrder.RGBA)

    def test_repr(self):
        """Test the compact string representation."""
        frame = Frame(data=np.zeros((4, 6, 4), dtype=np.uint8), channel_order=ChannelOrder.BGRA)

        assert repr(frame) == "Frame(shape=(4, 6, 4), dtype=uint8, channel_order=BGRA)"


class TestPoint:
    """Test Point conversion."""

    def test_coordinates_rounded(self):
        """Test that float coordinates are rounded to int."""
        point = Point(x=10.6, y=np.float32(2.2))

        assert (point.x, point.y) == (11, 2)

    def test_to_numpy(self):
        """Test conversion to a float32 (2,) array."""
        arr = Point(x=100, y=200).to_numpy()

        assert arr.dtype == np.float32
        np.testing.assert_array_equal(arr, [100.0, 200.0])

    def test_non_numeric_rejected(self):
        """Test that non-numeric coordinates raise."""
        with pytest.raises(ValueError):
            Point(x="a", y=0)
