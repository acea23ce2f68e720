import numpy as np
import pytest

from services.errors import EmptyInput, InvalidFormat
from services.frame_buffer import FrameBuffer


def test_default_buffer_is_empty():
    buffer = FrameBuffer()
    assert buffer.empty
    assert (buffer.width, buffer.height) == (0, 0)


def test_dimensions():
    assert FrameBuffer(np.zeros((3, 5), dtype=np.uint8)).channels == 1
    buffer = FrameBuffer(np.zeros((3, 5, 4), dtype=np.uint8))
    assert (buffer.height, buffer.width, buffer.channels) == (3, 5, 4)


def test_rejects_non_array():
    with pytest.raises(InvalidFormat):
        FrameBuffer([[1, 2], [3, 4]])


def test_create_reallocates_on_shape_change():
    buffer = FrameBuffer(np.zeros((2, 2, 4), dtype=np.uint8))
    old = buffer.data
    data = buffer.create(4, 6, 4)

    assert data is buffer.data
    assert data is not old
    assert data.shape == (4, 6, 4)
    assert data.dtype == np.uint8


def test_create_single_channel_is_two_dimensional():
    assert FrameBuffer().create(3, 3, 1).shape == (3, 3)


def test_require_non_empty():
    with pytest.raises(EmptyInput):
        FrameBuffer().require_non_empty()
