import numpy as np
import pytest

from services.errors import UnknownHandle
from services.frame_buffer import FrameBuffer
from services.frame_registry import FrameRegistry, process_frame_by_handle
from tests.conftest import vertical_boundary_rgba


def test_register_and_get():
    registry = FrameRegistry()
    buffer = FrameBuffer()
    handle = registry.register(buffer)

    assert registry.get(handle) is buffer
    assert handle in registry
    assert len(registry) == 1


def test_handles_are_not_reused():
    registry = FrameRegistry()
    first = registry.register(FrameBuffer())
    registry.release(first)
    second = registry.register(FrameBuffer())

    assert second != first
    assert first not in registry


def test_unknown_handle():
    registry = FrameRegistry()
    with pytest.raises(UnknownHandle) as exc_info:
        registry.get(42)
    assert isinstance(exc_info.value, KeyError)
    assert "42" in str(exc_info.value)

    with pytest.raises(UnknownHandle):
        registry.release(42)


def test_process_by_handle_writes_output():
    registry = FrameRegistry()
    input_handle = registry.register(FrameBuffer(vertical_boundary_rgba()))
    output_handle = registry.register(FrameBuffer())

    assert process_frame_by_handle(input_handle, output_handle, registry=registry) is True
    output = registry.get(output_handle)
    assert output.data.shape == (20, 40, 4)
    assert output.data[..., :3].any()


def test_process_by_handle_unknown_output_does_not_touch_input():
    registry = FrameRegistry()
    data = vertical_boundary_rgba()
    input_handle = registry.register(FrameBuffer(data))

    with pytest.raises(UnknownHandle):
        process_frame_by_handle(input_handle, 999, registry=registry)
    assert np.array_equal(registry.get(input_handle).data, vertical_boundary_rgba())
