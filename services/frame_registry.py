import itertools
import logging
import threading
from typing import Dict

from services.errors import UnknownHandle
from services.frame_buffer import FrameBuffer
from services.frame_processor import HIGH_THRESHOLD, LOW_THRESHOLD, process_frame


class FrameRegistry:
    """Table of opaque integer handles for caller-owned frame buffers."""

    def __init__(self):
        self._buffers: Dict[int, FrameBuffer] = {}
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def register(self, buffer: FrameBuffer) -> int:
        with self._lock:
            handle = next(self._counter)
            self._buffers[handle] = buffer
        logging.info(f"Registered frame handle {handle}: {buffer!r}")
        return handle

    def get(self, handle: int) -> FrameBuffer:
        with self._lock:
            try:
                return self._buffers[handle]
            except KeyError:
                raise UnknownHandle(handle) from None

    def release(self, handle: int) -> FrameBuffer:
        with self._lock:
            try:
                buffer = self._buffers.pop(handle)
            except KeyError:
                raise UnknownHandle(handle) from None
        logging.info(f"Released frame handle {handle}")
        return buffer

    def clear(self):
        with self._lock:
            self._buffers.clear()

    def __contains__(self, handle):
        with self._lock:
            return handle in self._buffers

    def __len__(self):
        with self._lock:
            return len(self._buffers)


frame_registry = FrameRegistry()


def process_frame_by_handle(input_handle: int,
                            output_handle: int,
                            registry: FrameRegistry = frame_registry,
                            low_threshold: int = LOW_THRESHOLD,
                            high_threshold: int = HIGH_THRESHOLD) -> bool:
    """
    Process the frame registered under input_handle into output_handle.

    Calls on the same pair of handles must not overlap.
    """
    frame_in = registry.get(input_handle)
    frame_out = registry.get(output_handle)
    return process_frame(frame_in, frame_out, low_threshold, high_threshold)
