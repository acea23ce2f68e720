import logging
from typing import Optional, Tuple

import numpy as np

from services.errors import AllocationFailure, EmptyInput, InvalidFormat


def _allocate(shape: Tuple[int, ...]) -> np.ndarray:
    return np.empty(shape, dtype=np.uint8)


class FrameBuffer:
    """
    Caller-owned 8-bit image buffer.

    Stands in for the raw image address passed over the binding boundary:
    the processor only ever sees a checked ndarray, never reinterpreted memory.
    Storage is either (height, width) or (height, width, channels).
    """

    def __init__(self, data: Optional[np.ndarray] = None):
        if data is None:
            data = np.empty((0, 0, 4), dtype=np.uint8)
        if not isinstance(data, np.ndarray):
            raise InvalidFormat(f"Frame data must be a numpy array, got {type(data).__name__}")
        self.data = data

    @classmethod
    def wrap(cls, frame) -> "FrameBuffer":
        if isinstance(frame, FrameBuffer):
            return frame
        return cls(frame)

    @property
    def empty(self) -> bool:
        return self.data.size == 0

    @property
    def height(self) -> int:
        return int(self.data.shape[0]) if self.data.ndim >= 1 else 0

    @property
    def width(self) -> int:
        return int(self.data.shape[1]) if self.data.ndim >= 2 else 0

    @property
    def channels(self) -> int:
        if self.data.ndim == 2:
            return 1
        if self.data.ndim == 3:
            return int(self.data.shape[2])
        return 0

    def create(self, height: int, width: int, channels: int) -> np.ndarray:
        """
        Make sure the buffer holds uint8 storage of the given size.

        Existing storage is kept when it already matches and is writeable,
        otherwise it is replaced. Returns the storage array.
        """
        shape = (height, width) if channels == 1 else (height, width, channels)
        if self.data.shape == shape and self.data.dtype == np.uint8 and self.data.flags.writeable:
            logging.debug(f"Reusing frame storage {shape}")
            return self.data

        try:
            self.data = _allocate(shape)
        except MemoryError as e:
            raise AllocationFailure(f"Cannot allocate frame storage {shape}") from e
        return self.data

    def require_non_empty(self) -> "FrameBuffer":
        if self.empty:
            raise EmptyInput("Frame buffer is empty")
        return self

    def __repr__(self):
        return f"FrameBuffer({self.width}x{self.height}x{self.channels})"
