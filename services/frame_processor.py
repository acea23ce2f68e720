import logging

import cv2
import numpy as np

from services.errors import InvalidFormat, InvalidThresholds
from services.frame_buffer import FrameBuffer

# Ngưỡng Canny cố định
LOW_THRESHOLD = 80
HIGH_THRESHOLD = 150

INPUT_CHANNELS = 4
OUTPUT_CHANNELS = 4


def validate_rgba(frame: FrameBuffer) -> None:
    data = frame.data
    if data.dtype != np.uint8:
        raise InvalidFormat(f"Expected 8-bit frame, got dtype {data.dtype}")
    if data.ndim != 3 or data.shape[2] != INPUT_CHANNELS:
        raise InvalidFormat(f"Expected {INPUT_CHANNELS}-channel frame, got shape {data.shape}")


def process_frame(frame_in,
                  frame_out,
                  low_threshold: int = LOW_THRESHOLD,
                  high_threshold: int = HIGH_THRESHOLD) -> bool:
    """
    Grayscale + Canny edge detection of an RGBA frame, written back as RGBA.

    Args:
        frame_in (FrameBuffer | np.ndarray): 4-channel 8-bit input frame.
        frame_out (FrameBuffer): Destination buffer, resized when its shape differs.
        low_threshold (int): Lower hysteresis threshold for Canny.
        high_threshold (int): Upper hysteresis threshold for Canny.

    Returns:
        bool: False if the input was empty and nothing was written, True otherwise.

    Raises:
        InvalidFormat: Input is not a 4-channel uint8 frame, or thresholds are inverted.
        AllocationFailure: Output storage could not be allocated.

    Running this again on its own output does not give the same image back;
    the edge map of an edge map is mostly empty.
    """
    frame_in = FrameBuffer.wrap(frame_in)
    if not isinstance(frame_out, FrameBuffer):
        raise InvalidFormat("Output must be a FrameBuffer")

    if frame_in.empty:
        logging.debug("Empty input frame, output left unchanged")
        return False

    validate_rgba(frame_in)
    if low_threshold < 0 or high_threshold < low_threshold:
        raise InvalidThresholds(f"Invalid Canny thresholds: low={low_threshold}, high={high_threshold}")

    # Chuyển sang ảnh xám
    gray = cv2.cvtColor(frame_in.data, cv2.COLOR_RGBA2GRAY)

    # Áp dụng Canny Edge Detection
    edges = cv2.Canny(gray, low_threshold, high_threshold)

    # Khôi phục 4 kênh để hiển thị
    edges_rgba = cv2.cvtColor(edges, cv2.COLOR_GRAY2RGBA)

    height, width = edges.shape
    target = frame_out.create(height, width, OUTPUT_CHANNELS)
    np.copyto(target, edges_rgba)
    return True
