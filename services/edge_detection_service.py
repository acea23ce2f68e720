import logging
import time

from services.effects import apply_effect
from services.frame_buffer import FrameBuffer
from services.frame_processor import HIGH_THRESHOLD, LOW_THRESHOLD, process_frame
from services.frame_store import frame_store
from services.image_codec import decode_image, encode_png


def process_canny_edge(image_bytes: bytes,
                       effect: str = "normal",
                       threshold1: int = LOW_THRESHOLD,
                       threshold2: int = HIGH_THRESHOLD,
                       store=frame_store) -> bytes:
    """
    Edge-detect an encoded image and return the RGBA result as PNG bytes.

    The result (after the display effect) becomes the latest frame in the store.
    Bytes that OpenCV cannot decode raise InvalidFormat.
    """
    # Chuyển bytes thành ảnh RGBA
    frame_in = FrameBuffer(decode_image(image_bytes))
    frame_out = FrameBuffer()

    start_time = time.perf_counter()
    process_frame(frame_in, frame_out, threshold1, threshold2)
    processing_time_ms = (time.perf_counter() - start_time) * 1000

    result = apply_effect(frame_out.data, effect)
    store.publish(result, processing_time_ms)
    logging.info(f"Edge detection {frame_out.width}x{frame_out.height} in {processing_time_ms:.1f} ms, effect={effect}")

    # Chuyển kết quả về dạng bytes
    return encode_png(result)
