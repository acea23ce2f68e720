import cv2
import numpy as np

from services.errors import FrameProcessingError, InvalidFormat

_TO_RGBA = {
    ("bgr", 1): cv2.COLOR_GRAY2RGBA,
    ("bgr", 3): cv2.COLOR_BGR2RGBA,
    ("bgr", 4): cv2.COLOR_BGRA2RGBA,
    ("rgb", 1): cv2.COLOR_GRAY2RGBA,
    ("rgb", 3): cv2.COLOR_RGB2RGBA,
}


def to_rgba(image: np.ndarray, order: str = "bgr") -> np.ndarray:
    """
    Normalize a 1, 3 or 4 channel image to 8-bit RGBA.

    Args:
        image (np.ndarray): Image as returned by OpenCV.
        order (str): Channel order of color input, "bgr" (OpenCV) or "rgb".

    Returns:
        np.ndarray: Array of shape (height, width, 4), dtype uint8.
    """
    if order not in ("bgr", "rgb"):
        raise InvalidFormat(f"Unsupported channel order: {order}")
    if image.dtype == np.uint16:
        image = (image / 257).astype(np.uint8)
    elif image.dtype != np.uint8:
        raise InvalidFormat(f"Unsupported image depth: {image.dtype}")

    channels = 1 if image.ndim == 2 else image.shape[2]
    if order == "rgb" and channels == 4:
        return image.copy()

    code = _TO_RGBA.get((order, channels))
    if code is None:
        raise InvalidFormat(f"Unsupported channel count: {channels}")
    return cv2.cvtColor(image, code)


def decode_image(image_bytes: bytes) -> np.ndarray:
    # Chuyển bytes thành mảng NumPy
    image_array = np.frombuffer(image_bytes, np.uint8)
    if image_array.size == 0:
        raise InvalidFormat("Cannot decode image file")
    image = cv2.imdecode(image_array, cv2.IMREAD_UNCHANGED)
    if image is None:
        raise InvalidFormat("Cannot decode image file")
    return to_rgba(image)


def encode_png(rgba: np.ndarray) -> bytes:
    ok, buffer = cv2.imencode(".png", cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGRA))
    if not ok:
        raise FrameProcessingError("PNG encoding failed")
    return buffer.tobytes()


def encode_jpeg(rgba: np.ndarray, quality: int = 90) -> bytes:
    # JPEG không có kênh alpha
    bgr = cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGR)
    ok, buffer = cv2.imencode(".jpg", bgr, [cv2.IMWRITE_JPEG_QUALITY, int(quality)])
    if not ok:
        raise FrameProcessingError("JPEG encoding failed")
    return buffer.tobytes()
