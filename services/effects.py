import cv2
import numpy as np

from services.errors import InvalidFormat, UnknownEffect

EFFECTS = ("normal", "invert", "grayscale", "sepia")

_GRAYSCALE = np.array([
    [0.299, 0.587, 0.114, 0.0],
    [0.299, 0.587, 0.114, 0.0],
    [0.299, 0.587, 0.114, 0.0],
    [0.0, 0.0, 0.0, 1.0],
], dtype=np.float32)

_SEPIA = np.array([
    [0.393, 0.769, 0.189, 0.0],
    [0.349, 0.686, 0.168, 0.0],
    [0.272, 0.534, 0.131, 0.0],
    [0.0, 0.0, 0.0, 1.0],
], dtype=np.float32)


def normalize_effect(effect: str) -> str:
    name = (effect or "normal").strip().lower()
    if name not in EFFECTS:
        raise UnknownEffect(f"Unknown effect '{effect}'. Available: {', '.join(EFFECTS)}")
    return name


def apply_effect(rgba: np.ndarray, effect: str = "normal") -> np.ndarray:
    """
    Apply a display effect to an RGBA frame. Alpha is left as is.

    Returns a new array; the input is not modified.
    """
    name = normalize_effect(effect)
    if rgba.dtype != np.uint8 or rgba.ndim != 3 or rgba.shape[2] != 4:
        raise InvalidFormat(f"Effects need an RGBA uint8 frame, got shape {rgba.shape}")

    if name == "normal":
        return rgba.copy()
    if name == "invert":
        result = rgba.copy()
        result[..., :3] = 255 - result[..., :3]
        return result

    matrix = _GRAYSCALE if name == "grayscale" else _SEPIA
    # cv2.transform bão hòa về [0, 255] với uint8
    return cv2.transform(rgba, matrix)
