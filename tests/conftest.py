import cv2
import numpy as np
import pytest

from services.frame_registry import frame_registry
from services.frame_store import frame_store


def solid_rgba(height=20, width=40, color=(120, 30, 200, 255)):
    frame = np.empty((height, width, 4), dtype=np.uint8)
    frame[:] = color
    return frame


def vertical_boundary_rgba(height=20, width=40, boundary=20):
    frame = solid_rgba(height, width, (0, 0, 0, 255))
    frame[:, boundary:, :3] = 255
    return frame


def png_bytes(image):
    ok, buffer = cv2.imencode(".png", image)
    assert ok
    return buffer.tobytes()


@pytest.fixture
def boundary_frame():
    return vertical_boundary_rgba()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from main import app

    frame_registry.clear()
    frame_store.reset()
    frame_path, jpeg_quality = frame_store.frame_path, frame_store.jpeg_quality
    with TestClient(app) as test_client:
        yield test_client
    frame_store.frame_path, frame_store.jpeg_quality = frame_path, jpeg_quality
    frame_registry.clear()
    frame_store.reset()
