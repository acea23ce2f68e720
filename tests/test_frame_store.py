import cv2
import numpy as np
import pytest

from services.errors import FrameProcessingError
from services.frame_store import ProcessedFrameStore
from tests.conftest import solid_rgba
from utils.timer import FPSTimer


def test_empty_store():
    store = ProcessedFrameStore()
    assert store.latest() is None
    assert store.stats() == {
        "frame_available": False,
        "frames_processed": 0,
        "fps": 0.0,
        "last_processing_time_ms": 0.0,
    }


def test_publish_keeps_latest_frame():
    store = ProcessedFrameStore()
    store.publish(solid_rgba(height=10, width=10), 1.0)
    frame = solid_rgba(height=12, width=30)
    snapshot = store.publish(frame, 2.5)

    assert store.latest() is snapshot
    assert snapshot.resolution == "30x12"
    assert snapshot.jpeg[:2] == b"\xff\xd8"
    stats = store.stats()
    assert stats["frames_processed"] == 2
    assert stats["last_processing_time_ms"] == 2.5

    # later changes to the caller's array do not leak into the store
    frame[:] = 0
    assert snapshot.rgba.any()


def test_publish_writes_frame_file(tmp_path):
    path = tmp_path / "out" / "processed_frame.jpg"
    store = ProcessedFrameStore(frame_path=str(path))
    store.publish(solid_rgba(height=8, width=16))

    image = cv2.imread(str(path))
    assert image.shape == (8, 16, 3)
    assert [p.name for p in path.parent.iterdir()] == ["processed_frame.jpg"]


def test_reset():
    store = ProcessedFrameStore()
    store.publish(np.zeros((4, 4, 4), dtype=np.uint8))
    store.reset()
    assert store.latest() is None
    assert store.stats()["frames_processed"] == 0


def test_fps_timer_counts_frames_per_second():
    now = [0.0]
    timer = FPSTimer(clock=lambda: now[0])
    for _ in range(7):
        now[0] += 0.125
        timer.update()
    assert timer.fps == 0.0

    now[0] += 0.125
    assert timer.update() == 8.0


def test_failed_file_write_does_not_publish(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_bytes(b"")
    store = ProcessedFrameStore(frame_path=str(blocker / "processed_frame.jpg"))

    with pytest.raises(FrameProcessingError):
        store.publish(solid_rgba(height=8, width=16))
    assert store.latest() is None
    assert store.stats()["frames_processed"] == 0
