import logging
import os
import tempfile
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import numpy as np

from services.errors import FrameProcessingError
from services.image_codec import encode_jpeg
from utils.timer import FPSTimer


@dataclass
class FrameSnapshot:
    rgba: np.ndarray
    jpeg: bytes
    width: int
    height: int
    timestamp: datetime
    processing_time_ms: float

    @property
    def resolution(self) -> str:
        return f"{self.width}x{self.height}"


class ProcessedFrameStore:
    """
    Keeps the most recent processed frame for the viewer.

    When frame_path is set, every published frame is also written there as JPEG.
    """

    def __init__(self, frame_path: Optional[str] = None, jpeg_quality: int = 90):
        self.frame_path = frame_path
        self.jpeg_quality = jpeg_quality
        self._lock = threading.Lock()
        self._latest: Optional[FrameSnapshot] = None
        self._timer = FPSTimer()
        self._frames_processed = 0

    def publish(self, rgba: np.ndarray, processing_time_ms: float = 0.0) -> FrameSnapshot:
        jpeg = encode_jpeg(rgba, self.jpeg_quality)
        snapshot = FrameSnapshot(
            rgba=rgba.copy(),
            jpeg=jpeg,
            width=int(rgba.shape[1]),
            height=int(rgba.shape[0]),
            timestamp=datetime.now(timezone.utc),
            processing_time_ms=float(processing_time_ms),
        )

        # Ghi file trước, chỉ cập nhật trạng thái khi ghi thành công
        if self.frame_path:
            self._write_file(jpeg)

        with self._lock:
            self._latest = snapshot
            self._frames_processed += 1
            self._timer.update()
        logging.debug(f"Published frame {snapshot.resolution} ({len(jpeg)} bytes)")
        return snapshot

    def _write_file(self, jpeg: bytes):
        # Ghi file tạm rồi đổi tên để người xem không đọc file dở dang
        directory = os.path.dirname(os.path.abspath(self.frame_path))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".jpg")
            with os.fdopen(fd, "wb") as f:
                f.write(jpeg)
            os.replace(tmp_path, self.frame_path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise FrameProcessingError(f"Cannot write frame file {self.frame_path}: {e}") from e

    def latest(self) -> Optional[FrameSnapshot]:
        with self._lock:
            return self._latest

    def stats(self) -> dict:
        with self._lock:
            latest = self._latest
            return {
                "frame_available": latest is not None,
                "frames_processed": self._frames_processed,
                "fps": round(self._timer.fps, 2),
                "last_processing_time_ms": latest.processing_time_ms if latest else 0.0,
            }

    def reset(self):
        with self._lock:
            self._latest = None
            self._frames_processed = 0
            self._timer.reset()


frame_store = ProcessedFrameStore()
