import time


class FPSTimer:
    """Frames per second over a rolling one-second window."""

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self.last = clock()
        self.frames = 0
        self.fps = 0.0

    def update(self) -> float:
        self.frames += 1
        now = self._clock()
        if now - self.last >= 1.0:
            self.fps = self.frames / (now - self.last)
            self.frames = 0
            self.last = now
        return self.fps

    def reset(self):
        self.last = self._clock()
        self.frames = 0
        self.fps = 0.0
