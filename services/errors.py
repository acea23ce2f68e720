class FrameProcessingError(Exception):
    """Base error for frame processing."""


class EmptyInput(FrameProcessingError):
    """Input buffer has zero width or height."""


class InvalidFormat(FrameProcessingError, ValueError):
    """Buffer is not the expected 8-bit layout, or image bytes cannot be decoded."""


class InvalidThresholds(InvalidFormat):
    pass


class UnknownEffect(InvalidFormat):
    pass


class AllocationFailure(FrameProcessingError, MemoryError):
    """Output buffer storage could not be allocated."""


class UnknownHandle(FrameProcessingError, KeyError):
    def __init__(self, handle):
        super().__init__(handle)
        self.handle = handle

    def __str__(self):
        return f"Unknown frame handle: {self.handle}"
