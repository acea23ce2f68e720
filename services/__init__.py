from .errors import (FrameProcessingError, EmptyInput, InvalidFormat, InvalidThresholds,
                     UnknownEffect, AllocationFailure, UnknownHandle)
from .frame_buffer import FrameBuffer
from .frame_processor import process_frame, LOW_THRESHOLD, HIGH_THRESHOLD
from .frame_registry import FrameRegistry, frame_registry, process_frame_by_handle
from .edge_detection_service import process_canny_edge
__all__ = ['FrameProcessingError',
           'EmptyInput',
           'InvalidFormat',
           'InvalidThresholds',
           'UnknownEffect',
           'AllocationFailure',
           'UnknownHandle',
           'FrameBuffer',
           'process_frame',
           'LOW_THRESHOLD',
           'HIGH_THRESHOLD',
           'FrameRegistry',
           'frame_registry',
           'process_frame_by_handle',
           'process_canny_edge']
