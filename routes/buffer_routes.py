from typing import Optional

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response
from pydantic import BaseModel, Field

from services.errors import EmptyInput, FrameProcessingError, InvalidFormat, UnknownHandle
from services.frame_buffer import FrameBuffer
from services.frame_registry import frame_registry, process_frame_by_handle
from services.image_codec import decode_image, encode_png
from utils.settings import settings
import logging

router = APIRouter(prefix="/api", tags=["Frame buffers"])


class BufferInfo(BaseModel):
    handle: int
    width: int
    height: int
    channels: int


class ProcessRequest(BaseModel):
    input_handle: int = Field(..., description="Handle of the RGBA input buffer")
    output_handle: int = Field(..., description="Handle of the output buffer")


class ProcessResult(BaseModel):
    processed: bool
    width: int
    height: int
    channels: int


def _buffer_info(handle: int, buffer: FrameBuffer) -> BufferInfo:
    return BufferInfo(handle=handle, width=buffer.width, height=buffer.height, channels=buffer.channels)


@router.post("/buffers", response_model=BufferInfo)
async def create_buffer(file: Optional[UploadFile] = File(None, description="Initial image; empty buffer if omitted")):
    """
    Register a frame buffer and return its handle.

    Uploaded images are stored as RGBA. Without a file the buffer is empty and
    can be used as a processing output.
    """
    buffer = FrameBuffer()
    if file is not None:
        image_bytes = await file.read()
        try:
            buffer = FrameBuffer(await run_in_threadpool(decode_image, image_bytes))
        except InvalidFormat as e:
            raise HTTPException(status_code=400, detail=str(e))

    handle = frame_registry.register(buffer)
    return _buffer_info(handle, buffer)


@router.get("/buffers/{handle}")
def get_buffer(handle: int):
    """Return the buffer contents as PNG."""
    try:
        buffer = frame_registry.get(handle).require_non_empty()
        if buffer.channels != 4:
            raise InvalidFormat(f"Buffer {handle} is not RGBA")
        return Response(content=encode_png(buffer.data), media_type="image/png")
    except UnknownHandle as e:
        raise HTTPException(status_code=404, detail=str(e))
    except EmptyInput:
        raise HTTPException(status_code=409, detail=f"Buffer {handle} is empty")
    except InvalidFormat as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/buffers/{handle}")
def delete_buffer(handle: int):
    try:
        frame_registry.release(handle)
    except UnknownHandle as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": f"Buffer {handle} released"}


@router.post("/process", response_model=ProcessResult)
def process_buffers(request: ProcessRequest):
    """
    Run grayscale + Canny on the input buffer and write RGBA edges to the output buffer.

    An empty input leaves the output untouched and returns processed=false.
    """
    try:
        processed = process_frame_by_handle(
            request.input_handle,
            request.output_handle,
            low_threshold=settings.get_int("canny.low_threshold"),
            high_threshold=settings.get_int("canny.high_threshold")
        )
        output = frame_registry.get(request.output_handle)
    except UnknownHandle as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidFormat as e:
        raise HTTPException(status_code=400, detail=str(e))
    except FrameProcessingError as e:
        logging.error(f"Processing {request.input_handle} -> {request.output_handle} failed: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Frame processing failed: {str(e)}")

    return ProcessResult(processed=processed, width=output.width, height=output.height, channels=output.channels)
