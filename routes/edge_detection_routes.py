from fastapi import APIRouter, UploadFile, File, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response
from services.edge_detection_service import process_canny_edge
from services.errors import FrameProcessingError, InvalidFormat
from utils.settings import settings
import logging

router = APIRouter(tags=["Edge detection"])


@router.post("/detect_edges/")
async def detect_edges(
        file: UploadFile = File(..., description="Image to process (JPEG/PNG)"),
        effect: str = "normal"
):
    """
    Grayscale + Canny edge detection of an uploaded image.

    - **file**: image of any channel count; it is converted to RGBA first.
    - **effect**: display effect applied to the result (normal, invert, grayscale, sepia).
    - Returns: 4-channel PNG of the same width and height.
    """
    # Đọc file ảnh
    image_bytes = await file.read()

    # Xử lý ảnh với Canny Edge Detection
    try:
        processed_image = await run_in_threadpool(
            process_canny_edge,
            image_bytes,
            effect=effect,
            threshold1=settings.get_int("canny.low_threshold"),
            threshold2=settings.get_int("canny.high_threshold")
        )
    except InvalidFormat as e:
        raise HTTPException(status_code=400, detail=str(e))
    except FrameProcessingError as e:
        logging.error(f"Edge detection failed: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Edge detection failed: {str(e)}")

    # Trả ảnh kết quả
    return Response(content=processed_image, media_type="image/png")
