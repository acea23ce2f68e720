import base64
import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse, Response
import psutil

from services.effects import EFFECTS, apply_effect
from services.errors import FrameProcessingError, InvalidFormat
from services.frame_store import frame_store
from services.image_codec import encode_jpeg

router = APIRouter(tags=["Frame viewer"])

SERVER_NAME = "Edge Detection API"
VERSION = "1.0.0"
ENDPOINTS = ["/api/frame", "/api/health", "/api/stats", "/processed_frame.jpg"]

_started_at = time.monotonic()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _memory_usage() -> dict:
    memory_info = psutil.Process().memory_info()
    return {"rss": memory_info.rss, "vms": memory_info.vms}


@router.get("/api/frame")
def get_frame(effect: str = "normal"):
    """
    Latest processed frame as a base64 JPEG data URL, with viewer metadata.

    - **effect**: display effect applied on top of the stored frame.
    """
    snapshot = frame_store.latest()
    if snapshot is None:
        return {
            "frame": None,
            "fps": 0,
            "resolution": "0x0",
            "timestamp": _now(),
            "fileSize": 0,
            "lastModified": None,
            "effects": [],
            "status": "no_frame",
            "message": "No processed frame available. Upload a frame to /detect_edges/ first."
        }

    jpeg = snapshot.jpeg
    if effect.strip().lower() != "normal":
        try:
            jpeg = encode_jpeg(apply_effect(snapshot.rgba, effect), frame_store.jpeg_quality)
        except InvalidFormat as e:
            raise HTTPException(status_code=400, detail=str(e))
        except FrameProcessingError as e:
            logging.error(f"Cannot encode frame with effect {effect}: {str(e)}")
            return JSONResponse(status_code=500, content={
                "frame": None,
                "fps": 0,
                "resolution": "0x0",
                "timestamp": _now(),
                "fileSize": 0,
                "lastModified": None,
                "effects": [],
                "status": "error",
                "message": str(e)
            })

    return {
        "frame": "data:image/jpeg;base64," + base64.b64encode(jpeg).decode("ascii"),
        "fps": frame_store.stats()["fps"],
        "resolution": snapshot.resolution,
        "timestamp": _now(),
        "fileSize": len(jpeg),
        "lastModified": snapshot.timestamp.isoformat(),
        "effects": [name.capitalize() for name in EFFECTS],
        "status": "success"
    }


@router.get("/api/health")
def health():
    return {
        "status": "healthy",
        "timestamp": _now(),
        "server": SERVER_NAME,
        "version": VERSION
    }


@router.get("/api/stats")
def stats():
    store_stats = frame_store.stats()
    return {
        "frameAvailable": store_stats["frame_available"],
        "serverUptime": round(time.monotonic() - _started_at, 3),
        "timestamp": _now(),
        "endpoints": ENDPOINTS,
        "processing": {
            "fps": store_stats["fps"],
            "processingTime": store_stats["last_processing_time_ms"],
            "framesProcessed": store_stats["frames_processed"]
        },
        "memoryUsage": _memory_usage()
    }


@router.get("/processed_frame.jpg")
def processed_frame():
    snapshot = frame_store.latest()
    if snapshot is None:
        raise HTTPException(status_code=404, detail="No processed frame available")
    return Response(content=snapshot.jpeg, media_type="image/jpeg")
