import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from routes.edge_detection_routes import router as edge_router
from routes.buffer_routes import router as buffer_router
from routes.frame_routes import router as frame_router
from services.frame_store import frame_store
from utils.settings import settings

# Thiết lập logging
logging.basicConfig(level=getattr(logging, str(settings.get("log.level")).upper(), logging.INFO),
                    format='%(asctime)s - %(levelname)s - %(message)s')


def configure_frame_store(store, config):
    """Apply the frame.* settings to a frame store."""
    store.frame_path = config.get("frame.output_path")
    store.jpeg_quality = config.get_int("frame.jpeg_quality")


configure_frame_store(frame_store, settings)

app = FastAPI(title="Edge Detection API")

# Cho phép trình xem truy cập từ cổng khác
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
)

# Đăng ký route
app.include_router(edge_router)
app.include_router(buffer_router)
app.include_router(frame_router)


def main():
    import uvicorn
    host = settings.get("server.host")
    port = settings.get_int("server.port")
    logging.info(f"Edge Detection API running on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
