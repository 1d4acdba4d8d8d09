# backend/app.py
import logging
from pathlib import Path

import psutil
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

import errors
from settings import HOST, PORT, LOG_LEVEL, get_root

logger = logging.getLogger("files")

# ---- FastAPI app --------------------------------------------------------------
APP_TITLE = "File Dock"

app = FastAPI(title=APP_TITLE)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

errors.install(app)

# Import routers AFTER app is created (include_router happens below)
from file_routes import router as files_router    # noqa: E402
from batch_routes import router as batch_router   # noqa: E402


# ---- Basic routes -------------------------------------------------------------
@app.get("/")
def root():
    return {"ok": True, "service": APP_TITLE}


@app.get("/health")
def health(root_dir: Path = Depends(get_root)):
    usage = psutil.disk_usage(str(root_dir))
    return errors.success({
        "ok": True,
        "root": str(root_dir),
        "disk_total": usage.total,
        "disk_free": usage.free,
        "disk_percent": usage.percent,
    })


# ---- Routers (include AFTER app is created) -----------------------------------
app.include_router(batch_router)
app.include_router(files_router)


@app.on_event("startup")
def _announce_root():
    logger.info(f"[FILES] Root directory: {get_root()}")


def main():
    import uvicorn
    logger.info(f"Server running on http://{HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
