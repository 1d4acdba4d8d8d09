# backend/file_routes.py
import logging
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Request
from starlette.datastructures import UploadFile
from pydantic import BaseModel

import fileops
from errors import InvalidRequest, success
from settings import MAX_UPLOAD_MB, get_root

logger = logging.getLogger("files")
if not logger.handlers:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")

router = APIRouter(prefix="/api")


class CreateDirRequest(BaseModel):
    path: str
    name: str


# ---- Listing / metadata -------------------------------------------------------
@router.get("/files")
async def list_root(root: Path = Depends(get_root)):
    return await list_files("", root)


@router.get("/files/{path:path}")
async def list_files(path: str, root: Path = Depends(get_root)):
    listing = await fileops.list_directory(root, fileops.resolve(root, path))
    return success(listing.model_dump())


@router.get("/info/{path:path}")
async def get_file_info(path: str, root: Path = Depends(get_root)):
    info = await fileops.file_info(root, fileops.resolve(root, path))
    return success(info.model_dump())


# ---- Content -----------------------------------------------------------------
@router.get("/preview/{path:path}")
async def preview_file(path: str, root: Path = Depends(get_root)):
    return await fileops.preview(fileops.resolve(root, path))


@router.get("/download/{path:path}")
async def download_file(
    path: str,
    range_header: Optional[str] = Header(None, alias="Range"),
    root: Path = Depends(get_root),
):
    return await fileops.download(fileops.resolve(root, path), range_header)


# ---- Upload ------------------------------------------------------------------
async def _collect_uploads(request: Request) -> List[UploadFile]:
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > MAX_UPLOAD_MB * 1024 * 1024:
        raise InvalidRequest(f"Upload exceeds {MAX_UPLOAD_MB} MB")
    try:
        form = await request.form()
    except Exception as e:
        raise InvalidRequest(f"Multipart error: {e}")
    # any field name is accepted; plain text fields are ignored
    uploads = [val for _, val in form.multi_items() if isinstance(val, UploadFile)]
    # chunked bodies carry no Content-Length, so also check what was received
    if sum(up.size or 0 for up in uploads) > MAX_UPLOAD_MB * 1024 * 1024:
        raise InvalidRequest(f"Upload exceeds {MAX_UPLOAD_MB} MB")
    return uploads


@router.post("/upload")
async def upload_root(request: Request, root: Path = Depends(get_root)):
    return await upload_files("", request, root)


@router.post("/upload/{path:path}")
async def upload_files(path: str, request: Request, root: Path = Depends(get_root)):
    uploads = await _collect_uploads(request)
    uploaded = await fileops.save_uploads(root, path, uploads)
    return success({"uploaded": uploaded})


# ---- Mutations ---------------------------------------------------------------
@router.delete("/delete/{path:path}")
async def delete_file(path: str, root: Path = Depends(get_root)):
    target = fileops.resolve(root, path)
    await fileops.delete_file(target)
    logger.info(f"[FILES] Deleted file {target}")
    return success()


@router.delete("/delete-dir/{path:path}")
async def delete_directory(path: str, root: Path = Depends(get_root)):
    target = fileops.resolve(root, path)
    await fileops.delete_directory(root, target)
    logger.info(f"[FILES] Deleted directory {target}")
    return success()


@router.post("/mkdir")
async def create_directory(req: CreateDirRequest, root: Path = Depends(get_root)):
    new_dir = await fileops.make_directory(root, req.path, req.name)
    logger.info(f"[FILES] Created directory {new_dir}")
    return success()
