import shutil
import asyncio
import logging
from pathlib import Path
from typing import Iterable, List

import aiofiles
from starlette.datastructures import UploadFile

from errors import ApiError, NotFound, InvalidPath, InvalidRequest, PermissionDenied
from .paths import resolve, sanitize

logger = logging.getLogger("files")


async def save_uploads(root: Path, rel_dir: str, uploads: Iterable[UploadFile]) -> List[str]:
    """
    Write every named upload into ``rel_dir``. Returns the names that were
    written. Names that failed are only logged, not returned.
    """
    target_dir = resolve(root, rel_dir)
    await asyncio.to_thread(target_dir.mkdir, parents=True, exist_ok=True)

    uploaded: List[str] = []
    error_count = 0
    for up in uploads:
        if not up.filename:
            continue
        name = up.filename
        try:
            dest = resolve(target_dir, name)
            data = await up.read()
            async with aiofiles.open(dest, "wb") as out:
                await out.write(data)
        except (ApiError, OSError, ValueError) as e:
            logger.error(f"[UPLOAD] Failed to write file {name}: {e}")
            error_count += 1
            continue
        logger.info(f"[UPLOAD] Saved {dest} ({len(data)} bytes)")
        uploaded.append(name)

    if not uploaded and error_count:
        raise InvalidRequest(f"Failed to upload {error_count} files")
    return uploaded


def _delete_file(path: Path) -> None:
    if not path.exists():
        raise NotFound("File not found")
    if path.is_dir():
        raise InvalidPath("Use delete-dir for directories")
    path.unlink()


async def delete_file(path: Path) -> None:
    await asyncio.to_thread(_delete_file, path)


def _delete_directory(root: Path, path: Path) -> None:
    if path == resolve(root, ""):
        raise PermissionDenied("Access denied")
    if not path.exists():
        raise NotFound("Directory not found")
    if not path.is_dir():
        raise InvalidPath("Not a directory")
    shutil.rmtree(path)


async def delete_directory(root: Path, path: Path) -> None:
    await asyncio.to_thread(_delete_directory, root, path)


def _make_directory(root: Path, parent: str, name: str) -> Path:
    resolve(root, parent)
    new_dir = resolve(root, f"{sanitize(parent)}/{name}")
    if new_dir.exists():
        raise InvalidRequest("Directory already exists")
    new_dir.mkdir(parents=True)
    return new_dir


async def make_directory(root: Path, parent: str, name: str) -> Path:
    return await asyncio.to_thread(_make_directory, root, parent, name)
