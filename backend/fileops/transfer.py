import os
import asyncio
import logging
from pathlib import Path
from typing import AsyncIterator, Optional
from urllib.parse import quote

import aiofiles
from fastapi.responses import Response, StreamingResponse

from errors import NotFound, InvalidPath
from .catalog import mime_type_for
from .ranges import parse_range

CHUNK_SIZE = 64 * 1024
DEFAULT_MIME = "application/octet-stream"

logger = logging.getLogger("transfer")


def _check_file(path: Path, verb: str) -> int:
    if not path.exists():
        raise NotFound("File not found")
    if path.is_dir():
        raise InvalidPath(f"Cannot {verb} directory")
    return os.stat(path).st_size


def content_disposition(filename: str) -> str:
    try:
        filename.encode("ascii")
        escaped = filename.replace('"', '\\"')
        return f'inline; filename="{escaped}"'
    except UnicodeEncodeError:
        return f"inline; filename*=utf-8''{quote(filename, safe='')}"


async def iter_file(path: Path, start: int, length: int, chunk_size: int = CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Yield ``length`` bytes of ``path`` from ``start``, one chunk at a time."""
    async with aiofiles.open(path, "rb") as f:
        await f.seek(start)
        remaining = length
        while remaining > 0:
            chunk = await f.read(min(chunk_size, remaining))
            if not chunk:
                logger.warning(f"[TRANSFER] {path} shrank while streaming, {remaining} byte(s) short")
                break
            remaining -= len(chunk)
            yield chunk


async def download(path: Path, range_header: Optional[str]) -> Response:
    total = await asyncio.to_thread(_check_file, path, "download")
    media_type = mime_type_for(path) or DEFAULT_MIME

    byte_range = parse_range(range_header, total) if range_header else None
    if byte_range is not None:
        headers = {
            "Content-Length": str(byte_range.length),
            "Content-Range": byte_range.content_range(total),
            "Accept-Ranges": "bytes",
        }
        return StreamingResponse(
            iter_file(path, byte_range.start, byte_range.length),
            status_code=206,
            media_type=media_type,
            headers=headers,
        )

    headers = {
        "Content-Length": str(total),
        "Accept-Ranges": "bytes",
        "Content-Disposition": content_disposition(path.name or "download"),
    }
    return StreamingResponse(iter_file(path, 0, total), media_type=media_type, headers=headers)


async def preview(path: Path) -> Response:
    await asyncio.to_thread(_check_file, path, "preview")
    async with aiofiles.open(path, "rb") as f:
        data = await f.read()
    return Response(content=data, media_type=mime_type_for(path) or DEFAULT_MIME)
