import os
import stat
import asyncio
import datetime
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel

from errors import NotFound, InvalidPath
from .paths import lossy, relative_to_root

MIME_TYPES = {
    "txt": "text/plain",
    "html": "text/html",
    "css": "text/css",
    "js": "application/javascript",
    "json": "application/json",
    "pdf": "application/pdf",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "mp4": "video/mp4",
    "mp3": "audio/mpeg",
    "zip": "application/zip",
}

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class FileEntry(BaseModel):
    name: str
    path: str
    is_dir: bool
    size: int
    modified: str
    created: str


class FileInfo(FileEntry):
    mime_type: Optional[str] = None


class FileListing(BaseModel):
    items: List[FileEntry]
    total: int


def mime_type_for(path: Path) -> Optional[str]:
    # extension match is exact: "IMG.JPG" has no type
    ext = path.suffix[1:]
    return MIME_TYPES.get(ext) if ext else None


def format_time(ts: float) -> str:
    return datetime.datetime.fromtimestamp(ts).strftime(TIME_FORMAT)


def _entry_fields(root: Path, path: Path, st: os.stat_result) -> dict:
    created = getattr(st, "st_birthtime", None) or st.st_ctime
    return {
        "name": lossy(path.name) or "unknown",
        "path": relative_to_root(root, path),
        "is_dir": stat.S_ISDIR(st.st_mode),
        "size": st.st_size,
        "modified": format_time(st.st_mtime),
        "created": format_time(created),
    }


def make_entry(root: Path, path: Path) -> FileEntry:
    return FileEntry(**_entry_fields(root, path, os.stat(path)))


def _scan(root: Path, directory: Path) -> List[FileEntry]:
    if not directory.exists():
        raise NotFound("Path not found")
    if not directory.is_dir():
        raise InvalidPath("Not a directory")

    entries: List[FileEntry] = []
    with os.scandir(directory) as it:
        for item in it:
            try:
                entries.append(make_entry(root, Path(item.path)))
            except OSError:
                # vanished or unreadable between scandir and stat
                continue
    entries.sort(key=lambda e: (not e.is_dir, e.name))
    return entries


async def list_directory(root: Path, directory: Path) -> FileListing:
    entries = await asyncio.to_thread(_scan, root, directory)
    return FileListing(items=entries, total=len(entries))


def _info(root: Path, path: Path) -> FileInfo:
    if not path.exists():
        raise NotFound("File not found")
    fields = _entry_fields(root, path, os.stat(path))
    return FileInfo(mime_type=mime_type_for(path), **fields)


async def file_info(root: Path, path: Path) -> FileInfo:
    return await asyncio.to_thread(_info, root, path)
