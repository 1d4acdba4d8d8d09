import os
from pathlib import Path, PurePath
from typing import List, Tuple

from errors import PermissionDenied

_SEPARATORS = "/" + os.sep


def sanitize(user_path: str) -> str:
    return (user_path or "").strip(_SEPARATORS)


def normalize(path: PurePath) -> Tuple[str, ...]:
    """
    Lexically normalize a path without touching the filesystem.
    '..' drops the previous component but never the anchor ('/' or a drive),
    '.' is ignored.
    """
    parts: List[str] = []
    anchor = path.anchor
    for part in path.parts:
        if part == "..":
            if parts and not (len(parts) == 1 and parts[0] == anchor):
                parts.pop()
        elif part == ".":
            continue
        else:
            parts.append(part)
    return tuple(parts)


def is_within(root: PurePath, target: PurePath) -> bool:
    base = normalize(root)
    candidate = normalize(target)
    return candidate[: len(base)] == base


def resolve(root: Path, user_path: str) -> Path:
    """
    Map a client-supplied path onto the filesystem under ``root``.
    Works for paths that do not exist yet; symlinks are not followed.
    """
    cleaned = sanitize(user_path)
    candidate = root / cleaned if cleaned else root
    if not is_within(root, candidate):
        raise PermissionDenied("Access denied")
    return Path(*normalize(candidate))


def lossy(text: str) -> str:
    """Replace undecodable filename bytes so the text is safe to serialize."""
    return os.fsencode(text).decode("utf-8", "replace")


def relative_to_root(root: Path, path: Path) -> str:
    try:
        rel = path.relative_to(Path(*normalize(root)))
    except ValueError:
        rel = path
    return lossy(rel.as_posix()) if str(rel) != "." else ""
