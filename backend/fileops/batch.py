import os
import shutil
import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple

from errors import ApiError, IoError
from .paths import resolve, is_within, lossy

logger = logging.getLogger("batch")


@dataclass
class BatchOutcome:
    succeeded: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)

    def as_dict(self, verb: str) -> dict:
        return {verb: list(self.succeeded), "failed": [list(f) for f in self.failed]}


class ItemFailure(Exception):
    """A single batch item could not be processed; the message is the reason."""


def _source(root: Path, user_path: str) -> Path:
    try:
        path = resolve(root, user_path)
    except ApiError as e:
        raise ItemFailure(e.message)
    if path == resolve(root, ""):
        raise ItemFailure("Access denied")
    if not path.exists():
        raise ItemFailure("Not found")
    return path


def _remove(path: Path) -> None:
    if path.is_dir():
        shutil.rmtree(path)
    else:
        path.unlink()


def _copy_file(src, dst) -> None:
    # copyfile refuses a directory target instead of copying into it
    shutil.copyfile(src, dst)
    shutil.copymode(src, dst)


def copy_tree(src: Path, dst: Path) -> None:
    """
    Copy the directory ``src`` to ``dst`` using an explicit stack of pending
    (source, destination) pairs. Destination directories are created before
    their contents.
    """
    pending = [(src, dst)]
    while pending:
        s, d = pending.pop()
        d.mkdir(parents=True, exist_ok=True)
        with os.scandir(s) as it:
            for entry in it:
                target = d / entry.name
                if entry.is_dir():
                    pending.append((Path(entry.path), target))
                else:
                    _copy_file(entry.path, target)


def _copy(src: Path, dst: Path) -> None:
    if not src.is_dir():
        _copy_file(src, dst)
        return
    if is_within(src, dst):
        raise ItemFailure("Cannot copy a directory into itself")
    existed = dst.exists()
    try:
        copy_tree(src, dst)
    except OSError:
        if not existed:
            shutil.rmtree(dst, ignore_errors=True)
        raise


async def _run(outcome: BatchOutcome, user_path: str, func, *args) -> None:
    try:
        await asyncio.to_thread(func, *args)
    except (ItemFailure, OSError) as e:
        outcome.failed.append((user_path, lossy(str(e))))
    else:
        outcome.succeeded.append(user_path)


async def _destination(root: Path, destination: str) -> Path:
    # an unsafe destination fails the whole batch
    dest = resolve(root, destination)
    try:
        await asyncio.to_thread(dest.mkdir, parents=True, exist_ok=True)
    except OSError as e:
        raise IoError(str(e))
    return dest


def _log(verb: str, outcome: BatchOutcome) -> None:
    logger.info(f"[BATCH] {verb}: {len(outcome.succeeded)} ok, {len(outcome.failed)} failed")
    for path, reason in outcome.failed:
        logger.warning(f"[BATCH] {verb} failed for '{path}': {reason}")


async def delete_many(root: Path, paths: Iterable[str]) -> BatchOutcome:
    outcome = BatchOutcome()

    def delete_one(user_path: str) -> None:
        _remove(_source(root, user_path))

    for user_path in paths:
        await _run(outcome, user_path, delete_one, user_path)
    _log("delete", outcome)
    return outcome


async def move_many(root: Path, paths: Iterable[str], destination: str) -> BatchOutcome:
    dest = await _destination(root, destination)
    outcome = BatchOutcome()

    def move_one(user_path: str) -> None:
        src = _source(root, user_path)
        # rename overwrites an existing file of the same name
        os.rename(src, dest / (src.name or "unknown"))

    for user_path in paths:
        await _run(outcome, user_path, move_one, user_path)
    _log("move", outcome)
    return outcome


async def copy_many(root: Path, paths: Iterable[str], destination: str) -> BatchOutcome:
    dest = await _destination(root, destination)
    outcome = BatchOutcome()

    def copy_one(user_path: str) -> None:
        src = _source(root, user_path)
        _copy(src, dest / (src.name or "unknown"))

    for user_path in paths:
        await _run(outcome, user_path, copy_one, user_path)
    _log("copy", outcome)
    return outcome
