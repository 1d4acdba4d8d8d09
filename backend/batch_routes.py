# backend/batch_routes.py
from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

import fileops
from errors import success
from settings import get_root

router = APIRouter(prefix="/api")


class BatchDeleteRequest(BaseModel):
    paths: List[str]


class BatchTransferRequest(BaseModel):
    paths: List[str]
    destination: str


# Per-item failures come back inside "failed"; only an unsafe destination
# turns into an error response.
@router.post("/batch-delete")
async def batch_delete(req: BatchDeleteRequest, root: Path = Depends(get_root)):
    outcome = await fileops.delete_many(root, req.paths)
    return success(outcome.as_dict("deleted"))


@router.post("/batch-move")
async def batch_move(req: BatchTransferRequest, root: Path = Depends(get_root)):
    outcome = await fileops.move_many(root, req.paths, req.destination)
    return success(outcome.as_dict("moved"))


@router.post("/batch-copy")
async def batch_copy(req: BatchTransferRequest, root: Path = Depends(get_root)):
    outcome = await fileops.copy_many(root, req.paths, req.destination)
    return success(outcome.as_dict("copied"))
