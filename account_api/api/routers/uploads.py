"""Static serving of stored avatar files."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from ..deps import AppComponents, get_components

router = APIRouter(tags=["uploads"])


@router.get("/uploads/{filename}")
def serve_upload(filename: str, components: AppComponents = Depends(get_components)):
    """Serve an uploaded file."""

    file_path = components.files.resolve(filename)
    if file_path is None:
        raise HTTPException(404, "File not found")
    return FileResponse(file_path)


__all__ = ["router"]
