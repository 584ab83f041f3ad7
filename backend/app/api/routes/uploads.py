"""Static file endpoint for user-uploaded assets."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from app.core.dependencies import get_upload_server
from app.services.uploads import UploadFileServer

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.get("/{file_path:path}")
def serve_upload(file_path: str, server: UploadFileServer = Depends(get_upload_server)) -> Response:
    # Plain def: FastAPI runs it in the thread pool.
    segments = [segment for segment in file_path.split("/") if segment]
    result = server.serve(segments)
    return Response(
        content=result.body,
        status_code=result.status_code,
        media_type=result.media_type,
        headers=result.headers,
    )
