from fastapi import APIRouter, Query
from fastapi.responses import FileResponse

from app.services.storage import blob_store

router = APIRouter(prefix="/media", tags=["Media"])


@router.get("/{bucket}/{path:path}")
def get_media(bucket: str, path: str, token: str = Query(...)):
    """Serve a stored file behind a signed link."""
    blob_store.verify(bucket, path, token)
    return FileResponse(path=str(blob_store.open_path(bucket, path)))
