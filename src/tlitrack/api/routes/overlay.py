"""Overlay page route."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from tlitrack.config.paths import get_static_dir

router = APIRouter(tags=["overlay"])

OVERLAY_FILE = "overlay.html"


@router.get("/overlay", include_in_schema=False)
def get_overlay() -> FileResponse:
    """Compact always-on-top view of the active manual session."""
    page = get_static_dir() / OVERLAY_FILE
    if not page.exists():
        raise HTTPException(status_code=404, detail="Overlay page not installed")
    return FileResponse(page, media_type="text/html")
