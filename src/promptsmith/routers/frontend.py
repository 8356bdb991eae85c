from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from promptsmith.config import settings

router = APIRouter(tags=["frontend"])


@router.get("/{path:path}", include_in_schema=False)
async def spa_shell(path: str) -> FileResponse:
    """Serve the single-page app shell for every non-API route."""
    if path == "api" or path.startswith("api/"):
        raise HTTPException(status_code=404, detail="Not found")
    return FileResponse(settings.static_dir / "index.html")
