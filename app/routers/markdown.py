from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from app.schemas.post import RenderMarkdownRequest
from app.services.markdown_service import render_markdown

router = APIRouter()


@router.post("/render-markdown", response_class=HTMLResponse)
def preview_markdown(request: RenderMarkdownRequest):
    """Live preview for the post editor."""
    return render_markdown(request.markdown or "")
