"""Page post-processing and client asset API routes."""

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ...messages import MessageCatalog, available_languages

router = APIRouter(tags=["pages"])


class PostprocessRequest(BaseModel):
    """Request body for post-processing rendered page HTML."""

    html: str


@router.post("/postprocess")
async def postprocess(request: Request, body: PostprocessRequest) -> dict[str, Any]:
    """Add archive links after the external links of a rendered page."""
    result = request.app.state.hooks.postprocessor.process(body.html)
    return {"html": result.html, "annotated": result.annotated}


@router.get("/modules")
async def modules(request: Request) -> dict[str, Any]:
    """Client asset bundles to load on every page."""
    hooks = request.app.state.hooks
    return {
        "load": hooks.on_before_page_display(),
        "modules": [module.model_dump() for module in hooks.resource_modules()],
    }


@router.get("/messages")
async def messages(request: Request, lang: str | None = None) -> dict[str, Any]:
    """Resolved message table for the browser script."""
    i18n = request.app.state.settings.i18n
    language = lang or i18n.language
    catalog = MessageCatalog(language, i18n.fallback_language)
    return {
        "language": language,
        "available": available_languages(),
        "messages": catalog.table(),
    }
