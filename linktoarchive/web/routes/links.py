"""Link classification and inline rendering API routes."""

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ...link_utils import classify_url, is_http_url

router = APIRouter(tags=["links"])


class ClassifyRequest(BaseModel):
    """Request body for classifying a URL."""

    url: str


class DecorateRequest(BaseModel):
    """Request body for rendering one external link."""

    url: str
    text: str = ""
    attribs: dict[str, str] = {}
    link_type: str | None = "free"


@router.post("/classify")
async def classify(request: Request, body: ClassifyRequest) -> dict[str, Any]:
    """Classify a URL and list the archive links it would get."""
    hooks = request.app.state.hooks
    descriptors = hooks.renderer.descriptors(body.url)

    return {
        "url": body.url,
        "variant": classify_url(body.url).value if is_http_url(body.url) else None,
        "skipped": not descriptors,
        "descriptors": [
            {
                **descriptor.model_dump(mode="json"),
                "label": hooks.renderer.label(descriptor),
                "title": hooks.renderer.title(descriptor),
            }
            for descriptor in descriptors
        ],
    }


@router.post("/decorate")
async def decorate(request: Request, body: DecorateRequest) -> dict[str, Any]:
    """Render an external link with its archive links."""
    hooks = request.app.state.hooks
    decoration = hooks.on_linker_make_external_link(body.url, body.text, body.attribs, body.link_type)

    return {
        "handled": decoration.replaces_default,
        "html": decoration.html,
    }
