"""Pydantic models for link classification and archive link construction."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict

ARCHIVE_LINK_CLASS = "mw-archive-link"


class LinkVariant(str, Enum):
    """Classification of an external link target."""

    ONION = "onion"
    WEB_ARCHIVE = "web.archive"
    ARCHIVE_TODAY = "archive.today"
    REGULAR = "regular"


class ArchiveLinkDescriptor(BaseModel):
    """One archive link to render next to an external link."""

    model_config = ConfigDict(frozen=True)

    href: str
    label_key: str
    title_key: str
    css_class: str
    variant: LinkVariant

    @property
    def classes(self) -> str:
        return f"{ARCHIVE_LINK_CLASS} {self.css_class}"


class LinkRenderAttributes(BaseModel):
    """Attributes of the original link carried over to its archive links."""

    model_config = ConfigDict(frozen=True)

    rel: str
    target: str
    css_class: str = ""

    @classmethod
    def from_attribs(
        cls,
        attribs: Mapping[str, object] | None,
        default_rel: str = "noopener noreferrer",
        default_target: str = "_blank",
    ) -> LinkRenderAttributes:
        """Build from a host attribute mapping, filling in missing rel/target."""
        attribs = attribs or {}
        css_class = attribs.get("class") or ""
        if isinstance(css_class, (list, tuple)):
            css_class = " ".join(str(c) for c in css_class)
        return cls(
            rel=_attr_text(attribs.get("rel")) or default_rel,
            target=_attr_text(attribs.get("target")) or default_target,
            css_class=str(css_class),
        )


class LinkDecoration(BaseModel):
    """Result of the inline link hook.

    ``html`` is ``None`` when the link is left for the host to render.
    """

    html: str | None = None
    descriptors: list[ArchiveLinkDescriptor] = []

    @property
    def replaces_default(self) -> bool:
        return self.html is not None


class ResourceModule(BaseModel):
    """Client-side asset bundle the host loads on every page."""

    name: str
    scripts: list[str] = []
    styles: list[str] = []
    messages: list[str] = []


def _attr_text(value: object) -> str:
    # BeautifulSoup returns multi-valued attributes such as rel as lists.
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return str(value)
