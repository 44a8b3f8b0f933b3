"""Pydantic models for the linktoarchive package."""

from __future__ import annotations

from .config import (
    I18nConfig,
    LinksConfig,
    LinkToArchiveConfig,
    RenderConfig,
    ServerConfig,
)
from .links import (
    ARCHIVE_LINK_CLASS,
    ArchiveLinkDescriptor,
    LinkDecoration,
    LinkRenderAttributes,
    LinkVariant,
    ResourceModule,
)

__all__ = [
    "ARCHIVE_LINK_CLASS",
    "ArchiveLinkDescriptor",
    "I18nConfig",
    "LinkDecoration",
    "LinkRenderAttributes",
    "LinkToArchiveConfig",
    "LinkVariant",
    "LinksConfig",
    "RenderConfig",
    "ResourceModule",
    "ServerConfig",
]
