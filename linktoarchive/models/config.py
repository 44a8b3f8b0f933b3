"""Pydantic models for linktoarchive configuration."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel


class LinksConfig(BaseModel):
    """Archive link construction configuration."""

    default_rel: str = "noopener noreferrer"
    default_target: str = "_blank"
    web_archive_prefix: str = "https://web.archive.org/web/"
    archive_today_prefix: str = "https://archive.today/"
    external_class: str = "external"
    processed_class: str = "archive-processed"


class RenderConfig(BaseModel):
    """Archive anchor rendering configuration."""

    style: Literal["label", "icon"] = "label"
    icon_base_path: str = "/static/images"


class I18nConfig(BaseModel):
    """Message lookup configuration."""

    language: str = "en"
    fallback_language: str = "en"


class ServerConfig(BaseModel):
    """HTTP service configuration."""

    host: str = "127.0.0.1"
    port: int = 5180


class LinkToArchiveConfig(BaseModel):
    """Top-level linktoarchive configuration."""

    links: LinksConfig = LinksConfig()
    render: RenderConfig = RenderConfig()
    i18n: I18nConfig = I18nConfig()
    server: ServerConfig = ServerConfig()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LinkToArchiveConfig:
        return cls.model_validate(data)
