"""Archive link rendering shared by the inline and post-process strategies."""

from __future__ import annotations

import html
from collections.abc import Mapping

from .link_utils import descriptors_for_url, has_processed_marker
from .messages import MessageCatalog, MessageLookup, resolve_message
from .models.config import LinkToArchiveConfig
from .models.links import ArchiveLinkDescriptor, LinkDecoration, LinkRenderAttributes

INLINE_WRAPPER_CLASS = "ext-link-to-archive"
SIBLING_CLASS = "has-sibling"
INLINE_PROCESSED_CLASS = "php-archive-processed"

# css class -> (image file, alt text, width)
_ICONS: dict[str, tuple[str, str, str]] = {
    "archive-onion": ("tor-onion-logo.svg", "onion icon", "16"),
    "archive-web": ("internet-archive-logo.svg", "archive.org icon", "14"),
    "archive-today": ("archive-today-logo.svg", "archive.today icon", "12"),
}


def _html_attrs(attrs: Mapping[str, object]) -> str:
    parts = []
    for name, value in attrs.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            value = " ".join(str(v) for v in value)
        parts.append(f' {name}="{html.escape(str(value), quote=True)}"')
    return "".join(parts)


class ArchiveLinkRenderer:
    """Turns archive link descriptors into anchor attributes and markup."""

    def __init__(self, settings: LinkToArchiveConfig | None = None, lookup: MessageLookup | None = None):
        self.settings = settings or LinkToArchiveConfig()
        if lookup is None:
            lookup = MessageCatalog(self.settings.i18n.language, self.settings.i18n.fallback_language)
        self.lookup = lookup

    def descriptors(self, url: str | None) -> list[ArchiveLinkDescriptor]:
        links = self.settings.links
        return descriptors_for_url(
            url,
            web_archive_prefix=links.web_archive_prefix,
            archive_today_prefix=links.archive_today_prefix,
        )

    def base_attributes(self, attribs: Mapping[str, object] | None) -> LinkRenderAttributes:
        links = self.settings.links
        return LinkRenderAttributes.from_attribs(attribs, links.default_rel, links.default_target)

    def label(self, descriptor: ArchiveLinkDescriptor) -> str:
        return "[" + resolve_message(self.lookup, descriptor.label_key) + "]"

    def title(self, descriptor: ArchiveLinkDescriptor) -> str:
        return resolve_message(self.lookup, descriptor.title_key)

    def anchor_attributes(self, descriptor: ArchiveLinkDescriptor, base: LinkRenderAttributes) -> dict[str, str]:
        """Attributes of one archive anchor, identical for every strategy."""
        return {
            "href": descriptor.href,
            "title": self.title(descriptor),
            "class": descriptor.classes,
            "rel": base.rel,
            "target": base.target,
        }

    def icon_attributes(self, descriptor: ArchiveLinkDescriptor) -> dict[str, str] | None:
        """Image attributes in icon style, None in label style."""
        if self.settings.render.style != "icon":
            return None
        src, alt, width = _ICONS.get(descriptor.css_class, _ICONS["archive-web"])
        base_path = self.settings.render.icon_base_path.rstrip("/")
        return {
            "src": f"{base_path}/{src}",
            "alt": alt,
            "width": width,
            "height": "16",
            "decoding": "async",
            "loading": "lazy",
        }

    def anchor_html(self, descriptor: ArchiveLinkDescriptor, base: LinkRenderAttributes) -> str:
        icon = self.icon_attributes(descriptor)
        if icon is not None:
            content = f"<img{_html_attrs(icon)}>"
        else:
            content = html.escape(self.label(descriptor), quote=False)
        return f"<a{_html_attrs(self.anchor_attributes(descriptor, base))}>{content}</a>"

    def render_inline_link(
        self,
        url: str,
        text: str,
        attribs: Mapping[str, object] | None = None,
        link_type: str | None = "free",
    ) -> LinkDecoration:
        """Render an external link followed by its archive links.

        Returns a decoration without html when the host should render the
        link itself.
        """
        attribs = dict(attribs or {})
        if not link_type or has_processed_marker(_class_text(attribs.get("class"))):
            return LinkDecoration()

        descriptors = self.descriptors(url)
        if not descriptors:
            return LinkDecoration()

        classes = _class_text(attribs.get("class")).split()
        classes.append(INLINE_PROCESSED_CLASS)
        original = {**attribs, "href": url, "class": " ".join(classes)}
        base = self.base_attributes(attribs)

        parts = [f"<a{_html_attrs(original)}>{text}</a>"]
        last = len(descriptors) - 1
        for index, descriptor in enumerate(descriptors):
            wrapper_class = INLINE_WRAPPER_CLASS if index == last else f"{INLINE_WRAPPER_CLASS} {SIBLING_CLASS}"
            parts.append(f'<sup class="{wrapper_class}">{self.anchor_html(descriptor, base)}</sup>')

        return LinkDecoration(html="".join(parts), descriptors=descriptors)


def _class_text(value: object) -> str:
    if not value:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return str(value)


def render_inline_link(
    url: str,
    text: str,
    attribs: Mapping[str, object] | None = None,
    link_type: str | None = "free",
    lookup: MessageLookup | None = None,
    settings: LinkToArchiveConfig | None = None,
) -> LinkDecoration:
    """Inline-hook strategy with default settings."""
    return ArchiveLinkRenderer(settings, lookup).render_inline_link(url, text, attribs, link_type)
