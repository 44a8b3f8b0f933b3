"""Utilities for classifying external links and building their archive links."""

from __future__ import annotations

import re
from collections.abc import Iterable
from urllib.parse import urlparse

from .models.links import ArchiveLinkDescriptor, LinkVariant

_ONION_RE = re.compile(r"^https?://[^./]+\.?[^./]+\.onion(/|$)")
_WEB_ARCHIVE_RE = re.compile(r"^https://web\.archive\.org/web")
# archive.today runs several mirrors that all serve the same archive
_ARCHIVE_TODAY_RE = re.compile(r"^https://archive\.(today|fo|is|li|md|ph|vn)")

_HTTP_SCHEMES = {"http", "https"}
_EDIT_ACTION = "action=edit"

WEB_ARCHIVE_PREFIX = "https://web.archive.org/web/"
ARCHIVE_TODAY_PREFIX = "https://archive.today/"

PROCESSED_CLASSES = frozenset({"archive-processed", "php-archive-processed"})

# (label key, title key, css class) for links that already point at a known target
_SINGLE_LINK_KEYS: dict[LinkVariant, tuple[str, str, str]] = {
    LinkVariant.ONION: ("linktoarchive-onion-label", "linktoarchive-onion-link", "archive-onion"),
    LinkVariant.WEB_ARCHIVE: ("linktoarchive-archive-label", "linktoarchive-archive-link", "archive-web"),
    LinkVariant.ARCHIVE_TODAY: (
        "linktoarchive-archivetoday-label",
        "linktoarchive-archivetoday-link",
        "archive-today",
    ),
}


def url_scheme(url: str | None) -> str:
    """Return the scheme of a URL as written, or "" when it cannot be parsed.

    Surrounding whitespace makes a URL unparsable here, since it would end up
    inside the archive hrefs.
    """
    if not url:
        return ""
    try:
        parsed = urlparse(url)
    except ValueError:
        return ""
    if not parsed.scheme:
        return ""
    scheme = url.split(":", 1)[0]
    return scheme if scheme.lower() == parsed.scheme else ""


def is_http_url(url: str | None) -> bool:
    return url_scheme(url) in _HTTP_SCHEMES


def classify_url(url: str) -> LinkVariant:
    """Classify a URL. The first matching rule wins; anything else is regular."""
    if _ONION_RE.match(url):
        return LinkVariant.ONION
    if _WEB_ARCHIVE_RE.match(url):
        return LinkVariant.WEB_ARCHIVE
    if _ARCHIVE_TODAY_RE.match(url):
        return LinkVariant.ARCHIVE_TODAY
    return LinkVariant.REGULAR


def has_processed_marker(classes: str | Iterable[str] | None) -> bool:
    """Check whether a class attribute carries one of the processed markers."""
    if not classes:
        return False
    if isinstance(classes, str):
        classes = classes.split()
    return any(cls in PROCESSED_CLASSES for cls in classes)


def should_skip_url(url: str | None) -> bool:
    """URL-level skip rules shared by every rendering strategy."""
    if not url or not is_http_url(url):
        return True
    return _EDIT_ACTION in url


def build_descriptors(
    url: str,
    variant: LinkVariant,
    web_archive_prefix: str = WEB_ARCHIVE_PREFIX,
    archive_today_prefix: str = ARCHIVE_TODAY_PREFIX,
) -> list[ArchiveLinkDescriptor]:
    """Build the archive link descriptors for a classified URL.

    Regular links get a web.archive.org link followed by an archive.today
    link. Links that already point at an archive or an onion service get a
    single descriptor that keeps the original href.
    """
    if variant in _SINGLE_LINK_KEYS:
        label_key, title_key, css_class = _SINGLE_LINK_KEYS[variant]
        return [
            ArchiveLinkDescriptor(
                href=url,
                label_key=label_key,
                title_key=title_key,
                css_class=css_class,
                variant=variant,
            )
        ]

    return [
        ArchiveLinkDescriptor(
            href=f"{web_archive_prefix}{url}",
            label_key="linktoarchive-archive-label",
            title_key="linktoarchive-archive-link-desc",
            css_class="archive-web",
            variant=variant,
        ),
        ArchiveLinkDescriptor(
            href=f"{archive_today_prefix}{url}",
            label_key="linktoarchive-archivetoday-label",
            title_key="linktoarchive-archivetoday-link-desc",
            css_class="archive-today",
            variant=variant,
        ),
    ]


def descriptors_for_url(
    url: str | None,
    web_archive_prefix: str = WEB_ARCHIVE_PREFIX,
    archive_today_prefix: str = ARCHIVE_TODAY_PREFIX,
) -> list[ArchiveLinkDescriptor]:
    """Skip policy, classification and construction in one call."""
    if should_skip_url(url):
        return []
    return build_descriptors(
        url,
        classify_url(url),
        web_archive_prefix=web_archive_prefix,
        archive_today_prefix=archive_today_prefix,
    )
