"""Post-process rendered page HTML, adding archive links after external links."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup

from .link_utils import has_processed_marker, should_skip_url
from .messages import MessageLookup
from .models.config import LinkToArchiveConfig
from .models.links import ARCHIVE_LINK_CLASS, ArchiveLinkDescriptor, LinkRenderAttributes
from .renderer import ArchiveLinkRenderer

log = logging.getLogger(__name__)

_PARSER = "html.parser"
# Fallback for markup html.parser rejects
_LENIENT_PARSER = "lxml"


@dataclass
class PostprocessResult:
    html: str
    annotated: int = 0


def tag_classes(tag: Tag) -> list[str]:
    """Class list of a tag, whether parsed (list) or built in code (string)."""
    value = tag.get("class")
    if not value:
        return []
    if isinstance(value, str):
        return value.split()
    return list(value)


def has_archive_sibling(link: Tag) -> bool:
    """Check whether archive links already follow this link.

    A single whitespace text node between the link and the archive anchor is
    allowed, matching what the annotators insert.
    """
    sibling = link.next_sibling
    if isinstance(sibling, NavigableString):
        if sibling.strip():
            return False
        sibling = sibling.next_sibling
    return isinstance(sibling, Tag) and ARCHIVE_LINK_CLASS in tag_classes(sibling)


def should_skip_anchor(link: Tag) -> bool:
    """Skip policy for an anchor element in a parsed document."""
    if should_skip_url(link.get("href")):
        return True
    classes = tag_classes(link)
    if "image" in classes or has_processed_marker(classes):
        return True
    if link.find("img") is not None:
        return True
    return has_archive_sibling(link)


class PagePostprocessor:
    """Adds archive anchors after every qualifying external link of a page."""

    def __init__(self, settings: LinkToArchiveConfig | None = None, lookup: MessageLookup | None = None):
        self.settings = settings or LinkToArchiveConfig()
        self.renderer = ArchiveLinkRenderer(self.settings, lookup)

    def build_anchor(
        self, soup: BeautifulSoup, descriptor: ArchiveLinkDescriptor, base: LinkRenderAttributes
    ) -> Tag:
        anchor = soup.new_tag("a", attrs=self.renderer.anchor_attributes(descriptor, base))
        icon = self.renderer.icon_attributes(descriptor)
        if icon is not None:
            anchor.append(soup.new_tag("img", attrs=icon))
        else:
            anchor.string = self.renderer.label(descriptor)
        return anchor

    def annotate_link(self, soup: BeautifulSoup, link: Tag) -> bool:
        """Insert archive anchors after one link. Returns False when skipped."""
        if should_skip_anchor(link) or link.parent is None:
            return False
        url = link["href"]
        descriptors = self.renderer.descriptors(url)
        if not descriptors:
            return False

        base = self.renderer.base_attributes(link.attrs)
        nodes: list = []
        for descriptor in descriptors:
            nodes.append(NavigableString(" "))
            nodes.append(self.build_anchor(soup, descriptor, base))

        previous = link
        for node in nodes:
            previous.insert_after(node)
            previous = node
        return True

    def annotate_soup(self, soup: BeautifulSoup) -> int:
        external_class = self.settings.links.external_class
        links = [link for link in soup.find_all("a") if external_class in tag_classes(link)]
        annotated = 0
        for link in links:
            if self.annotate_link(soup, link):
                annotated += 1
        return annotated

    def process(self, html: str | None) -> PostprocessResult:
        if not html or "<" not in html:
            return PostprocessResult(html=html or "")

        try:
            soup = BeautifulSoup(html, _PARSER)
            annotated = self.annotate_soup(soup)
            output = str(soup)
        except ParserRejectedMarkup as exc:
            log.info("Strict parser rejected page markup (%s), retrying with lxml", exc)
            try:
                output, annotated = self._process_lenient(html)
            except (ParserRejectedMarkup, RecursionError) as exc:
                log.warning("Leaving page markup unchanged, could not parse it: %s", exc)
                return PostprocessResult(html=html)
        except RecursionError as exc:
            log.warning("Leaving page markup unchanged, could not parse it: %s", exc)
            return PostprocessResult(html=html)

        if not annotated:
            return PostprocessResult(html=html)

        log.debug("Added archive links to %d external links", annotated)
        return PostprocessResult(html=output, annotated=annotated)

    def _process_lenient(self, html: str) -> tuple[str, int]:
        """Annotate with libxml, which drops constructs it cannot read.

        lxml wraps fragments in html/body elements; those are removed again
        unless the page markup had them.
        """
        soup = BeautifulSoup(html, _LENIENT_PARSER)
        annotated = self.annotate_soup(soup)
        lowered = html.lower()
        if soup.body is None or "<body" in lowered or "<html" in lowered:
            return str(soup), annotated
        return soup.body.decode_contents(), annotated


def postprocess_html(
    html: str | None,
    lookup: MessageLookup | None = None,
    settings: LinkToArchiveConfig | None = None,
) -> PostprocessResult:
    """Post-process strategy with default settings."""
    return PagePostprocessor(settings, lookup).process(html)
