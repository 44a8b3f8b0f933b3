"""Reconciliation pass for content the server did not annotate.

The browser script in ``web/static/linkToArchive.js`` runs this pass after
page load and again for every subtree a ``MutationObserver`` reports. This
module applies the same rules to BeautifulSoup trees, which keeps the two
in step and lets the behaviour be exercised without a browser.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bs4 import BeautifulSoup, NavigableString, Tag

from .link_utils import classify_url, has_processed_marker, should_skip_url
from .messages import MessageLookup
from .models.config import LinkToArchiveConfig
from .models.links import LinkVariant
from .postprocess import PagePostprocessor, has_archive_sibling, tag_classes

log = logging.getLogger(__name__)


class ArchiveLinkReconciler:
    """Adds archive links to regular external links missing them."""

    def __init__(self, settings: LinkToArchiveConfig | None = None, lookup: MessageLookup | None = None):
        self.settings = settings or LinkToArchiveConfig()
        self.postprocessor = PagePostprocessor(self.settings, lookup)
        self._builder = BeautifulSoup("", "html.parser")

    @property
    def processed_class(self) -> str:
        return self.settings.links.processed_class

    def _is_candidate(self, node: Tag) -> bool:
        classes = tag_classes(node)
        return (
            node.name == "a"
            and self.settings.links.external_class in classes
            and self.processed_class not in classes
        )

    def _candidates(self, root: Tag) -> list[Tag]:
        found = [root] if self._is_candidate(root) else []
        found.extend(link for link in root.find_all("a") if self._is_candidate(link))
        return found

    def _mark_processed(self, link: Tag) -> None:
        classes = tag_classes(link)
        classes.append(self.processed_class)
        link["class"] = classes

    def process_link(self, link: Tag) -> bool:
        """Annotate one link. Returns True when archive anchors were inserted."""
        classes = tag_classes(link)
        if has_processed_marker(classes) or self.processed_class in classes or "image" in classes:
            return False
        if link.find("img") is not None:
            return False

        url = link.get("href")
        if should_skip_url(url) or classify_url(url) is not LinkVariant.REGULAR:
            return False

        self._mark_processed(link)
        if has_archive_sibling(link) or link.parent is None:
            return False

        renderer = self.postprocessor.renderer
        base = renderer.base_attributes(link.attrs)
        previous = link
        for descriptor in renderer.descriptors(url):
            for node in (NavigableString(" "), self.postprocessor.build_anchor(self._builder, descriptor, base)):
                previous.insert_after(node)
                previous = node
        return True

    def scan(self, root: Tag) -> int:
        """Initial pass over a whole document or fragment."""
        return sum(1 for link in self._candidates(root) if self.process_link(link))

    def nodes_added(self, nodes: Iterable[object]) -> int:
        """Incremental pass over the nodes of one mutation batch."""
        annotated = 0
        for node in nodes:
            if isinstance(node, Tag):
                annotated += self.scan(node)
        if annotated:
            log.debug("Reconciled %d links in added content", annotated)
        return annotated


def reconcile_html(
    html: str,
    lookup: MessageLookup | None = None,
    settings: LinkToArchiveConfig | None = None,
) -> tuple[str, int]:
    """Run the reconciliation pass over an HTML string."""
    soup = BeautifulSoup(html, "html.parser")
    annotated = ArchiveLinkReconciler(settings, lookup).scan(soup)
    return str(soup), annotated
