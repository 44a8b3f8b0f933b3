"""Host adapter: the hook entry points a wiki engine calls into."""

from __future__ import annotations

from collections.abc import Mapping

from .messages import MessageCatalog, MessageLookup
from .models.config import LinkToArchiveConfig
from .models.links import LinkDecoration, ResourceModule
from .postprocess import PagePostprocessor
from .renderer import ArchiveLinkRenderer

SCRIPT_MODULE = "ext.linkToArchive"
STYLE_MODULE = "ext.linkToArchive.styles"

# Messages the browser script resolves through the host's message API
CLIENT_MESSAGES = [
    "linktoarchive-archive-label",
    "linktoarchive-archive-link-desc",
    "linktoarchive-archivetoday-label",
    "linktoarchive-archivetoday-link-desc",
]


def resource_modules(static_prefix: str = "/static") -> list[ResourceModule]:
    """Asset bundles the host loads on every page."""
    prefix = static_prefix.rstrip("/")
    return [
        ResourceModule(
            name=SCRIPT_MODULE,
            scripts=[f"{prefix}/linkToArchive.js"],
            messages=list(CLIENT_MESSAGES),
        ),
        ResourceModule(
            name=STYLE_MODULE,
            styles=[f"{prefix}/linkToArchive.css"],
        ),
    ]


class ArchiveLinkHooks:
    """Stateless handlers for link rendering and page output hooks."""

    def __init__(self, settings: LinkToArchiveConfig | None = None, lookup: MessageLookup | None = None):
        self.settings = settings or LinkToArchiveConfig()
        if lookup is None:
            lookup = MessageCatalog(self.settings.i18n.language, self.settings.i18n.fallback_language)
        self.lookup = lookup
        self.renderer = ArchiveLinkRenderer(self.settings, lookup)
        self.postprocessor = PagePostprocessor(self.settings, lookup)

    @classmethod
    def from_config(cls) -> ArchiveLinkHooks:
        from .config import load_settings

        return cls(load_settings())

    def on_before_page_display(self) -> list[str]:
        """Names of the modules to add to every page."""
        return [module.name for module in self.resource_modules()]

    def resource_modules(self) -> list[ResourceModule]:
        return resource_modules()

    def on_linker_make_external_link(
        self,
        url: str,
        text: str,
        attribs: Mapping[str, object] | None = None,
        link_type: str | None = "free",
    ) -> LinkDecoration:
        """Replace the host's external link markup.

        When the returned decoration ``replaces_default``, the host must emit
        its html instead of rendering the link itself.
        """
        return self.renderer.render_inline_link(url, text, attribs, link_type)

    def on_output_page_parser_output(self, html: str) -> str:
        """Rewrite a rendered page, adding archive links after external links."""
        return self.postprocessor.process(html).html
