"""Route modules for the linktoarchive web API."""

from . import links, pages

__all__ = ["links", "pages"]
