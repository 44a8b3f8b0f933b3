"""LinkToArchive - archive.org and archive.today links next to external wiki links."""

try:
    from importlib.metadata import version

    __version__ = version("linktoarchive")
except Exception:
    __version__ = "0.0.0-dev"
