"""HTTP service exposing the archive link hooks."""

from .app import create_app

__all__ = ["create_app"]
