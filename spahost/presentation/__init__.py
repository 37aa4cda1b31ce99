"""Presentation layer - ASGI static file serving"""

from .static import IndexedStaticFiles, SPAStaticFiles

__all__ = [
    "IndexedStaticFiles",
    "SPAStaticFiles",
]
