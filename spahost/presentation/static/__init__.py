from .files import IndexedStaticFiles
from .spa import SPAStaticFiles

__all__ = [
    "IndexedStaticFiles",
    "SPAStaticFiles",
]
