"""Repository interfaces."""

from .document_collection import DocumentCollection

__all__ = [
    "DocumentCollection",
]
