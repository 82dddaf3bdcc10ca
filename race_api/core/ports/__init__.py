"""Ports (interfaces) implemented by outbound adapters."""

from .document_store_port import Document, DocumentStorePort, SortSpec

__all__ = ["Document", "DocumentStorePort", "SortSpec"]
