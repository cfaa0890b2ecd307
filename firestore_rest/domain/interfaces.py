from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence


class DocumentTransport(ABC):
    """Port for the remote document store (e.g., Firestore REST)."""

    @abstractmethod
    def get_document(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        """Fetch one raw document ``{name, createTime, updateTime, fields}``.

        Returns:
            The raw JSON body, or None when the store reports not-found.

        Raises:
            Exception: Provider/network failures should surface; use-case decides.
        """
        raise NotImplementedError

    @abstractmethod
    def run_query(self, structured_query: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Run a structured query; returns raw ``[{document?: {...}}, ...]`` entries."""
        raise NotImplementedError

    @abstractmethod
    def batch_get(self, collection: str, document_ids: Sequence[str]) -> List[Dict[str, Any]]:
        """Batch read; returns raw ``[{found: {...}} | {missing: path}, ...]`` entries."""
        raise NotImplementedError
