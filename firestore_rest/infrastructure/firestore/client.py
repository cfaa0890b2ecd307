from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import requests

from ...domain.interfaces import DocumentTransport
from ..config import db_server, project_prefix
from ..logging import get_logger
from ..timeouts import http_timeout_seconds

logger = get_logger("firestore_rest.infrastructure.firestore")


class FirestoreRestTransport(DocumentTransport):
    """Document transport adapter for the Firestore v1 REST API.

    The service root and project prefix are resolved once, at construction.
    Non-2xx responses other than a single-document 404 raise
    ``requests.HTTPError``; network and JSON errors propagate unchanged.
    """

    def __init__(self, server: Optional[str] = None, prefix: Optional[str] = None) -> None:
        self.server = (server or db_server()).rstrip("/") + "/"
        self.prefix = (prefix or project_prefix()).strip("/")

    @property
    def base_url(self) -> str:
        return self.server + self.prefix

    def document_path(self, collection: str, document_id: str) -> str:
        """Fully-qualified resource name used by batch reads."""
        return f"{self.prefix}/{collection}/{document_id}"

    def get_document(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        timeout = http_timeout_seconds()
        url = f"{self.base_url}/{quote(collection, safe='')}/{quote(document_id, safe='')}"
        r = requests.get(url, timeout=timeout)
        if r.status_code == 404:
            logger.debug("Get document | collection=%s | id=%s | not found", collection, document_id)
            return None
        r.raise_for_status()
        return r.json()

    def run_query(self, structured_query: Dict[str, Any]) -> List[Dict[str, Any]]:
        timeout = http_timeout_seconds()
        r = requests.post(
            f"{self.base_url}:runQuery",
            json={"structuredQuery": structured_query},
            timeout=timeout,
        )
        r.raise_for_status()
        return r.json() or []

    def batch_get(self, collection: str, document_ids: Sequence[str]) -> List[Dict[str, Any]]:
        timeout = http_timeout_seconds()
        body = {"documents": [self.document_path(collection, i) for i in document_ids]}
        r = requests.post(f"{self.base_url}:batchGet", json=body, timeout=timeout)
        r.raise_for_status()
        return r.json() or []
