from __future__ import annotations

from typing import Any, List

from ..documents import decode_document, require_document_id
from ..dto import BatchFetchRequest
from ...domain.interfaces import DocumentTransport
from ...infrastructure.logging import get_logger

logger = get_logger("firestore_rest.application.batch_fetch")


class BatchFetchUseCase:
    """Use-case: read many documents by ID; IDs the store reports missing are omitted."""

    def __init__(self, transport: DocumentTransport) -> None:
        self._transport = transport

    def execute(self, req: BatchFetchRequest) -> List[Any]:
        ids = [require_document_id(i) for i in (req.document_ids or [])]
        if not ids:
            return []
        collection = req.kind.collection_key
        entries = self._transport.batch_get(collection, ids)
        found = [e["found"] for e in entries if isinstance(e, dict) and e.get("found")]
        missing = len(entries) - len(found)
        if missing:
            logger.debug("Batch get | collection=%s | requested=%d | missing=%d", collection, len(ids), missing)
        return [req.kind.build(decode_document(d)) for d in found]
