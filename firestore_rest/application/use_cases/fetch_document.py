from __future__ import annotations

from typing import Any

from ..documents import decode_document, require_document_id
from ..dto import FetchDocumentRequest
from ...domain.errors import DocumentNotFoundError
from ...domain.interfaces import DocumentTransport


class FetchDocumentUseCase:
    """Use-case: read one document by ID and type it with its kind."""

    def __init__(self, transport: DocumentTransport) -> None:
        self._transport = transport

    def execute(self, req: FetchDocumentRequest) -> Any:
        """
        Fetch a single document and build the kind's record from it.

        Args:
            req: Kind and document ID to read.

        Returns:
            The record produced by ``req.kind.build``.

        Raises:
            ContractError: The document ID is blank or contains a path separator.
            DocumentNotFoundError: The store has no document with that ID.
        """
        doc_id = require_document_id(req.document_id)
        collection = req.kind.collection_key
        raw = self._transport.get_document(collection, doc_id)
        if not raw:
            raise DocumentNotFoundError(collection, doc_id)
        return req.kind.build(decode_document(raw, fallback_id=doc_id))
