from __future__ import annotations

import dataclasses
from typing import Any, List

from ..documents import decode_document
from ..dto import RunQueryRequest
from ...domain.errors import ContractError
from ...domain.interfaces import DocumentTransport
from ...infrastructure.logging import get_logger

logger = get_logger("firestore_rest.application.run_query")


class RunQueryUseCase:
    """Use-case: bind a structured query to the kind's collection, run it, and type the results."""

    def __init__(self, transport: DocumentTransport) -> None:
        self._transport = transport

    def execute(self, req: RunQueryRequest) -> List[Any]:
        collection = req.kind.collection_key
        query = req.query
        if query.collection is None:
            query = dataclasses.replace(query, collection=collection)
        elif query.collection != collection:
            raise ContractError(
                f"Query targets collection '{query.collection}' but kind reads '{collection}'"
            )

        entries = self._transport.run_query(query.to_structured_query())
        # Entries without a document carry only read metadata (e.g. an empty result).
        docs = [e["document"] for e in entries if isinstance(e, dict) and e.get("document")]
        logger.info("Run query | collection=%s | results=%d", collection, len(docs))
        return [req.kind.build(decode_document(d)) for d in docs]
