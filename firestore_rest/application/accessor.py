from __future__ import annotations

from typing import Any, List, Optional, Sequence, TypeVar, Union

from .dto import BatchFetchRequest, FetchDocumentRequest, RunQueryRequest
from .use_cases.batch_fetch import BatchFetchUseCase
from .use_cases.fetch_document import FetchDocumentUseCase
from .use_cases.run_query import RunQueryUseCase
from ..domain.interfaces import DocumentTransport
from ..domain.kinds import DocumentKind
from ..domain.models import QueryDescriptor
from ..domain.query import StructuredQueryBuilder

T = TypeVar("T")


class DocumentAccessor:
    """Facade over the read use-cases, parameterized per call by a DocumentKind.

    All three operations are synchronous: each is one blocking ``requests``
    call through the transport, not a coroutine. They share no mutable state,
    so callers wanting concurrency can run them from threads (e.g. a
    ``ThreadPoolExecutor``). There is no cancellation or retry; the only
    timeout is the transport's per-request one.

    Example:
        accessor = DocumentAccessor()
        sets = accessor.run_query(
            VOCAB_SETS,
            StructuredQueryBuilder().where("uid", FieldOperator.EQUAL, uid).limit(20),
        )
    """

    def __init__(self, transport: Optional[DocumentTransport] = None) -> None:
        if transport is None:
            from ..infrastructure.firestore.client import FirestoreRestTransport

            transport = FirestoreRestTransport()
        self._transport = transport

    def fetch(self, kind: DocumentKind[T], document_id: str) -> T:
        """Read one document; raises DocumentNotFoundError when it does not exist."""
        return FetchDocumentUseCase(self._transport).execute(
            FetchDocumentRequest(kind=kind, document_id=document_id)
        )

    def run_query(
        self,
        kind: DocumentKind[T],
        query: Union[QueryDescriptor, StructuredQueryBuilder, None] = None,
    ) -> List[T]:
        if query is None:
            query = QueryDescriptor()
        elif isinstance(query, StructuredQueryBuilder):
            query = query.build()
        return RunQueryUseCase(self._transport).execute(RunQueryRequest(kind=kind, query=query))

    def batch_fetch(self, kind: DocumentKind[T], document_ids: Sequence[Any]) -> List[T]:
        return BatchFetchUseCase(self._transport).execute(
            BatchFetchRequest(kind=kind, document_ids=list(document_ids))
        )
