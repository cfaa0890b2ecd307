from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

from ..domain.kinds import DocumentKind
from ..domain.models import QueryDescriptor


@dataclass(frozen=True)
class FetchDocumentRequest:
    kind: DocumentKind[Any]
    document_id: str


@dataclass(frozen=True)
class RunQueryRequest:
    kind: DocumentKind[Any]
    query: QueryDescriptor


@dataclass(frozen=True)
class BatchFetchRequest:
    kind: DocumentKind[Any]
    document_ids: List[str]
