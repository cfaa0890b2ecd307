from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from .models import Document

T = TypeVar("T")


@dataclass(frozen=True)
class DocumentKind(Generic[T]):
    """A collection key paired with the function that types its documents.

    Fields:
        collection_key: Store name for the group of documents.
        build: Turns a decoded Document into the kind's record type.
    """
    collection_key: str
    build: Callable[[Document], T]

    @staticmethod
    def generic(collection_key: str) -> "DocumentKind[Document]":
        """Kind for collections without a typed record; yields plain Documents."""
        return DocumentKind(collection_key=collection_key, build=_identity)


def _identity(doc: Document) -> Document:
    return doc


@dataclass(frozen=True)
class MetaSet:
    """Public listing entry for a vocabulary set."""
    id: str
    create_time: Optional[datetime]
    update_time: Optional[datetime]
    name: Optional[str]
    name_words: Optional[List[str]]
    creator: Optional[str]
    uid: Optional[str]
    public: Optional[bool]
    num_terms: Optional[int]
    collections: Optional[List[str]]
    likes: Optional[int]


@dataclass(frozen=True)
class CustomCollection:
    id: str
    create_time: Optional[datetime]
    update_time: Optional[datetime]
    name: Optional[str]
    sets: Optional[List[str]]
    uid: Optional[str]


@dataclass(frozen=True)
class VocabSet:
    """A vocabulary set.

    ``terms`` holds either ``{term, definition}`` entries or study-guide
    entries (``{body, type, questions}``); the shape is not validated.
    """
    id: str
    create_time: Optional[datetime]
    update_time: Optional[datetime]
    name: Optional[str]
    description: Optional[str]
    uid: Optional[str]
    public: Optional[bool]
    terms: Optional[List[Dict[str, Any]]]


def _meta_set(doc: Document) -> MetaSet:
    return MetaSet(
        id=doc.id,
        create_time=doc.create_time,
        update_time=doc.update_time,
        name=doc.get("name"),
        name_words=doc.get("nameWords"),
        creator=doc.get("creator"),
        uid=doc.get("uid"),
        public=doc.get("public"),
        num_terms=doc.get("numTerms"),
        collections=doc.get("collections"),
        likes=doc.get("likes"),
    )


def _custom_collection(doc: Document) -> CustomCollection:
    return CustomCollection(
        id=doc.id,
        create_time=doc.create_time,
        update_time=doc.update_time,
        name=doc.get("name"),
        sets=doc.get("sets"),
        uid=doc.get("uid"),
    )


def _vocab_set(doc: Document) -> VocabSet:
    return VocabSet(
        id=doc.id,
        create_time=doc.create_time,
        update_time=doc.update_time,
        name=doc.get("name"),
        description=doc.get("description"),
        uid=doc.get("uid"),
        public=doc.get("public"),
        terms=doc.get("terms"),
    )


META_SETS: DocumentKind[MetaSet] = DocumentKind("meta_sets", _meta_set)
COLLECTIONS: DocumentKind[CustomCollection] = DocumentKind("collections", _custom_collection)
VOCAB_SETS: DocumentKind[VocabSet] = DocumentKind("sets", _vocab_set)

KINDS: Dict[str, DocumentKind[Any]] = {
    k.collection_key: k for k in (META_SETS, COLLECTIONS, VOCAB_SETS)
}


def kind_for(collection_key: str) -> DocumentKind[Any]:
    """Return the registered kind for a collection key, or a generic one."""
    return KINDS.get(collection_key) or DocumentKind.generic(collection_key)
