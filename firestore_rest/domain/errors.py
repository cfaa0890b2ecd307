from __future__ import annotations


class DocumentNotFoundError(LookupError):
    """Raised when the store reports that a requested document does not exist."""

    def __init__(self, collection: str, document_id: str) -> None:
        super().__init__(f"Document '{document_id}' not found in collection '{collection}'")
        self.collection = collection
        self.document_id = document_id


class ContractError(ValueError):
    """Raised when request violates documented contract (e.g., blank document ID)."""
