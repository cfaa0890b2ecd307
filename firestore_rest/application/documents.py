from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..domain import codec
from ..domain.errors import ContractError
from ..domain.models import Document
from ..infrastructure.logging import get_logger

logger = get_logger("firestore_rest.application.documents")

_FRACTION = re.compile(r"\.(\d+)")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an RFC 3339 timestamp as returned by the store (e.g. ``2024-01-05T10:11:12.123456789Z``).

    Fractions are normalized to microseconds. Returns None for absent or
    unparsable values.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    s = value.strip().replace("Z", "+00:00")
    s = _FRACTION.sub(lambda m: "." + (m.group(1) + "000000")[:6], s, count=1)
    try:
        ts = datetime.fromisoformat(s)
    except ValueError:
        logger.warning("Unparsable timestamp | value=%r", value)
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def document_id_from_name(name: Any) -> str:
    """Trailing path segment of a resource name."""
    return str(name or "").rstrip("/").split("/")[-1]


def decode_document(raw: Dict[str, Any], fallback_id: Optional[str] = None) -> Document:
    """Decode a raw ``{name, createTime, updateTime, fields}`` body into a Document."""
    doc_id = document_id_from_name(raw.get("name")) or (fallback_id or "")
    return Document(
        id=doc_id,
        create_time=parse_timestamp(raw.get("createTime")),
        update_time=parse_timestamp(raw.get("updateTime")),
        fields=codec.decode_map(raw),
    )


def require_document_id(value: Any) -> str:
    """
    Normalize a caller-supplied document ID.

    Raises:
        ContractError: The ID is blank or contains a path separator.
    """
    doc_id = str(value if value is not None else "").strip()
    if not doc_id or "/" in doc_id:
        raise ContractError(f"Invalid document ID: {value!r}")
    return doc_id
