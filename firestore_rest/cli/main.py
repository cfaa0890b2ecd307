from __future__ import annotations

import dataclasses
import json
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from ..application.accessor import DocumentAccessor
from ..domain import codec
from ..domain.errors import ContractError, DocumentNotFoundError
from ..domain.kinds import kind_for
from ..domain.models import Direction
from ..domain.query import StructuredQueryBuilder
from ..infrastructure.logging import get_logger
from .parsers import build_parser

logger = get_logger("firestore_rest.cli")


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _dump(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, default=_json_default))


def _serialize_record(record: object) -> Dict[str, Any]:
    """Convert a typed record or Document into a JSON-friendly mapping."""
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return dataclasses.asdict(record)
    try:
        return dict(vars(record))
    except TypeError:
        return {"value": record}


def _parse_operand(raw: str) -> Any:
    """Parse a filter operand as JSON; bare words are taken as strings."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _build_query(ns) -> StructuredQueryBuilder:
    """
    Translate parsed query arguments into a StructuredQueryBuilder.

    Raises:
        ContractError: An --order-by entry has more than a field and a direction.
    """
    builder = StructuredQueryBuilder()
    for field, op, raw in ns.where or []:
        builder.where(field, op, _parse_operand(raw))
    for entry in ns.order_by or []:
        if len(entry) > 2:
            raise ContractError(f"--order-by takes FIELD [DIRECTION], got {entry}")
        direction = entry[1] if len(entry) == 2 else Direction.ASCENDING
        builder.order_by(entry[0], direction)
    if ns.limit is not None:
        builder.limit(int(ns.limit))
    if ns.offset is not None:
        builder.set_offset(int(ns.offset))
    return builder


def get_document(ns, accessor: Optional[DocumentAccessor]) -> int:
    kind = kind_for(str(ns.kind))
    accessor = accessor or DocumentAccessor()
    try:
        record = accessor.fetch(kind, str(ns.id))
    except DocumentNotFoundError as ex:
        _dump({"status": "not_found", "collection": ex.collection, "id": ex.document_id})
        return 1
    _dump({"status": "ok", "collection": kind.collection_key, "result": _serialize_record(record)})
    return 0


def run_query(ns, accessor: Optional[DocumentAccessor]) -> int:
    kind = kind_for(str(ns.kind))
    descriptor = _build_query(ns).build()
    if ns.dry_run:
        bound = dataclasses.replace(descriptor, collection=kind.collection_key)
        _dump({"status": "ok", "structuredQuery": bound.to_structured_query()})
        return 0
    accessor = accessor or DocumentAccessor()
    logger.info("Query request | collection=%s | filters=%d", kind.collection_key, len(ns.where or []))
    records = accessor.run_query(kind, descriptor)
    _dump(
        {
            "status": "ok",
            "collection": kind.collection_key,
            "count": len(records),
            "result": [_serialize_record(r) for r in records],
        }
    )
    return 0


def batch_get(ns, accessor: Optional[DocumentAccessor]) -> int:
    kind = kind_for(str(ns.kind))
    accessor = accessor or DocumentAccessor()
    ids: List[str] = [str(i) for i in ns.ids]
    records = accessor.batch_fetch(kind, ids)
    found = {getattr(r, "id", None) for r in records}
    _dump(
        {
            "status": "ok",
            "collection": kind.collection_key,
            "requested": len(ids),
            "result": [_serialize_record(r) for r in records],
            "missing": [i for i in ids if i not in found],
        }
    )
    return 0


def encode_value(ns) -> int:
    try:
        value = json.loads(ns.value)
    except json.JSONDecodeError as exc:
        _dump({"status": "error", "error": f"Invalid JSON value: {exc}"})
        return 2
    _dump({"status": "ok", "result": codec.encode(value)})
    return 0


def decode_value(ns) -> int:
    try:
        wire = json.loads(ns.value)
    except json.JSONDecodeError as exc:
        _dump({"status": "error", "error": f"Invalid JSON value: {exc}"})
        return 2
    _dump({"status": "ok", "result": codec.decode(wire)})
    return 0


def dispatch_commands(ns, accessor: Optional[DocumentAccessor] = None) -> int:
    """
    Dispatches CLI commands.

    Commands:
    - get: read one document of --kind by --id
    - query: build a structured query from --where/--order-by/--limit/--offset and run it
    - batch-get: read several documents; IDs not found are listed under "missing"
    - encode / decode: convert a JSON value to and from wire form (no network)
    """
    if ns.cmd == "encode":
        return encode_value(ns)
    if ns.cmd == "decode":
        return decode_value(ns)

    if ns.cmd == "get":
        return get_document(ns, accessor)
    if ns.cmd == "query":
        return run_query(ns, accessor)
    if ns.cmd == "batch-get":
        return batch_get(ns, accessor)

    _dump({"status": "error", "error": f"Unknown command: {ns.cmd}"})
    return 2


def run(argv: Optional[Sequence[str]] = None, accessor: Optional[DocumentAccessor] = None) -> int:
    ap = build_parser()
    ns = ap.parse_args(list(argv or []))
    try:
        return dispatch_commands(ns, accessor)
    except ContractError as ex:
        _dump({"status": "error", "error": str(ex)})
        return 2
    except Exception as ex:  # keep CLI concise and user-friendly
        _dump({"status": "error", "error": f"{type(ex).__name__}: {ex}"})
        return 3


def main() -> int:
    import sys
    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
