from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Firestore REST document reader (codec + structured queries)")
    sub = ap.add_subparsers(dest="cmd", required=True)

    # Read a single document
    g = sub.add_parser("get")
    add_kind_argument(g)
    g.add_argument("--id", required=True, help="Document ID")

    # Structured query
    q = sub.add_parser("query")
    add_kind_argument(q)
    q.add_argument(
        "--where",
        nargs=3,
        action="append",
        default=[],
        metavar=("FIELD", "OP", "VALUE"),
        help="Field filter; VALUE is parsed as JSON, falling back to a plain string. Repeats AND together",
    )
    q.add_argument(
        "--order-by",
        nargs="+",
        action="append",
        default=[],
        metavar="FIELD [DIRECTION]",
        help="Sort key with optional ASCENDING/DESCENDING; can repeat",
    )
    q.add_argument("--limit", type=int, default=None)
    q.add_argument("--offset", type=int, default=None)
    q.add_argument("--dry-run", action="store_true", help="Print the structured query without sending it")

    # Batch read
    b = sub.add_parser("batch-get")
    add_kind_argument(b)
    b.add_argument("--ids", nargs="+", required=True)

    # Codec utilities
    e = sub.add_parser("encode")
    e.add_argument("--value", required=True, help="JSON value to encode into wire form")
    d = sub.add_parser("decode")
    d.add_argument("--value", required=True, help="JSON wire value to decode")

    return ap


def add_kind_argument(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """
    Adds the collection selector shared by the read subcommands.

    Registered kinds (meta_sets, collections, sets) produce typed records; any
    other key returns generic documents.
    """
    parser.add_argument("--kind", required=True, help="Collection key, e.g. sets, meta_sets, collections")
    return parser
