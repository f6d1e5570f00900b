"""
explorer-harness command line.

Usage examples:
    explorer-harness check-schema /tmp/schema.graphql
    explorer-harness check-schema /tmp/schema.graphql --expected resources/explorer/graphql/schema.graphql
    explorer-harness queries
"""

import argparse
import sys
from typing import List, Optional

from explorer_harness.config import get_config, setup_logging
from explorer_harness.queries.catalog import DEFAULT_CATALOG
from explorer_harness.schema import compare_schema


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Explorer test harness utilities")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check-schema", help="Compare an introspected schema with the checked-in copy")
    check.add_argument("actual", help="Path to the freshly introspected schema")
    check.add_argument("--expected", default=None, help="Path to the checked-in schema copy")

    sub.add_parser("queries", help="List the query kinds the harness knows about")

    args = parser.parse_args(argv)

    config = get_config()
    setup_logging(config)

    if args.command == "check-schema":
        expected = args.expected or config.schema_path
        try:
            return 0 if compare_schema(args.actual, expected) else 1
        except FileNotFoundError:
            # Already logged by compare_schema.
            return 2
    if args.command == "queries":
        for kind in DEFAULT_CATALOG:
            print(f"{kind.name:<24} {kind.operation_name}")
        return 0
    return 2


if __name__ == "__main__":
    sys.exit(main())
