"""
Command-line entry point.

  smart-restock analyze --store-id store-1 [--supplier-id supplier-1] [--data-dir sample_data]
  smart-restock order   --store-id store-1 --supplier-id supplier-1

Results are printed to stdout as JSON; logs go to stderr.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from smart_restock.config import get_config
from smart_restock.data.models import AnalysisScope
from smart_restock.data.util import get_data_access
from smart_restock.engine.errors import EmptySelectionError, RestockError
from smart_restock.engine.service import SmartRestockService
from smart_restock.logging import get_logger


def build_parser() -> argparse.ArgumentParser:
    config = get_config()
    parser = argparse.ArgumentParser(prog="smart-restock", description="Restock recommendations for a store.")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("analyze", "Print categorized restock recommendations."),
        ("order", "Print a draft restock order built from the recommendations."),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--store-id", required=True)
        p.add_argument("--supplier-id", required=(name == "order"), default=None)
        p.add_argument("--data-dir", type=str, default=config.data_dir)
        p.add_argument("--analysis-period", type=int, default=config.analysis_period_days,
                       help="Days of history the summary reports.")
        p.add_argument("--no-promotions", action="store_true", help="Ignore supplier promotions.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = get_logger(__name__)

    scope = AnalysisScope(store_id=args.store_id, supplier_id=args.supplier_id)
    service = SmartRestockService(analysis_period=args.analysis_period)

    try:
        data_access = get_data_access("csv", data_dir=args.data_dir)
        result = service.analyze_store(scope, data_access, include_promotions=not args.no_promotions)
        if args.command == "analyze":
            print(result.model_dump_json(indent=2))
            return 0

        draft = service.create_order_from_analysis(result, supplier_id=args.supplier_id)
        print(draft.model_dump_json(indent=2))
        return 0
    except EmptySelectionError as e:
        logger.warning(f"No order drafted for store {args.store_id}: {e}")
        print(str(e), file=sys.stderr)
        return 1
    except (RestockError, FileNotFoundError, RuntimeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
