"""Inspect a saved transaction trace: decode calls/events and detect DeFi activity.

Usage:
    PYTHONPATH=src python scripts/inspect_trace.py trace.json tx.json [receipt.json] [--json] [--max-depth N]

`trace.json` is any debug_traceTransaction / trace_transaction payload,
`tx.json` the eth_getTransactionByHash result (merged with gasUsed/status from
the receipt when given), `receipt.json` the eth_getTransactionReceipt result.
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path

from tracelens.config import settings

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


def _load(path: str):
    return json.loads(Path(path).read_text())


async def main() -> None:
    from tracelens.container import Container
    from tracelens.report import render_json, render_tree

    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("trace")
    parser.add_argument("transaction")
    parser.add_argument("receipt", nargs="?")
    parser.add_argument("--json", action="store_true", help="print the camelCase JSON export")
    parser.add_argument("--max-depth", type=int, default=None)
    parser.add_argument("--contracts-only", action="store_true")
    parser.add_argument("--events-only", action="store_true")
    parser.add_argument("--associate", choices=["root", "emitter"], default="root")
    args = parser.parse_args()

    transaction = _load(args.transaction)
    logs = None
    if args.receipt:
        receipt = _load(args.receipt)
        logs = receipt.get("logs") or []
        transaction.setdefault("gasUsed", receipt.get("gasUsed"))
        transaction.setdefault("status", receipt.get("status"))

    container = Container()
    container.inspection_service.add_kwargs(associate=args.associate)
    http = container.http_client()
    try:
        result = await container.inspection_service().inspect(_load(args.trace), logs, transaction)
    finally:
        await http.close()

    if args.json:
        print(render_json(result.trace, result.defi))
        return

    print(render_tree(
        result.trace,
        max_depth=args.max_depth,
        contracts_only=args.contracts_only,
        events_only=args.events_only,
        tokens=container.token_resolver(),
        native_symbol=settings.native_symbol,
    ))
    print()
    print(f"DeFi: {result.defi.summary} (confidence {result.defi.confidence:.2f})")
    for interaction in result.defi.interactions:
        print(f"  - {interaction.description}")


if __name__ == "__main__":
    asyncio.run(main())
