import asyncio
import sys
import os
import json
import argparse
from typing import List, Optional

from dotenv import load_dotenv

from resolver_module.dns_records import CLI_RECORD_TYPES, QueryResult
from resolver_module.dns_utils import is_valid_domain
from resolver_module.errors import QueryValidationError
from resolver_module.logger import configure_logging, get_child_logger
from resolver_module.orchestrator import SLOW_QUERY_MS, resolve_sequential
from resolver_module.query_executor import ResolveFn
from resolver_module.render import render_envelope, render_result, render_trace

load_dotenv()

log = get_child_logger("main")

USAGE = "Please provide a domain. Example: python main.py google.com"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query A, AAAA, MX, NS, TXT and CNAME records for a domain")
    parser.add_argument("domain", nargs="?", help="Domain to query")
    parser.add_argument("--json", action="store_true", help="Print the collected results as JSON")
    parser.add_argument("--pretty", action="store_true", help="Indent JSON output")
    parser.add_argument("--summary", action="store_true", help="Print all results once every query has finished")
    parser.add_argument(
        "--threshold",
        type=float,
        default=SLOW_QUERY_MS,
        help="Warn when a query takes longer than this many milliseconds",
    )
    parser.add_argument("--log-level", default=os.getenv("DNS_APP_LOG_LEVEL", "WARNING"), help="Log level")
    return parser


async def main(argv: Optional[List[str]] = None, resolve: Optional[ResolveFn] = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    if not args.domain:
        print(USAGE, file=sys.stderr)
        return 1

    domain = args.domain
    if not is_valid_domain(domain):
        log.warning("{} does not look like a domain name, querying anyway", domain)

    streaming = not (args.json or args.summary)

    def _report(result: QueryResult) -> None:
        if streaming:
            print(render_result(domain, result), file=sys.stdout if result.ok else sys.stderr)
            print()
        if result.ok and result.elapsed_ms is not None and result.elapsed_ms > args.threshold:
            print(f"Slow response for {result.type.value} record: {result.time} ms", file=sys.stderr)

    if streaming:
        print(f"Querying DNS records for: {domain}\n")

    try:
        envelope = await resolve_sequential(
            domain,
            CLI_RECORD_TYPES,
            resolve=resolve,
            on_result=_report,
            slow_threshold_ms=args.threshold,
        )
    except QueryValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(envelope.to_dict(), indent=2 if args.pretty else None))
    elif args.summary:
        print(render_envelope(envelope))
    elif envelope.trace:
        print(f"Resolution path: {render_trace(envelope.trace)}")

    # individual lookup failures are reported above, not fatal
    return 0


def cli() -> None:
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        log.critical(f"Unhandled exception: {e}")
        sys.exit(1)


if __name__ == "__main__":
    cli()
