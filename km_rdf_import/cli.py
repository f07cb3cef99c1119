#!/usr/bin/env python3
"""
KM RDF Import CLI - fill a knowledge model's replies from an RDF graph.

Usage:
    km-rdf-import crawl KM_JSON RDF_FILE   # Crawl local files, print replies
    km-rdf-import push RDF_FILE            # Fetch KM from host, send replies back
    km-rdf-import status                   # Show host connection status
"""

import argparse
import json
import sys

from .audit import CrawlAudit
from .client import HostClient, DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from .crawler import KMCrawler
from .importer import ReplyCollector
from .knowledge_model import KnowledgeModel
from .triple_store import RdflibTripleStore, load_graph


def _load_store(rdf_file: str, rdf_format: str | None) -> RdflibTripleStore | None:
    try:
        graph = load_graph(rdf_file, rdf_format)
    except Exception as e:
        print(f"Error: Could not parse {rdf_file}: {e}")
        return None
    return RdflibTripleStore(graph)


def _print_summary(audit: CrawlAudit) -> None:
    summary = audit.get_summary()
    print()
    print("Crawl Summary:")
    print(f"  Items created: {summary['items']}")
    print(f"  Replies set: {summary['replies']}")
    print(f"  Skipped: {summary['skipped']}")
    for reason, count in summary["skip_reasons"].items():
        print(f"    {reason}: {count}")


def cmd_crawl(args: argparse.Namespace) -> int:
    """Crawl a local knowledge model file against a local RDF file.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    try:
        with open(args.km_file, encoding="utf-8") as f:
            km = KnowledgeModel.from_dict(json.load(f))
    except (OSError, ValueError, KeyError) as e:
        print(f"Error: Could not load knowledge model {args.km_file}: {e}")
        return 1

    store = _load_store(args.rdf_file, args.format)
    if store is None:
        return 1

    collector = ReplyCollector()
    audit = CrawlAudit()
    KMCrawler(store, km, collector, audit=audit).crawl()

    if args.json:
        print(json.dumps(collector.to_dict(), indent=2))
    else:
        print(collector.to_text())
        _print_summary(audit)
    return 0


def cmd_push(args: argparse.Namespace) -> int:
    """Fetch the knowledge model from the host, crawl, and send replies back.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    store = _load_store(args.rdf_file, args.format)
    if store is None:
        return 1

    client = HostClient(base_url=args.server, timeout=args.timeout)
    if not client.start():
        print(f"Error: Could not connect to {args.server}")
        return 1

    try:
        km = client.fetch_knowledge_model()
        if km is None:
            print("Error: Could not fetch knowledge model")
            return 1

        collector = ReplyCollector()
        audit = CrawlAudit()
        KMCrawler(store, km, collector, audit=audit).crawl()

        result = client.send_replies(collector.to_dict())
        if not result.success:
            print(f"Error: Could not send replies: {result.error}")
            return 1

        print(f"Sent {len(collector)} replies to {args.server}")
        _print_summary(audit)
        return 0
    finally:
        client.stop()


def cmd_status(args: argparse.Namespace) -> int:
    """Show host connection status.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    client = HostClient(base_url=args.server, timeout=args.timeout)
    if client.start():
        print(f"Connected to: {args.server}")
        client.stop()
        return 0
    else:
        print(f"Error: Could not connect to {args.server}")
        return 1


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="km-rdf-import",
        description="Fill knowledge model replies from an RDF graph"
    )
    parser.add_argument(
        "--server",
        default=DEFAULT_BASE_URL,
        help=f"Host application URL (default: {DEFAULT_BASE_URL})"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT})"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Crawl command
    crawl_parser = subparsers.add_parser("crawl", help="Crawl local files and print replies")
    crawl_parser.add_argument("km_file", help="Knowledge model JSON file")
    crawl_parser.add_argument("rdf_file", help="RDF file to import")
    crawl_parser.add_argument("--format", default=None, help="RDF syntax (guessed from extension)")
    crawl_parser.add_argument("--json", action="store_true", help="Print replies as JSON")
    crawl_parser.set_defaults(func=cmd_crawl)

    # Push command
    push_parser = subparsers.add_parser("push", help="Crawl against the host's knowledge model and send replies")
    push_parser.add_argument("rdf_file", help="RDF file to import")
    push_parser.add_argument("--format", default=None, help="RDF syntax (guessed from extension)")
    push_parser.set_defaults(func=cmd_push)

    # Status command
    status_parser = subparsers.add_parser("status", help="Show host connection status")
    status_parser.set_defaults(func=cmd_status)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
