#!/usr/bin/env python3
"""
Command-line interface for TinyLink.

Usage:
    python tinylink_cli.py shorten <url> [--custom-code CODE]
    python tinylink_cli.py get <short_code>
    python tinylink_cli.py stats <short_code>
    python tinylink_cli.py list [--limit N]
    python tinylink_cli.py delete <short_code>
    python tinylink_cli.py health
"""

import argparse
import asyncio
import json
import sys
import os
from typing import Optional

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from tinylink.database import RedisCache, get_link_store
from tinylink.service import TinyLinkService
from tinylink.common.logging_config import setup_logging
from tinylink.errors import LinkNotFoundError, TinyLinkError


def default_db_url() -> str:
    """DATABASE_URL when set, otherwise the SQLite file from DB_FILE."""
    return os.getenv("DATABASE_URL") or f"sqlite:///{os.getenv('DB_FILE', 'tinylink.db')}"


def _print_error(message: str) -> None:
    print(json.dumps({"success": False, "error": message}, indent=2), file=sys.stderr)


class TinyLinkCLI:
    """Command-line interface for TinyLink."""

    def __init__(self, db_url: str, redis_url: Optional[str] = None, verbose: bool = False):
        """Initialize CLI."""
        self.db_url = db_url
        self.redis_url = redis_url
        self.verbose = verbose
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.db = None
        self.cache = None
        self.service = None

    async def initialize(self):
        """Initialize database and service."""
        self.db = get_link_store(self.db_url, logger=self.logger)
        await self.db.initialize()

        if self.redis_url:
            self.cache = RedisCache(redis_url=self.redis_url, logger=self.logger)
            await self.cache.connect()

        self.service = TinyLinkService(db=self.db, cache=self.cache, logger=self.logger)

    async def cleanup(self):
        """Cleanup resources."""
        if self.service:
            await self.service.close()
        elif self.db:
            await self.db.close()

    async def shorten(self, url: str, custom_code: Optional[str] = None) -> int:
        """Shorten a URL."""
        try:
            link = await self.service.create_link(url, custom_code)
        except TinyLinkError as e:
            _print_error(str(e))
            return 1

        print(json.dumps({
            "success": True,
            "short_code": link.short_code,
            "original_url": link.original_url,
            "created_at": link.created_at.isoformat(),
            "message": f"Successfully shortened URL to: {link.short_code}",
        }, indent=2))
        return 0

    async def get(self, short_code: str) -> int:
        """Look up a destination without counting a click."""
        try:
            link = await self.service.get_link(short_code)
        except TinyLinkError as e:
            _print_error(str(e))
            return 1

        print(json.dumps({
            "success": True,
            "short_code": short_code,
            "original_url": link.original_url,
        }, indent=2))
        return 0

    async def stats(self, short_code: str) -> int:
        """Get statistics for a short code."""
        try:
            link = await self.service.get_link(short_code)
        except TinyLinkError as e:
            _print_error(str(e))
            return 1

        print(json.dumps({"success": True, **link.to_dict()}, indent=2))
        return 0

    async def list_links(self, limit: Optional[int] = None) -> int:
        """List links, newest first."""
        try:
            links = await self.service.list_links()
        except TinyLinkError as e:
            _print_error(str(e))
            return 1

        if limit is not None:
            links = links[:limit]

        print(json.dumps({
            "success": True,
            "count": len(links),
            "links": [link.to_dict() for link in links],
        }, indent=2))
        return 0

    async def delete(self, short_code: str) -> int:
        """Delete a short code."""
        try:
            deleted = await self.service.delete_link(short_code)
        except TinyLinkError as e:
            _print_error(str(e))
            return 1

        if not deleted:
            _print_error(str(LinkNotFoundError(short_code)))
            return 1

        print(json.dumps({"success": True, "deleted": short_code}, indent=2))
        return 0

    async def health(self) -> int:
        """Check service health."""
        health_status = await self.service.health_check()
        print(json.dumps({"success": True, "health": health_status}, indent=2))
        return 0 if health_status["overall"] else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="TinyLink CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL (https:// is added when missing)
  %(prog)s shorten example.com/long/url

  # Shorten with custom code
  %(prog)s shorten https://example.com/long/url --custom-code mylink1

  # Dump every row of the links table
  %(prog)s list
        """
    )

    parser.add_argument(
        "--db-url",
        default=default_db_url(),
        help="Link store URL (default: DATABASE_URL, else sqlite:///$DB_FILE)"
    )
    parser.add_argument(
        "--redis-url",
        default=os.getenv("REDIS_URL"),
        help="Redis connection URL (optional, default: from REDIS_URL env)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--custom-code", help="Custom short code (6-8 letters or digits)")

    get_parser = subparsers.add_parser("get", help="Get original URL")
    get_parser.add_argument("short_code", help="Short code to lookup")

    stats_parser = subparsers.add_parser("stats", help="Get link statistics")
    stats_parser.add_argument("short_code", help="Short code to get stats for")

    list_parser = subparsers.add_parser("list", help="List links")
    list_parser.add_argument("--limit", type=int, default=None, help="Maximum number to return")

    delete_parser = subparsers.add_parser("delete", help="Delete a link")
    delete_parser.add_argument("short_code", help="Short code to delete")

    subparsers.add_parser("health", help="Check service health")

    return parser


async def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    cli = TinyLinkCLI(
        db_url=args.db_url,
        redis_url=args.redis_url,
        verbose=args.verbose,
    )

    try:
        try:
            await cli.initialize()
        except TinyLinkError as e:
            _print_error(str(e))
            return 1

        if args.command == "shorten":
            return await cli.shorten(args.url, args.custom_code)
        elif args.command == "get":
            return await cli.get(args.short_code)
        elif args.command == "stats":
            return await cli.stats(args.short_code)
        elif args.command == "list":
            return await cli.list_links(args.limit)
        elif args.command == "delete":
            return await cli.delete(args.short_code)
        elif args.command == "health":
            return await cli.health()
        else:
            parser.print_help()
            return 1
    finally:
        await cli.cleanup()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
