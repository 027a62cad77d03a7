#!/usr/bin/env python
"""
Terminal Dashboard

Fetches transactions, statistics and the price-range bar chart from the
Sales Dashboard API and prints them.

Usage:
    python dashboard.py
    python dashboard.py --month 11 --search shirt
    python dashboard.py --month 3 --page 2 --url http://localhost:8000
    python dashboard.py --initialize
"""
import argparse
import asyncio
import logging
import sys

import httpx

from sales_api.client.dashboard import DEFAULT_MONTH, DashboardClient, DashboardState
from sales_api.client.render import render_dashboard


async def run(args: argparse.Namespace) -> int:
    state = DashboardState(month=args.month, search=args.search, page=args.page)

    async with DashboardClient(base_url=args.url, state=state, timeout=args.timeout) as client:
        if args.initialize:
            try:
                response = await client.http_client.get("/api/initialize")
                response.raise_for_status()
            except httpx.HTTPError as e:
                print(f"Error: failed to initialize database: {e}", file=sys.stderr)
                return 1
            print(response.json().get("message", "Database initialized"))

        await client.refresh()
        print(render_dashboard(client))
    return 0


def main():
    """Main entry point for the script."""
    parser = argparse.ArgumentParser(
        description="Show the sales transaction dashboard in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --month 11
  %(prog)s --month 3 --search "mens" --page 2
  %(prog)s --initialize --url http://localhost:8000
        """
    )

    parser.add_argument(
        "--url",
        type=str,
        default="http://localhost:8000",
        help="Base API URL (default: http://localhost:8000)"
    )

    parser.add_argument(
        "--month",
        type=int,
        choices=range(1, 13),
        default=DEFAULT_MONTH,
        metavar="{1..12}",
        help=f"Month of sale (default: {DEFAULT_MONTH})"
    )

    parser.add_argument(
        "--search",
        type=str,
        default="",
        help="Search title/description text or an exact price"
    )

    parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="Page number (default: 1)"
    )

    parser.add_argument(
        "--initialize",
        action="store_true",
        help="Re-seed the database from the feed before rendering"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=30,
        help="Request timeout in seconds (default: 30)"
    )

    args = parser.parse_args()

    if args.page < 1:
        parser.error("--page must be at least 1")

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
