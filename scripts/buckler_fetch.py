#!/usr/bin/env python3
# scripts/buckler_fetch.py
"""
CLI for one-off Buckler scrapes without the web server.

Usage:
    python scripts/buckler_fetch.py stats --user-code 1415778165
    python scripts/buckler_fetch.py matchups --user-code 1415778165 --character JP
    python scripts/buckler_fetch.py search --name Daigo --json
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.buckler import BucklerError, BucklerScraper, Settings, rank_matchups


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Scrape SF6 Buckler profile data for a player',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/buckler_fetch.py stats --user-code 1415778165
  python scripts/buckler_fetch.py matchups --user-code 1415778165 --character "Chun-Li"
  python scripts/buckler_fetch.py search --name Daigo --headed
        """
    )
    parser.add_argument(
        '--headed',
        action='store_true',
        default=False,
        help='Run in headed mode (visible browser)'
    )
    parser.add_argument('--json', action='store_true', help='Print raw JSON instead of a table')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    commands = parser.add_subparsers(dest='command', required=True)

    stats = commands.add_parser('stats', help='Win rate / LP / MR per character')
    stats.add_argument('--user-code', required=True, help='Buckler user code')

    matchups = commands.add_parser('matchups', help='Matchup breakdown for one character')
    matchups.add_argument('--user-code', required=True, help='Buckler user code')
    matchups.add_argument('--character', required=True, help='Character name, e.g. JP or Ryu')

    search = commands.add_parser('search', help='Find user codes by display name')
    search.add_argument('--name', required=True, help='Fighter name to search')

    return parser


def _print_stats(rows) -> None:
    print(f"{'Character':<16}{'Win %':>10}{'LP':>12}{'MR':>10}")
    print("-" * 48)
    for row in rows:
        print(f"{row.name:<16}{row.win_rate:>10}{row.league_points:>12}{row.master_rate or '-':>10}")


def _print_matchups(records) -> None:
    print(f"{'Opponent':<16}{'Battles':>10}{'Win %':>10}")
    print("-" * 36)
    for record in records:
        print(f"{record.opponent_name:<16}{record.match_count:>10}{record.win_rate_percent:>10}")

    best, worst = rank_matchups(records)
    if best:
        print("\nBest:  " + ", ".join(f"{m.opponent_name} ({m.win_rate_percent})" for m in best))
        print("Worst: " + ", ".join(f"{m.opponent_name} ({m.win_rate_percent})" for m in worst))


def _print_players(players) -> None:
    if not players:
        print("No players found.")
        return
    for player in players:
        print(f"{player.user_code:<14}{player.name:<20}{player.info}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entrypoint."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = Settings.from_env()
    if args.headed:
        settings.headless = False
    scraper = BucklerScraper(settings)

    try:
        if args.command == 'stats':
            result = scraper.fetch_character_stats(args.user_code)
            printer = _print_stats
        elif args.command == 'matchups':
            result = scraper.fetch_matchup_breakdown(args.user_code, args.character)
            printer = _print_matchups
        else:
            result = scraper.search_players_by_name(args.name)
            printer = _print_players
    except BucklerError as e:
        print(f"✗ ERROR ({e.status_code}): {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps([item.to_dict() for item in result], ensure_ascii=False, indent=2))
    else:
        printer(result)
    return 0


if __name__ == '__main__':
    sys.exit(main())
