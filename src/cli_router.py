#!/usr/bin/env python3
"""
Smart CLI Router for the Entertainment Digest.

Modular command architecture: scrape the daily digest, read snapshots and
track their review status.
"""

import argparse
import logging
import sys
from typing import Optional, List

from commands import get_command, COMMANDS
from digest.config import get_config_manager
from digest.pipeline import ENGINES
from digest.models.review import ReviewStatus

logger = logging.getLogger(__name__)


class CLIRouter:
    """
    CLI router for digest commands.

    Command structure:
    - python run.py scrape run --quota 10 --verbose
    - python run.py snapshot show --date 2026-10-18
    - python run.py review set --link URL --status completed
    """

    def __init__(self):
        """Initialize CLI router."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the main argument parser."""
        parser = argparse.ArgumentParser(
            description="Yahoo TW Entertainment Daily Digest",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_examples_text()
        )

        subparsers = parser.add_subparsers(
            dest='command',
            help='Available commands',
            metavar='{command}'
        )

        self._add_scrape_parser(subparsers)
        self._add_snapshot_parser(subparsers)
        self._add_review_parser(subparsers)

        return parser

    def _add_scrape_parser(self, subparsers):
        """Add scrape command parser."""
        scrape_parser = subparsers.add_parser(
            'scrape',
            help='Scrape the listing page and build the daily snapshot'
        )

        scrape_subparsers = scrape_parser.add_subparsers(
            dest='subcommand',
            help='Scrape operations',
            metavar='{run,links}'
        )

        run_parser = scrape_subparsers.add_parser('run', help='Run the full scrape and write today\'s snapshot')
        run_parser.add_argument('--engine', choices=ENGINES, default='playwright', help='Page engine (default: playwright)')
        run_parser.add_argument('--quota', type=int, default=None, help='Maximum accepted articles (default: RESULT_QUOTA or 10)')
        run_parser.add_argument('--output-dir', default=None, help='Snapshot directory (default: OUTPUT_DIR or docs/json)')
        run_parser.add_argument('--headed', action='store_true', help='Show the browser window')
        run_parser.add_argument('--verbose', action='store_true', help='Verbose output')

        links_parser = scrape_subparsers.add_parser('links', help='List candidate links from the listing page')
        links_parser.add_argument('--engine', choices=ENGINES, default='playwright', help='Page engine (default: playwright)')
        links_parser.add_argument('--headed', action='store_true', help='Show the browser window')
        links_parser.add_argument('--verbose', action='store_true', help='Verbose output')

    def _add_snapshot_parser(self, subparsers):
        """Add snapshot command parser."""
        snapshot_parser = subparsers.add_parser(
            'snapshot',
            help='Read stored daily snapshots'
        )

        snapshot_subparsers = snapshot_parser.add_subparsers(
            dest='subcommand',
            help='Snapshot operations',
            metavar='{show,recent,list}'
        )

        show_parser = snapshot_subparsers.add_parser('show', help='Show the snapshot of a date')
        show_parser.add_argument('--date', default=None, help='Date as YYYY-MM-DD (default: today)')

        recent_parser = snapshot_subparsers.add_parser('recent', help='Show article counts of recent days')
        recent_parser.add_argument('--days', type=int, default=7, help='Days to show (default: 7)')

        snapshot_subparsers.add_parser('list', help='List dates with a snapshot')

    def _add_review_parser(self, subparsers):
        """Add review command parser."""
        review_parser = subparsers.add_parser(
            'review',
            help='Review workflow status of snapshot articles'
        )

        review_subparsers = review_parser.add_subparsers(
            dest='subcommand',
            help='Review operations',
            metavar='{status,set,share}'
        )
        statuses = [status.value for status in ReviewStatus]

        status_parser = review_subparsers.add_parser('status', help='Show status counts and one status tab')
        status_parser.add_argument('--date', default=None, help='Date as YYYY-MM-DD (default: today)')
        status_parser.add_argument('--status', choices=statuses, default=None, help='Tab to list (default: unprocessed)')

        set_parser = review_subparsers.add_parser('set', help='Set the status of an article')
        set_parser.add_argument('--link', required=True, help='Article link')
        set_parser.add_argument('--status', required=True, choices=statuses, help='New status')

        share_parser = review_subparsers.add_parser('share', help='Print the share link of an article')
        share_parser.add_argument('--link', required=True, help='Article link')

    def _get_examples_text(self) -> str:
        """Get examples text for help."""
        return """
Examples:
  # Daily run (headless Chromium, quota 10)
  python run.py scrape run

  # Manual runs with custom settings
  python run.py scrape run --quota 5 --verbose --headed
  python run.py scrape run --engine static --output-dir /tmp/json
  python run.py scrape links

  # Reading results
  python run.py snapshot show
  python run.py snapshot recent --days 3
  python run.py review status --status selected-pic
  python run.py review set --link https://tw.news.yahoo.com/a.html --status completed

"""

    def route_command(self, args: Optional[List[str]] = None) -> int:
        """
        Route command to appropriate handler.

        Args:
            args: Command line arguments (uses sys.argv if None)

        Returns:
            Exit code
        """
        try:
            if args is None:
                args = sys.argv[1:]

            parsed_args = self.parser.parse_args(args)

            if not parsed_args.command:
                self.parser.print_help()
                return 1

            return self._handle_command(parsed_args)

        except SystemExit as e:
            # argparse calls sys.exit() on error or help
            return e.code if e.code is not None else 0
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            return 130
        except Exception as e:
            logger.error(f"CLI routing error: {e}", exc_info=True)
            return 1

    def _handle_command(self, args: argparse.Namespace) -> int:
        """Handle command structure."""
        logger.debug(f"Handling command: {args.command}")

        if args.command not in COMMANDS:
            available = ', '.join(COMMANDS.keys())
            logger.error(f"Unknown command '{args.command}'. Available: {available}")
            return 1

        subcommand = getattr(args, 'subcommand', None)
        if not subcommand:
            logger.error(f"No subcommand specified for '{args.command}'")
            self.parser.parse_args([args.command, '--help'])  # Show help
            return 1

        command = get_command(args.command)
        return command.execute(subcommand, args)


def main(args: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        get_config_manager().update_logging()
    except Exception as e:
        logger.error(f"Configuration error: {e}")
        return 1

    router = CLIRouter()
    return router.route_command(args)


if __name__ == '__main__':
    exit_code = main()
    sys.exit(exit_code)
