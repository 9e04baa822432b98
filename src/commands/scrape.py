#!/usr/bin/env python3
"""
Scrape command endpoints: run the daily digest or just list candidate links.
"""

import logging
from argparse import Namespace
from dataclasses import replace

from .base import BaseCommand
from digest.collect.links import collect_links
from digest.config import Config, describe_config, validate_config
from digest.formatters import format_run_summary
from digest.pipeline import open_page, run_digest

logger = logging.getLogger(__name__)


class ScrapeCommand(BaseCommand):
    """Scrape the listing page and write today's snapshot."""

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute scrape subcommand."""
        try:
            if getattr(args, 'verbose', False):
                root = logging.getLogger()
                root.setLevel(logging.DEBUG)
                for handler in root.handlers:
                    handler.setLevel(logging.DEBUG)

            if subcommand == "run":
                return self.run(args)
            elif subcommand == "links":
                return self.links(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except Exception as e:
            return self.handle_error(e, f"scrape {subcommand}")

    def _run_config(self, args: Namespace) -> Config:
        """Configuration with command line overrides applied."""
        config = self.config
        quota = getattr(args, 'quota', None)
        output_dir = getattr(args, 'output_dir', None)

        if quota is not None:
            config = replace(config, filters=replace(config.filters, result_quota=quota))
        if output_dir:
            config = replace(config, storage=replace(config.storage, output_dir=output_dir))
        if getattr(args, 'headed', False):
            config = replace(config, fetch=replace(config.fetch, headless=False))

        validate_config(config)
        return config

    def run(self, args: Namespace) -> int:
        """Run the full scrape and persist the snapshot."""
        config = self._run_config(args)
        engine = getattr(args, 'engine', 'playwright')

        for key, value in describe_config(config).items():
            self.logger.info(f"{key}: {value}")

        print(f"🔍 Scraping {config.site.listing_url} ({engine})...")
        summary = run_digest(config, engine=engine)
        print(format_run_summary(summary))
        return 0

    def links(self, args: Namespace) -> int:
        """Print the candidate links found on the listing page."""
        config = self._run_config(args)
        engine = getattr(args, 'engine', 'playwright')

        with open_page(config, engine) as page:
            links = collect_links(page, config)

        print(f"Found {len(links)} candidate links:")
        for link in links:
            print(f"  {link}")
        return 0
