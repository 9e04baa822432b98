#!/usr/bin/env python3
"""
Daily digest pipeline: collect -> extract -> admit -> persist.

Strictly sequential: one page context, one candidate at a time, a fixed
pause between article fetches. The run ends when the quota is filled or
the candidate queue is exhausted, then the accepted records are written as
the snapshot for today's date in the target timezone.
"""

import logging
import time
import uuid
from datetime import datetime
from typing import Callable, List, Optional

import pytz

from .admission import AdmissionFilter, Decision
from .browser.base import PageCapability
from .collect.links import LinkCollector
from .config import Config
from .extract.article import ArticleExtractor
from .models.run import RunState, RunSummary
from .storage.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)

ENGINES = ('playwright', 'static')


class DigestPipeline:
    """Single run of the scraper over one page capability."""

    def __init__(self,
                 config: Config,
                 page: PageCapability,
                 collector: Optional[LinkCollector] = None,
                 extractor: Optional[ArticleExtractor] = None,
                 admission: Optional[AdmissionFilter] = None,
                 store: Optional[SnapshotStore] = None,
                 now: Optional[Callable[[], datetime]] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.config = config
        self.page = page
        self.now = now or (lambda: datetime.now(pytz.utc))
        self.sleep = sleep
        self.collector = collector or LinkCollector.from_config(config)
        self.extractor = extractor or ArticleExtractor.from_config(config)
        self.admission = admission or AdmissionFilter.from_config(config, now=self.now)
        self.store = store or SnapshotStore(config.storage.output_dir)

    def local_now(self) -> datetime:
        return self.now().astimezone(self.config.filters.tz)

    def discover(self) -> List[str]:
        """
        Load the listing page and collect candidate links.

        A listing page that cannot be loaded aborts the run.
        """
        self.page.navigate(self.config.site.listing_url)
        self.collector.load_more(self.page)
        return self.collector.collect(self.page)

    def process(self, links: List[str], state: RunState, summary: RunSummary) -> None:
        """Extract and admit candidates in order until the quota stops the run."""
        delay = self.config.fetch.request_delay_seconds
        fetched_any = False

        for link in links:
            if not state.mark_seen(link):
                continue

            if self.admission.quota_reached(state):
                summary.stopped_on_quota = True
                logger.info(f"Quota of {state.accepted_count} reached, skipping remaining candidates")
                break

            if fetched_any and delay > 0:
                self.sleep(delay)
            fetched_any = True

            candidate = self.extractor.extract(self.page, link)
            if candidate is None:
                summary.navigation_failures += 1
                continue
            summary.fetched += 1

            result = self.admission.admit(candidate, state)
            if result.decision is Decision.STOP_RUN:
                summary.stopped_on_quota = True
                break

        if self.admission.quota_reached(state):
            summary.stopped_on_quota = True

    def run(self) -> RunSummary:
        started = self.local_now()
        run_date = started.date()
        summary = RunSummary(
            run_id=str(uuid.uuid4())[:8],
            run_date=run_date.isoformat(),
            started_at=started,
        )
        logger.info(f"Starting run {summary.run_id} for {summary.run_date}")

        state = RunState()
        links = self.discover()
        summary.candidates = len(links)

        self.process(links, state, summary)

        summary.accepted = state.accepted_count
        summary.rejections = dict(self.admission.rejections)

        path = self.store.persist(run_date, state.accepted, generated_at=self.local_now())
        summary.snapshot_path = str(path)
        summary.finished_at = self.local_now()

        logger.info(
            f"Run {summary.run_id} finished: {summary.accepted} accepted, "
            f"{summary.fetched} fetched, {summary.navigation_failures} failed, "
            f"rejections {summary.rejections}"
        )
        return summary


def open_page(config: Config, engine: str = 'playwright'):
    """Context manager yielding a page capability for the chosen engine."""
    if engine == 'playwright':
        from .browser.playwright_page import PlaywrightSession
        return PlaywrightSession(
            headless=config.fetch.headless,
            timeout_seconds=config.fetch.navigation_timeout_seconds,
            user_agent=config.fetch.user_agent,
        )
    if engine == 'static':
        from .browser.html_page import HtmlPage
        return HtmlPage(
            timeout=config.fetch.navigation_timeout_seconds,
            user_agent=config.fetch.user_agent,
        )
    raise ValueError(f"Unknown engine '{engine}'. Available: {', '.join(ENGINES)}")


def run_digest(config: Config, engine: str = 'playwright') -> RunSummary:
    """Run one full digest with a scoped page session."""
    with open_page(config, engine) as page:
        return DigestPipeline(config, page).run()
