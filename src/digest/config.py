#!/usr/bin/env python3
"""
Centralized Configuration Manager

Single source of truth for the scraper's site conventions, admission
filter knobs, fetch pacing and storage locations. Values come from the
environment (optionally seeded from a .env file) and fall back to the
defaults below.
"""

import os
import logging
from dataclasses import dataclass, field
from datetime import time
from typing import Optional, List, Dict

import pytz

from .env_loader import load_env_file
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


@dataclass(frozen=True)
class LinkRegion:
    """A named DOM region of the listing page that holds article links."""
    name: str
    selector: str


@dataclass(frozen=True)
class SensitiveTerm:
    """One denylist entry; literal substring unless regex is set."""
    pattern: str
    ignore_case: bool = False
    regex: bool = False


DEFAULT_LINK_REGIONS = [
    LinkRegion('featured', '#Col1-1-Hero-Proxy a'),
    LinkRegion('stream', '#YDC-Stream a'),
]

DEFAULT_SENSITIVE_TERMS = [
    SensitiveTerm('AV'),
    SensitiveTerm('性侵'),
    SensitiveTerm('犯罪'),
    SensitiveTerm('逮捕'),
]


@dataclass
class SiteConfig:
    """Markup contract with the source site."""
    origin: str = "https://tw.news.yahoo.com"
    listing_url: str = "https://tw.news.yahoo.com/entertainment/"
    news_host: str = "tw.news.yahoo.com"
    article_path_marker: str = ".html"
    link_regions: List[LinkRegion] = field(default_factory=lambda: list(DEFAULT_LINK_REGIONS))
    article_container: str = "article[id^='article-']"
    structured_data_selector: str = "script[type='application/ld+json']"
    image_selector: str = "img"


@dataclass
class FilterConfig:
    """Admission filter settings."""
    brand_token: str = "yahoo"
    target_timezone: str = "Asia/Taipei"
    daily_cutoff: time = time(14, 0)
    headline_prefix_length: int = 7
    result_quota: int = 10
    sensitive_terms: List[SensitiveTerm] = field(default_factory=lambda: list(DEFAULT_SENSITIVE_TERMS))

    @property
    def tz(self):
        return pytz.timezone(self.target_timezone)


@dataclass
class FetchConfig:
    """Browser and pacing settings."""
    request_delay_seconds: float = 1.0
    navigation_timeout_seconds: float = 60.0
    scroll_rounds: int = 2
    scroll_settle_ms: int = 1500
    headless: bool = True
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class StorageConfig:
    """Where snapshots and review state live."""
    output_dir: str = "docs/json"
    status_file: str = "docs/review-status.json"
    share_ncid: str = "facebook_twfbtracki_qycu9rbgk0q"


@dataclass
class Config:
    """Master configuration container."""
    site: SiteConfig = field(default_factory=SiteConfig)
    filters: FilterConfig = field(default_factory=FilterConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    # Logging
    log_level: str = "INFO"
    verbose_logging: bool = False


def parse_link_regions(value: str) -> List[LinkRegion]:
    """Parse ``name=selector;name=selector`` into link regions."""
    regions = []
    for part in value.split(';'):
        part = part.strip()
        if not part:
            continue
        if '=' not in part:
            raise ConfigurationError('LINK_REGIONS', f"expected name=selector, got '{part}'")
        name, selector = part.split('=', 1)
        name, selector = name.strip(), selector.strip()
        if not name or not selector:
            raise ConfigurationError('LINK_REGIONS', f"empty name or selector in '{part}'")
        regions.append(LinkRegion(name, selector))
    return regions


def parse_sensitive_terms(value: str) -> List[SensitiveTerm]:
    """
    Parse a comma separated denylist.

    ``i:`` marks a case-insensitive term, ``re:`` a regular expression;
    the prefixes combine as ``i:re:pattern``.
    """
    terms = []
    for raw in value.split(','):
        raw = raw.strip()
        if not raw:
            continue
        ignore_case = False
        regex = False
        if raw.startswith('i:'):
            ignore_case, raw = True, raw[2:]
        if raw.startswith('re:'):
            regex, raw = True, raw[3:]
        if raw:
            terms.append(SensitiveTerm(raw, ignore_case=ignore_case, regex=regex))
    return terms


def parse_cutoff(value: str) -> time:
    """Parse HH:MM into a time of day."""
    try:
        hours, minutes = value.strip().split(':', 1)
        return time(int(hours), int(minutes))
    except ValueError as e:
        raise ConfigurationError('DAILY_CUTOFF', f"expected HH:MM, got '{value}'") from e


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class ConfigManager:
    """Manages application configuration with validation and environment loading."""

    def __init__(self, env_file_path: str = ".env"):
        """
        Initialize configuration manager.

        Args:
            env_file_path: Path to .env file relative to project root
        """
        self._config: Optional[Config] = None
        load_env_file(env_file_path)

    def get_config(self, force_reload: bool = False) -> Config:
        """
        Get application configuration.

        Args:
            force_reload: Force reloading configuration from environment
        """
        if self._config is None or force_reload:
            self._config = self._build_config()
        return self._config

    def _build_config(self) -> Config:
        """Build configuration from environment variables."""
        defaults_site = SiteConfig()
        origin = os.getenv('SITE_ORIGIN', defaults_site.origin).rstrip('/')

        regions_env = os.getenv('LINK_REGIONS')
        site_config = SiteConfig(
            origin=origin,
            listing_url=os.getenv('LISTING_URL', defaults_site.listing_url),
            news_host=os.getenv('NEWS_HOST', defaults_site.news_host),
            article_path_marker=os.getenv('ARTICLE_PATH_MARKER', defaults_site.article_path_marker),
            link_regions=parse_link_regions(regions_env) if regions_env else list(DEFAULT_LINK_REGIONS),
        )

        terms_env = os.getenv('SENSITIVE_KEYWORDS')
        try:
            filter_config = FilterConfig(
                brand_token=os.getenv('BRAND_TOKEN', 'yahoo'),
                target_timezone=os.getenv('TARGET_TIMEZONE', 'Asia/Taipei'),
                daily_cutoff=parse_cutoff(os.getenv('DAILY_CUTOFF', '14:00')),
                headline_prefix_length=int(os.getenv('HEADLINE_PREFIX_LENGTH', '7')),
                result_quota=int(os.getenv('RESULT_QUOTA', '10')),
                sensitive_terms=parse_sensitive_terms(terms_env) if terms_env is not None else list(DEFAULT_SENSITIVE_TERMS),
            )

            fetch_config = FetchConfig(
                request_delay_seconds=float(os.getenv('REQUEST_DELAY_SECONDS', '1.0')),
                navigation_timeout_seconds=float(os.getenv('NAVIGATION_TIMEOUT_SECONDS', '60')),
                scroll_rounds=int(os.getenv('SCROLL_ROUNDS', '2')),
                scroll_settle_ms=int(os.getenv('SCROLL_SETTLE_MS', '1500')),
                headless=_env_bool('HEADLESS', True),
                user_agent=os.getenv('USER_AGENT', DEFAULT_USER_AGENT),
            )
        except ValueError as e:
            raise ConfigurationError('environment', f"invalid numeric value ({e})") from e

        storage_config = StorageConfig(
            output_dir=os.getenv('OUTPUT_DIR', 'docs/json'),
            status_file=os.getenv('STATUS_FILE', 'docs/review-status.json'),
            share_ncid=os.getenv('SHARE_NCID', StorageConfig.share_ncid),
        )

        config = Config(
            site=site_config,
            filters=filter_config,
            fetch=fetch_config,
            storage=storage_config,
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            verbose_logging=_env_bool('VERBOSE_LOGGING', False),
        )

        validate_config(config)
        return config

    def update_logging(self) -> None:
        """Configure logging based on current configuration."""
        config = self.get_config()

        numeric_level = getattr(logging, config.log_level)
        logging.getLogger().setLevel(numeric_level)

        if config.verbose_logging:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
        else:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

        for handler in logging.getLogger().handlers:
            handler.setLevel(numeric_level)
            handler.setFormatter(logging.Formatter(format_str, datefmt='%Y-%m-%d %H:%M:%S'))


def validate_config(config: Config) -> None:
    """Validate configuration values, reporting every problem at once."""
    errors = []

    if not config.site.origin.startswith(('http://', 'https://')):
        errors.append("SITE_ORIGIN must start with http:// or https://")

    if not config.site.link_regions:
        errors.append("LINK_REGIONS must name at least one region")

    if not config.filters.brand_token.strip():
        errors.append("BRAND_TOKEN must not be empty")

    try:
        pytz.timezone(config.filters.target_timezone)
    except pytz.UnknownTimeZoneError:
        errors.append(f"TARGET_TIMEZONE '{config.filters.target_timezone}' is not a known timezone")

    if config.filters.headline_prefix_length < 1:
        errors.append("HEADLINE_PREFIX_LENGTH must be at least 1")

    if config.filters.result_quota < 1:
        errors.append("RESULT_QUOTA must be at least 1")

    if config.fetch.request_delay_seconds < 0:
        errors.append("REQUEST_DELAY_SECONDS must not be negative")

    if config.fetch.navigation_timeout_seconds <= 0:
        errors.append("NAVIGATION_TIMEOUT_SECONDS must be positive")

    if config.fetch.scroll_rounds < 0:
        errors.append("SCROLL_ROUNDS must not be negative")

    valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    if config.log_level not in valid_log_levels:
        errors.append(f"LOG_LEVEL must be one of: {', '.join(valid_log_levels)}")

    if errors:
        raise ConfigurationError('environment', '; '.join(errors))

    logger.debug("Configuration validation passed")


def describe_config(config: Config) -> Dict[str, str]:
    """Flat view of the settings worth echoing at the start of a run."""
    return {
        'listing_url': config.site.listing_url,
        'regions': ', '.join(region.name for region in config.site.link_regions),
        'timezone': config.filters.target_timezone,
        'cutoff': config.filters.daily_cutoff.strftime('%H:%M'),
        'quota': str(config.filters.result_quota),
        'output_dir': config.storage.output_dir,
    }


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> Config:
    """Get application configuration."""
    return get_config_manager().get_config()


def reset_config() -> None:
    """Reset configuration manager (useful for testing)."""
    global _config_manager
    _config_manager = None
