import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
import pytz

PROJECT_ROOT = Path(__file__).resolve().parents[2]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from digest.browser.html_page import HtmlPage  # noqa: E402
from digest.config import Config, FetchConfig, StorageConfig  # noqa: E402
from digest.models.article import ArticleRecord  # noqa: E402

ORIGIN = "https://tw.news.yahoo.com"
LISTING_URL = f"{ORIGIN}/entertainment/"
TAIPEI = pytz.timezone("Asia/Taipei")

# 2026-10-18 16:00 in Taipei
FIXED_NOW = TAIPEI.localize(datetime(2026, 10, 18, 16, 0))


def article_url(slug: str) -> str:
    return f"{ORIGIN}/{slug}.html"


def listing_html(featured: List[str], stream: List[str], extra: str = "") -> str:
    """Listing page with a featured (hero) region and a stream region."""
    hero_links = "\n".join(f'<a href="{href}">hero</a>' for href in featured)
    stream_links = "\n".join(f'<li><a href="{href}">item</a></li>' for href in stream)
    return f"""
    <html><body>
      <div id="Col1-1-Hero-Proxy">{hero_links}</div>
      <ul id="YDC-Stream">{stream_links}</ul>
      {extra}
    </body></html>
    """


def article_html(headline: Optional[str] = "女星出席記者會",
                 published: Optional[str] = "2026-10-18T15:00:00+08:00",
                 author: Optional[str] = "記者王小明",
                 provider: Optional[str] = "三立新聞網",
                 body: str = "女星今天出席新片記者會，談到拍攝過程。",
                 image: Optional[str] = "https://s.yimg.com/photo.jpg",
                 caption: Optional[str] = "女星出席記者會。（圖／記者攝）",
                 structured: Optional[Any] = None,
                 raw_structured: Optional[str] = None) -> str:
    """Article detail page with a JSON-LD block, a lead image and body text."""
    if raw_structured is None:
        if structured is None:
            structured = {"@context": "https://schema.org", "@type": "NewsArticle",
                          "publisher": {"@type": "Organization", "name": "Yahoo奇摩新聞"}}
            if headline is not None:
                structured["headline"] = headline
            if published is not None:
                structured["datePublished"] = published
            if author is not None:
                structured["author"] = {"@type": "Person", "name": author}
            if provider is not None:
                structured["provider"] = {"@type": "Organization", "name": provider}
        raw_structured = json.dumps(structured, ensure_ascii=False)

    figure = ""
    if image:
        figcaption = f"<figcaption>{caption}</figcaption>" if caption else ""
        figure = f'<figure><img src="{image}" alt="">{figcaption}</figure>'

    return f"""
    <html><body>
      <article id="article-1234">
        <script type="application/ld+json">{raw_structured}</script>
        {figure}
        <div class="caas-body"><p>{body}</p></div>
      </article>
    </body></html>
    """


class SleepRecorder:
    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fixed_now():
    return lambda: FIXED_NOW


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(
        fetch=FetchConfig(request_delay_seconds=1.0, scroll_rounds=2, scroll_settle_ms=0),
        storage=StorageConfig(
            output_dir=str(tmp_path / "json"),
            status_file=str(tmp_path / "review-status.json"),
        ),
    )


@pytest.fixture
def static_page_factory():
    def _factory(pages: Dict[str, str]) -> HtmlPage:
        return HtmlPage(pages=pages)

    return _factory


@pytest.fixture
def record_factory():
    def _factory(link: str = article_url("a1"),
                 head_line: str = "女星出席記者會",
                 publish_date: str = "2026-10-18T15:00:00+08:00",
                 author_name: str = "記者王小明",
                 news_provider: str = "三立新聞網",
                 content: str = "女星今天出席新片記者會。",
                 **kwargs) -> ArticleRecord:
        return ArticleRecord(
            link=link,
            head_line=head_line,
            publish_date=publish_date,
            author_name=author_name,
            news_provider=news_provider,
            content=content,
            **kwargs,
        )

    return _factory
