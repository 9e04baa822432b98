import pytest

from digest.browser.html_page import HtmlPage
from digest.collect.links import LinkCollector, collect_links, dedupe, is_article_link, normalize_href
from digest.config import Config, LinkRegion

from conftest import LISTING_URL, ORIGIN, article_url, listing_html


@pytest.mark.parametrize("href,expected", [
    ("/a1.html", f"{ORIGIN}/a1.html"),
    ("a1.html", f"{ORIGIN}/a1.html"),
    ("//tw.news.yahoo.com/a2.html", f"{ORIGIN}/a2.html"),
    (f"{ORIGIN}/a3.html#comments", f"{ORIGIN}/a3.html"),
    (f"{ORIGIN}/a4.html?src=rss", f"{ORIGIN}/a4.html?src=rss"),
    ("  /a5.html  ", f"{ORIGIN}/a5.html"),
])
def test_normalize_href_resolves_against_origin(href, expected):
    assert normalize_href(href, ORIGIN) == expected


@pytest.mark.parametrize("href", [None, "", "#top", "javascript:void(0)", "mailto:x@y.z", "tel:123"])
def test_normalize_href_ignores_non_page_links(href):
    assert normalize_href(href, ORIGIN) is None


def test_is_article_link_checks_host_and_marker():
    assert is_article_link(f"{ORIGIN}/a1.html", "tw.news.yahoo.com", ".html")
    assert is_article_link("https://TW.NEWS.YAHOO.COM/a1.html", "tw.news.yahoo.com", ".html")
    assert not is_article_link(f"{ORIGIN}/entertainment/", "tw.news.yahoo.com", ".html")
    assert not is_article_link("https://tw.stock.yahoo.com/a1.html", "tw.news.yahoo.com", ".html")


def test_dedupe_keeps_first_appearance():
    assert dedupe(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]


def test_collect_links_across_regions_collapses_duplicates():
    html = listing_html(
        featured=["/a1.html", "//tw.news.yahoo.com/a2.html"],
        stream=[
            article_url("a1"),
            f"{ORIGIN}/a3.html#comments",
            f"{ORIGIN}/video/",
            "https://other.example.com/x.html",
            "javascript:void(0)",
            "#top",
            "/a2.html",
        ],
    )
    page = HtmlPage(pages={LISTING_URL: html})

    links = collect_links(page, Config())

    assert links == [article_url("a1"), article_url("a2"), article_url("a3")]
    assert len(links) == len(set(links))
    assert page.history == [LISTING_URL]


def test_missing_region_yields_empty_list_not_error():
    html = "<html><body><ul id='YDC-Stream'><li><a href='/a9.html'>x</a></li></ul></body></html>"
    page = HtmlPage(pages={LISTING_URL: html})
    page.navigate(LISTING_URL)

    collector = LinkCollector(
        origin=ORIGIN,
        news_host="tw.news.yahoo.com",
        regions=[
            LinkRegion("featured", "#Col1-1-Hero-Proxy a"),
            LinkRegion("stream", "#YDC-Stream a"),
            LinkRegion("regional", "#Col2-Regional a"),
        ],
    )

    assert collector.region_links(page, collector.regions[0]) == []
    assert collector.collect(page) == [article_url("a9")]


def test_load_more_scrolls_bounded_rounds():
    class CountingPage(HtmlPage):
        def __init__(self):
            super().__init__(pages={})
            self.scrolls = []

        def scroll_to_bottom(self, settle_ms):
            self.scrolls.append(settle_ms)

    page = CountingPage()
    collector = LinkCollector(ORIGIN, "tw.news.yahoo.com", [], scroll_rounds=2, scroll_settle_ms=1500)

    collector.load_more(page)

    assert page.scrolls == [1500, 1500]