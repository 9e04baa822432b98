import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from digest.browser.playwright_page import PlaywrightPage, PlaywrightSession
from digest.exceptions import BrowserLaunchError, NavigationError
from digest.pipeline import run_digest

from conftest import LISTING_URL, article_url


class FakeResponse:
    def __init__(self, status: int) -> None:
        self.status = status


class FakePlaywrightPage:
    def __init__(self, status: int = 200, goto_error=None, elements=None) -> None:
        self.status = status
        self.goto_error = goto_error
        self.elements = elements or []
        self.calls = []

    def goto(self, url, wait_until=None, timeout=None):
        self.calls.append(("goto", url, wait_until, timeout))
        if self.goto_error:
            raise self.goto_error
        return FakeResponse(self.status)

    def eval_on_selector_all(self, selector, script):
        self.calls.append(("select", selector))
        return self.elements

    def eval_on_selector(self, selector, script):
        self.calls.append(("select_one", selector))
        if not self.elements:
            raise PlaywrightError(f"Failed to find element matching selector \"{selector}\"")
        return self.elements[0]

    def evaluate(self, script):
        self.calls.append(("evaluate", script))

    def wait_for_timeout(self, ms):
        self.calls.append(("wait", ms))


class FakeBrowser:
    def __init__(self, page, events):
        self.page = page
        self.events = events
        self.context_options = None

    def new_context(self, **options):
        self.context_options = options
        return self

    def new_page(self):
        return self.page

    def close(self):
        self.events.append("browser.close")


class FakeDriver:
    """Stands in for the object `sync_playwright().start()` returns."""

    def __init__(self, page=None, launch_error=None):
        self.events = []
        self.launch_error = launch_error
        self.browser = FakeBrowser(page or FakePlaywrightPage(), self.events)
        self.chromium = self

    def start(self):
        self.events.append("start")
        return self

    def launch(self, headless=True):
        self.events.append(("launch", headless))
        if self.launch_error:
            raise self.launch_error
        return self.browser

    def stop(self):
        self.events.append("stop")


@pytest.fixture
def install_driver(monkeypatch):
    def _install(driver):
        monkeypatch.setattr("digest.browser.playwright_page.sync_playwright", lambda: driver)
        return driver
    return _install


def test_navigate_waits_for_dom_ready_with_timeout():
    fake = FakePlaywrightPage()
    page = PlaywrightPage(fake, timeout_seconds=60)

    page.navigate(article_url("a1"))

    assert fake.calls == [("goto", article_url("a1"), "domcontentloaded", 60000)]
    assert page.current_url == article_url("a1")


def test_navigation_timeout_maps_to_navigation_error():
    page = PlaywrightPage(FakePlaywrightPage(goto_error=PlaywrightTimeoutError("Timeout 60000ms exceeded")))

    with pytest.raises(NavigationError) as exc_info:
        page.navigate(article_url("a1"))

    assert exc_info.value.context["timeout_seconds"] == 60.0
    assert page.current_url is None


def test_http_error_status_fails_navigation():
    page = PlaywrightPage(FakePlaywrightPage(status=404))

    with pytest.raises(NavigationError):
        page.navigate(article_url("a1"))


def test_select_returns_element_snapshots():
    fake = FakePlaywrightPage(elements=[
        {"tag": "img", "text": "", "attrs": {"src": " https://s.yimg.com/x.jpg "},
         "nextSiblingText": "（圖／記者攝）", "rawText": ""},
        {"tag": "a", "text": "  標題\n\n  內文 ", "attrs": {"href": ""}, "nextSiblingText": "", "rawText": ""},
    ])
    page = PlaywrightPage(fake)

    image, anchor = page.select("article img")

    assert image.get("src") == "https://s.yimg.com/x.jpg"
    assert image.next_sibling_text == "（圖／記者攝）"
    assert anchor.get("href") is None
    assert anchor.text == "標題\n內文"
    assert anchor.next_sibling_text is None


def test_scroll_to_bottom_waits_settle_interval():
    fake = FakePlaywrightPage()

    PlaywrightPage(fake).scroll_to_bottom(1500)

    assert fake.calls[-1] == ("wait", 1500)


def test_select_one_returns_first_match():
    fake = FakePlaywrightPage(elements=[
        {"tag": "div", "text": "內文", "attrs": {"class": "caas-body"}, "nextSiblingText": None, "rawText": "內文"},
    ])

    element = PlaywrightPage(fake).select_one("div.caas-body")

    assert element.tag == "div"
    assert element.text == "內文"
    assert fake.calls == [("select_one", "div.caas-body")]


def test_select_one_missing_element_returns_none():
    assert PlaywrightPage(FakePlaywrightPage()).select_one("article img") is None


def test_session_closes_browser_after_normal_use(install_driver):
    driver = install_driver(FakeDriver())

    with PlaywrightSession(headless=True, user_agent="UA") as page:
        page.navigate(article_url("a1"))

    assert driver.events == ["start", ("launch", True), "browser.close", "stop"]
    assert driver.browser.context_options == {"locale": "zh-TW", "user_agent": "UA"}


def test_session_closes_browser_when_body_raises(install_driver):
    driver = install_driver(FakeDriver())

    with pytest.raises(RuntimeError):
        with PlaywrightSession():
            raise RuntimeError("boom")

    assert driver.events[-2:] == ["browser.close", "stop"]


def test_launch_failure_stops_driver_and_raises_launch_error(install_driver):
    driver = install_driver(FakeDriver(launch_error=PlaywrightError("Executable doesn't exist")))

    with pytest.raises(BrowserLaunchError):
        with PlaywrightSession():
            pass

    assert driver.events == ["start", ("launch", True), "stop"]


def test_run_digest_closes_browser_when_listing_fails(install_driver, config):
    page = FakePlaywrightPage(goto_error=PlaywrightError("net::ERR_NAME_NOT_RESOLVED"))
    driver = install_driver(FakeDriver(page=page))

    with pytest.raises(NavigationError):
        run_digest(config, engine="playwright")

    assert page.calls[0][:2] == ("goto", LISTING_URL)
    assert driver.events[-2:] == ["browser.close", "stop"]
