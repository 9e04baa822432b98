import pytest

from cli_router import main
from digest.browser.html_page import HtmlPage
from digest.config import reset_config
from digest.container import get_container, reset_container
from digest.exceptions import NavigationError
from digest.pipeline import DigestPipeline
from digest.storage.snapshot_store import SnapshotStore
from digest.storage.status_store import ReviewStatusStore

from conftest import FIXED_NOW, LISTING_URL, article_html, article_url, listing_html


@pytest.fixture
def container(config):
    reset_config()
    reset_container()
    container = get_container()
    container.register_instance('config', config)
    container.register_instance('snapshot_store', SnapshotStore(config.storage.output_dir))
    container.register_instance('status_store', ReviewStatusStore(config.storage.status_file))
    yield container
    reset_container()
    reset_config()


def test_snapshot_show_missing_date_is_not_an_error(container, capsys):
    assert main(["snapshot", "show", "--date", "2026-01-01"]) == 0
    assert "No news for 2026-01-01" in capsys.readouterr().out


def test_snapshot_show_and_list(container, record_factory, capsys):
    container.get('snapshot_store').persist("2026-10-18", [record_factory()], generated_at=FIXED_NOW)

    assert main(["snapshot", "show", "--date", "2026-10-18"]) == 0
    out = capsys.readouterr().out
    assert "女星出席記者會" in out
    assert "[unprocessed]" in out

    assert main(["snapshot", "list"]) == 0
    assert "2026-10-18" in capsys.readouterr().out


def test_review_set_then_status(container, record_factory, capsys):
    container.get('snapshot_store').persist("2026-10-18", [record_factory()], generated_at=FIXED_NOW)

    assert main(["review", "set", "--link", article_url("a1"), "--status", "selected-pic"]) == 0
    assert main(["review", "status", "--date", "2026-10-18", "--status", "selected-pic"]) == 0

    out = capsys.readouterr().out
    assert "已選圖 (selected-pic): 1" in out
    assert "未處理 (unprocessed): 0" in out
    assert article_url("a1") in out


def test_review_set_rejects_unknown_status(container):
    assert main(["review", "set", "--link", article_url("a1"), "--status", "archived"]) == 2


def test_review_share(container, capsys):
    assert main(["review", "share", "--link", article_url("a1")]) == 0
    assert capsys.readouterr().out.strip() == f"{article_url('a1')}?ncid=facebook_twfbtracki_qycu9rbgk0q"


def test_scrape_run_applies_overrides(container, tmp_path, monkeypatch, capsys, fixed_now):
    pages = {
        LISTING_URL: listing_html(featured=["/a1.html"], stream=[]),
        article_url("a1"): article_html(),
    }
    seen = {}

    def fake_run_digest(config, engine='playwright'):
        seen['config'] = config
        seen['engine'] = engine
        return DigestPipeline(config, HtmlPage(pages=pages), now=fixed_now, sleep=lambda _: None).run()

    monkeypatch.setattr("commands.scrape.run_digest", fake_run_digest)
    output_dir = tmp_path / "override"

    code = main(["scrape", "run", "--engine", "static", "--quota", "3", "--output-dir", str(output_dir)])

    assert code == 0
    assert seen['engine'] == "static"
    assert seen['config'].filters.result_quota == 3
    assert (output_dir / "2026-10-18.json").exists()
    assert "Accepted: 1" in capsys.readouterr().out
    # the shared configuration is left untouched
    assert container.get('config').filters.result_quota == 10


def test_scrape_run_listing_failure_exit_code(container, monkeypatch):
    def failing_run_digest(config, engine='playwright'):
        raise NavigationError(LISTING_URL, TimeoutError("timed out"), timeout_seconds=60)

    monkeypatch.setattr("commands.scrape.run_digest", failing_run_digest)

    assert main(["scrape", "run"]) == 3


def test_scrape_run_invalid_quota(container):
    assert main(["scrape", "run", "--quota", "0"]) == 1


def test_no_command_prints_help(container):
    assert main([]) == 1


def test_default_container_builds_store_before_config(tmp_path, monkeypatch):
    status_file = tmp_path / "review-status.json"
    monkeypatch.setenv("STATUS_FILE", str(status_file))
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "json"))
    reset_config()
    reset_container()
    try:
        store = get_container().get('status_store')

        assert store.path == status_file
        assert get_container().get('snapshot_store').output_dir == tmp_path / "json"
    finally:
        reset_container()
        reset_config()
