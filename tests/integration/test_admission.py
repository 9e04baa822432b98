from datetime import time

import pytest

from digest.admission import (
    AdmissionFilter,
    Decision,
    HeadlinePresenceStage,
    NearDuplicateStage,
    ProvenanceStage,
    QuotaStage,
    RecencyStage,
    SensitiveKeywordStage,
)
from digest.config import Config, SensitiveTerm
from digest.models.run import RunState

from conftest import article_url


@pytest.fixture
def admission(fixed_now):
    return AdmissionFilter.from_config(Config(), now=fixed_now)


def test_accepts_and_records_fingerprint(admission, record_factory):
    state = RunState()

    result = admission.admit(record_factory(), state)

    assert result.decision is Decision.ACCEPT
    assert state.accepted_count == 1
    assert state.fingerprints == {"女星出席記者會"}


def test_self_published_author_rejected_at_provenance(admission, record_factory):
    # published yesterday as well, so reaching recency would also reject
    candidate = record_factory(author_name="Yahoo 編輯室", publish_date="2026-10-17T23:00:00+08:00")
    state = RunState()

    result = admission.admit(candidate, state)

    assert result.decision is Decision.REJECT
    assert result.stage == "provenance"
    assert state.accepted_count == 0
    assert admission.rejections == {"provenance": 1}


def test_provenance_checks_provider_case_insensitively(admission, record_factory):
    result = admission.evaluate(record_factory(news_provider="YAHOO奇摩（即時新聞）"), RunState())

    assert result.stage == "provenance"


def test_empty_structured_data_rejected_at_headline(admission, record_factory):
    candidate = record_factory(head_line="", publish_date="", author_name="", news_provider="")

    result = admission.admit(candidate, RunState())

    assert result.decision is Decision.REJECT
    assert result.stage == "headline"


def test_published_yesterday_rejected_at_recency(admission, record_factory):
    result = admission.evaluate(record_factory(publish_date="2026-10-17T23:00:00+08:00"), RunState())

    assert result.stage == "recency"
    assert "not 2026-10-18" in result.reason


def test_published_before_cutoff_rejected_at_recency(admission, record_factory):
    result = admission.evaluate(record_factory(publish_date="2026-10-18T13:00:00+08:00"), RunState())

    assert result.stage == "recency"
    assert "before cutoff 14:00" in result.reason


@pytest.mark.parametrize("publish_date,accepted", [
    ("2026-10-18T14:00:00+08:00", True),
    ("2026-10-18T06:30:00Z", True),        # 14:30 in Taipei
    ("2026-10-18T05:59:00Z", False),       # 13:59 in Taipei
    ("2026-10-17T17:00:00Z", False),       # 01:00 in Taipei, before cutoff
    ("2026-10-18T15:00:00", True),         # naive, read as Taipei time
    ("", False),
    ("not a date", False),
    ("3pm", False),                        # no calendar date
    ("18:00", False),
    ("Oct 18 2026 15:00", False),          # not ISO-8601
])
def test_recency_window_in_target_timezone(admission, record_factory, publish_date, accepted):
    result = admission.evaluate(record_factory(publish_date=publish_date), RunState())

    assert result.accepted is accepted
    if not accepted:
        assert result.stage == "recency"


def test_near_duplicate_headline_rejected(admission, record_factory):
    state = RunState()
    first = record_factory(link=article_url("a1"), head_line="金馬獎入圍名單公布：影帝之爭白熱化")
    second = record_factory(link=article_url("a2"), head_line="金馬獎入圍名單公布－最佳新導演")

    assert admission.admit(first, state).accepted
    result = admission.admit(second, state)

    assert result.decision is Decision.REJECT
    assert result.stage == "near_duplicate"
    assert [record.link for record in state.accepted] == [article_url("a1")]


def test_short_headlines_differing_after_prefix_are_distinct(record_factory):
    stage = NearDuplicateStage(prefix_length=7)
    state = RunState(fingerprints={"金馬獎入圍名單"})

    assert stage.evaluate(record_factory(head_line="金馬獎入圍"), state).accepted


def test_sensitive_keyword_rejected(admission, record_factory):
    result = admission.evaluate(record_factory(content="男星涉嫌性侵遭起訴"), RunState())

    assert result.stage == "sensitive_keyword"


def test_sensitive_terms_case_handling(record_factory):
    stage = SensitiveKeywordStage([
        SensitiveTerm("AV"),
        SensitiveTerm("scandal", ignore_case=True),
        SensitiveTerm(r"\d+歲.*逮捕", regex=True),
    ])
    state = RunState()

    assert stage.evaluate(record_factory(content="新AV女優"), state).stage == "sensitive_keyword"
    assert stage.evaluate(record_factory(content="lava lamp"), state).accepted
    assert stage.evaluate(record_factory(content="A SCANDAL broke"), state).stage == "sensitive_keyword"
    assert stage.evaluate(record_factory(content="男子30歲今遭逮捕"), state).stage == "sensitive_keyword"


def test_quota_stops_run(record_factory, fixed_now):
    admission = AdmissionFilter(
        [HeadlinePresenceStage(), NearDuplicateStage(7), QuotaStage(2)],
        prefix_length=7,
    )
    state = RunState()

    assert admission.admit(record_factory(head_line="第一則新聞標題"), state).accepted
    assert admission.admit(record_factory(head_line="第二則新聞標題"), state).accepted
    result = admission.admit(record_factory(head_line="第三則新聞標題"), state)

    assert result.decision is Decision.STOP_RUN
    assert state.accepted_count == 2
    assert admission.quota_reached(state)


def test_rejected_candidate_does_not_hit_quota(record_factory):
    admission = AdmissionFilter([HeadlinePresenceStage(), QuotaStage(1)])
    state = RunState()
    admission.admit(record_factory(head_line="唯一一則新聞"), state)

    result = admission.admit(record_factory(head_line=""), state)

    assert result.decision is Decision.REJECT
    assert result.stage == "headline"


def test_stage_order(admission):
    assert [stage.name for stage in admission.stages] == [
        "provenance", "headline", "recency", "near_duplicate", "sensitive_keyword", "quota",
    ]


def test_custom_cutoff(record_factory, fixed_now):
    stage = RecencyStage("Asia/Taipei", time(9, 0), now=fixed_now)

    assert stage.evaluate(record_factory(publish_date="2026-10-18T10:00:00+08:00"), RunState()).accepted


def test_custom_brand_token(record_factory):
    stage = ProvenanceStage("ettoday")

    assert stage.evaluate(record_factory(news_provider="ETtoday新聞雲"), RunState()).stage == "provenance"
    assert stage.evaluate(record_factory(author_name="Yahoo"), RunState()).accepted
