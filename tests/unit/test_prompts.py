"""
Testes unitários dos templates de prompt.
"""

import json

from app.analyzers.prompts import build_chunk_prompt, build_premium_prompt, format_comment_block
from app.models.schemas_analyze import REPORT_FIELDS
from app.models.schemas_common import Aggregate


def test_comments_numbered_from_one():
    assert format_comment_block(["first", "second", "third"]) == "1. first\n2. second\n3. third"


def test_chunk_prompt_schema_and_comments():
    prompt = build_chunk_prompt(["Love it", "Too long"])

    assert "Analyze these YouTube comments and return STRICT JSON" in prompt
    for field in ("pos", "neg", "neu", "praise", "pain", "themes"):
        assert f'"{field}"' in prompt
    assert prompt.rstrip().endswith("COMMENTS:\n1. Love it\n2. Too long")
    assert '{\n "pos": number,' in prompt


def test_chunk_prompt_is_deterministic():
    chunk = ["a", "b"]

    assert build_chunk_prompt(chunk) == build_chunk_prompt(list(chunk))


def test_chunk_prompt_keeps_braces_in_comments():
    prompt = build_chunk_prompt(["code: {x} and {{y}}"])

    assert "1. code: {x} and {{y}}" in prompt


def test_premium_prompt_embeds_aggregate_verbatim():
    aggregate = Aggregate(
        pos_avg=50.0, neg_avg=25.0, neu_avg=25.0,
        praise=["editing"], pain=["audio"], themes=["{tutorials}"],
    )

    prompt = build_premium_prompt(aggregate)

    assert prompt.rstrip().endswith("### COMMENTS:\n" + aggregate.to_prompt_json())
    embedded = json.loads(prompt.rstrip().split("### COMMENTS:\n", 1)[1])
    assert embedded["posAvg"] == 50.0
    assert embedded["themes"] == ["{tutorials}"]


def test_premium_prompt_lists_every_report_field():
    prompt = build_premium_prompt(Aggregate(pos_avg=0, neg_avg=0, neu_avg=0))

    assert "You are a YouTube audience intelligence engine." in prompt
    assert "Do not use markdown or backticks." in prompt
    for field in REPORT_FIELDS:
        assert f'"{field}"' in prompt


def test_premium_prompt_keeps_length_ranges():
    prompt = build_premium_prompt(Aggregate(pos_avg=0, neg_avg=0, neu_avg=0))

    assert "- sentimentSummary_premium (5–7 sentences)" in prompt
    assert "- topPraise_premium (6–10 items)" in prompt
    assert "- engagementPatterns (3–6 short items)" in prompt
    assert "5-7" not in prompt
