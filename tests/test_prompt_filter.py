from datetime import datetime, timedelta, timezone

from data.prompt_filter import filter_prompts, matches_search
from models.prompt import Prompt

BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _p(title, minutes, content="", tags=(), category_id=None, fav=False):
    stamp = BASE + timedelta(minutes=minutes)
    return Prompt(title=title, content=content, tags=list(tags), category_id=category_id,
                  is_favorite=fav, created_at=stamp, updated_at=stamp)


def _sample():
    return [
        _p("Alpha", 1, content="Summarize the text", tags=["urgent"], category_id="c1"),
        _p("Beta", 3, content="Review code", tags=["dev"], category_id="c2", fav=True),
        _p("Gamma", 2, content="alpha release notes", category_id="c1", fav=True),
    ]


def test_no_filters_sorts_most_recent_first():
    out = filter_prompts(_sample())
    assert [p.title for p in out] == ["Beta", "Gamma", "Alpha"]


def test_search_is_case_insensitive_across_title_content_and_tags():
    prompts = _sample()
    assert [p.title for p in filter_prompts(prompts, "ALPHA")] == ["Gamma", "Alpha"]
    assert [p.title for p in filter_prompts(prompts, "urg")] == ["Alpha"]
    assert [p.title for p in filter_prompts(prompts, "review")] == ["Beta"]
    assert filter_prompts(prompts, "nothing-matches") == []


def test_category_and_favorites_combine_with_and():
    prompts = _sample()
    assert [p.title for p in filter_prompts(prompts, category_id="c1")] == ["Gamma", "Alpha"]
    assert [p.title for p in filter_prompts(prompts, favorites_only=True)] == ["Beta", "Gamma"]
    assert [p.title for p in filter_prompts(prompts, category_id="c1", favorites_only=True)] == ["Gamma"]
    assert [p.title for p in filter_prompts(prompts, "alpha", "c1", True)] == ["Gamma"]


def test_equal_timestamps_keep_insertion_order():
    a, b, c = _p("A", 5), _p("B", 5), _p("C", 5)
    assert [p.title for p in filter_prompts([a, b, c])] == ["A", "B", "C"]
    assert [p.title for p in filter_prompts([c, a, b])] == ["C", "A", "B"]


def test_filter_is_idempotent():
    prompts = _sample()
    for args in [("",), ("a",), ("", "c1"), ("", None, True), ("e", "c2", True)]:
        once = filter_prompts(prompts, *args)
        assert filter_prompts(once, *args) == once


def test_filter_does_not_mutate_input():
    prompts = _sample()
    before = list(prompts)
    filter_prompts(prompts, "alpha", "c1", True)
    assert prompts == before


def test_matches_search_on_tag_only():
    p = _p("Title", 0, content="body", tags=["Research", "notes"])
    assert matches_search(p, "search")
    assert not matches_search(p, "missing")
