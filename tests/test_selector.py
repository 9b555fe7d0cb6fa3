"""Tests for reviewer selection."""
import random

import pytest

from prreviewer.core.assignment.selector import MAX_REVIEWERS, ReviewerSelector


def test_candidate_pool_applies_exclusions_and_dedupes():
    pool = ReviewerSelector.candidate_pool(["a", "b", "c", "b", "d"], exclude=["c"])
    assert pool == ["a", "b", "d"]


def test_select_reviewers_excludes_author():
    selector = ReviewerSelector(random.Random(0))
    for _ in range(50):
        reviewers = selector.select_reviewers(["a", "b", "c", "d"], author_id="a")
        assert "a" not in reviewers
        assert len(reviewers) == MAX_REVIEWERS
        assert len(set(reviewers)) == len(reviewers)


def test_select_reviewers_respects_extra_exclusions():
    selector = ReviewerSelector(random.Random(0))
    reviewers = selector.select_reviewers(["a", "b", "c", "d"], author_id="a", exclude=["b", "c"])
    assert reviewers == ["d"]


def test_select_reviewers_returns_whole_pool_when_small():
    selector = ReviewerSelector(random.Random(0))
    assert selector.select_reviewers(["a", "b"], author_id="a") == ["b"]


def test_select_reviewers_empty_pool_is_not_an_error():
    selector = ReviewerSelector(random.Random(0))
    assert selector.select_reviewers(["a"], author_id="a") == []
    assert selector.select_reviewers([], author_id="a") == []


def test_select_reviewers_uses_injected_random_source(first_pick_selector):
    reviewers = first_pick_selector.select_reviewers(["a", "b", "c", "d"], author_id="b")

    assert reviewers == ["a", "c"]
    assert first_pick_selector.rng.shuffled == [["a", "c", "d"]]


def test_select_reviewers_honours_custom_cap():
    selector = ReviewerSelector(random.Random(3), max_reviewers=3)
    reviewers = selector.select_reviewers(["a", "b", "c", "d", "e"], author_id="a")
    assert len(reviewers) == 3
    assert len(set(reviewers)) == 3


def test_same_seed_gives_same_selection():
    first = ReviewerSelector(random.Random(99)).select_reviewers(list("abcdefgh"), author_id="a")
    second = ReviewerSelector(random.Random(99)).select_reviewers(list("abcdefgh"), author_id="a")
    assert first == second


def test_every_candidate_can_be_selected():
    selector = ReviewerSelector(random.Random(7))
    seen = set()
    for _ in range(200):
        seen.update(selector.select_reviewers(["a", "b", "c", "d"], author_id="a"))
    assert seen == {"b", "c", "d"}


def test_select_replacement_picks_from_pool(first_pick_selector):
    new_id = first_pick_selector.select_replacement(["a", "b", "c", "d"], exclude=["a", "b", "c"])
    assert new_id == "d"


def test_select_replacement_returns_none_for_empty_pool():
    selector = ReviewerSelector(random.Random(0))
    assert selector.select_replacement(["a", "b"], exclude=["a", "b"]) is None


def test_max_reviewers_must_be_positive():
    with pytest.raises(ValueError):
        ReviewerSelector(max_reviewers=0)
