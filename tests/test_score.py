from datetime import datetime

import pytest

from zbplugins.score import (
    RANK_ARRAY,
    SCORE_MAX,
    ScoreRecord,
    ScoreStore,
    get_rank,
    hour_greeting,
    next_rank_score,
)


@pytest.fixture
def store(tmp_path):
    s = ScoreStore(tmp_path / "score.db")
    yield s
    s.close()


def test_get_score_creates_zero(store):
    assert store.get_score(42) == ScoreRecord(42, 0)
    assert store.top_scores(10) == [ScoreRecord(42, 0)]


def test_set_score_round_trip(store):
    store.set_score(7, 15)
    assert store.get_score(7).score == 15
    store.set_score(7, 30)
    assert store.get_score(7).score == 30


def test_top_scores_ordered_and_limited(store):
    for uid, score in [(1, 5), (2, 50), (3, 20), (4, 1)]:
        store.set_score(uid, score)
    top = store.top_scores(3)
    assert [r.uid for r in top] == [2, 3, 1]
    scores = [r.score for r in top]
    assert scores == sorted(scores, reverse=True)


def test_sign_in_created_and_updated(store):
    before = datetime.now()
    record = store.get_sign_in(9)
    after = datetime.now()
    assert record.count == 0
    assert before <= record.updated_at <= after
    store.set_sign_in_count(9, record.count + 1)
    again = store.get_sign_in(9)
    assert again.count == 1
    assert again.updated_at >= record.updated_at


def test_data_persists(tmp_path):
    path = tmp_path / "p.db"
    with ScoreStore(path) as s:
        s.set_score(3, 99)
        s.set_sign_in_count(3, 2)
    with ScoreStore(path) as s:
        assert s.get_score(3).score == 99
        assert s.get_sign_in(3).count == 2


@pytest.mark.parametrize("rank, threshold", list(enumerate(RANK_ARRAY)))
def test_rank_at_thresholds(rank, threshold):
    assert get_rank(threshold) == rank


def test_rank_between_and_outside():
    assert get_rank(RANK_ARRAY[3] + 1) == 3
    assert get_rank(RANK_ARRAY[1] - 1) == 0
    assert get_rank(-1) == -1
    assert get_rank(SCORE_MAX + 1) == -1


@pytest.mark.parametrize(
    "hour, word",
    [
        (6, "早上好"),
        (11, "早上好"),
        (12, "中午好"),
        (14, "下午好"),
        (18, "下午好"),
        (19, "晚上好"),
        (23, "晚上好"),
        (0, "凌晨好"),
        (5, "凌晨好"),
        (24, ""),
    ],
)
def test_hour_greeting(hour, word):
    assert hour_greeting(hour) == word


def test_next_rank_score():
    assert next_rank_score(0) == RANK_ARRAY[1]
    assert next_rank_score(9) == RANK_ARRAY[10]
    assert next_rank_score(10) == SCORE_MAX
    for rank in range(10):
        assert next_rank_score(rank) > RANK_ARRAY[rank]