import pytest

from zbplugins.nsfw import Picture, auto_judge, judge


def test_neutral_picture_is_ordinary():
    assert judge(Picture(neutral=0.9, porn=0.9)) == "普通哦"


def test_all_flags_on_drawing():
    p = Picture(drawings=0.5, hentai=0.5, porn=0.5, sexy=0.5, neutral=0.0)
    assert judge(p) == "二次元 hentai porn hso"


def test_exact_threshold_neutral_is_real_life():
    p = Picture(drawings=0.1, neutral=0.3)
    assert judge(p) == "三次元"


def test_low_neutral_counts_as_drawing_in_judge():
    p = Picture(drawings=0.0, neutral=0.1, sexy=0.8)
    assert judge(p).startswith("二次元")
    assert judge(p).endswith(" hso")


def test_auto_judge_skips_neutral():
    assert auto_judge(Picture(neutral=0.5, porn=0.9)) is None


def test_auto_judge_skips_without_flags():
    assert auto_judge(Picture(drawings=0.9, neutral=0.1)) is None


def test_auto_judge_uses_drawings_only():
    result = auto_judge(Picture(drawings=0.1, neutral=0.1, porn=0.8))
    assert result == "三次元 porn"


@pytest.mark.parametrize("field", ["hentai", "porn", "sexy"])
def test_auto_judge_reports_each_flag(field):
    p = Picture(drawings=0.9, neutral=0.0, **{field: 0.9})
    result = auto_judge(p)
    assert result is not None and result.startswith("二次元 ")
    assert result == judge(p)