import json
import random

import pytest

from zbplugins.reborn import GENDERS, Reborn, load_rates


class FixedRng:
    def __init__(self, bits=0, pick="low"):
        self.bits = bits
        self.pick = pick

    def randint(self, a, b):
        return a if self.pick == "low" else b

    def getrandbits(self, k):
        return self.bits


def test_load_rates(tmp_path):
    path = tmp_path / "rate.json"
    path.write_text(json.dumps([{"name": "A", "weight": 0.25}, {"name": "B", "weight": 0.75}]), encoding="utf-8")
    assert load_rates(path) == [("A", 0.25), ("B", 0.75)]


def test_single_country():
    reborn = Reborn([("Only", 1.0)], random.Random(1))
    assert {reborn.country() for _ in range(20)} == {"Only"}


def test_weighted_bounds():
    rates = [("A", 0.5), ("B", 0.5)]
    assert Reborn(rates, FixedRng(pick="low")).country() == "A"
    assert Reborn(rates, FixedRng(pick="high")).country() == "B"


def test_gender_in_set():
    reborn = Reborn([("X", 1.0)], random.Random(7))
    names = {name for name, _ in GENDERS}
    assert all(reborn.gender() in names for _ in range(50))


def test_zero_weights_rejected():
    with pytest.raises(ValueError):
        Reborn([("A", 0.0)])


def test_roll_success():
    reborn = Reborn([("Land", 1.0)], FixedRng(bits=(1 << 27) + 1))
    assert reborn.roll() == "投胎成功！\n您出生在 Land, 是 男孩子。"


def test_roll_failure():
    reborn = Reborn([("Land", 1.0)], FixedRng(bits=1 << 27))
    assert reborn.roll() == "投胎失败！\n您没能活到出生，祝您下次好运！"