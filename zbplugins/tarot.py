"""Tarot cards: loading the deck, drawing cards and laying out spreads."""

from __future__ import annotations

import json
import random
from dataclasses import dataclass, field
from typing import Any

BED = "https://gitcode.net/shudorcl/zbp-tarot/-/raw/master/"
REASONS = ("您抽到的是~\n", "锵锵锵，塔罗牌的预言是~\n", "诶，让我看看您抽到了~\n")
POSITIONS = ("『正位』", "『逆位』")
REVERSE_DIRS = ("", "Reverse/")
MAX_DRAW = 20
MAJOR_COUNT = 22
MINOR_COUNT = 55


@dataclass(frozen=True)
class Card:
    """One tarot card with its upright and reversed meanings."""

    name: str
    description: str = ""
    reverse_description: str = ""
    img_url: str = ""


@dataclass(frozen=True)
class Formation:
    """A spread: how many cards it takes and what each position stands for."""

    cards_num: int
    is_cut: bool = False
    represent: tuple[tuple[str, ...], ...] = ()


@dataclass(frozen=True)
class Draw:
    """A card drawn upright or reversed, with the phrase that announces it."""

    card: Card
    reversed: bool
    reason: str

    @property
    def position(self) -> str:
        return POSITIONS[int(self.reversed)]

    @property
    def description(self) -> str:
        return self.card.reverse_description if self.reversed else self.card.description

    @property
    def image_url(self) -> str:
        return BED + REVERSE_DIRS[int(self.reversed)] + self.card.img_url

    @property
    def image_name(self) -> str:
        """Name under which the card picture is cached."""
        return ("Reverse" + self.card.name) if self.reversed else self.card.name

    def headline(self) -> str:
        """The announcement shown above the card picture."""
        return f"{self.reason}{self.position}的『{self.card.name}』\n"

    def text(self) -> str:
        """The full text for a single drawn card."""
        return f"{self.reason}{self.position}的『{self.card.name}』\n其释义为: {self.description}"


@dataclass(frozen=True)
class Spread:
    """The cards laid out for a formation."""

    name: str
    formation: Formation
    draws: list[Draw] = field(default_factory=list)

    def text(self, nickname: str) -> str:
        """The reading of the spread for a member."""
        parts = [f"{nickname}---{self.name}\n"]
        represent = self.formation.represent[0]
        for i, draw in enumerate(self.draws):
            parts.append(
                f"{represent[i]}:{draw.position}的『{draw.card.name}』\n其释义为: \n"
                f"{draw.description}\n"
            )
        return "".join(parts)


def _card_range(kind: str) -> tuple[int, int]:
    if "小" in kind:
        return MAJOR_COUNT, MINOR_COUNT
    if kind == "混合":
        return 0, MAJOR_COUNT + MINOR_COUNT
    return 0, MAJOR_COUNT


def _parse(data: Any) -> Any:
    if isinstance(data, (bytes, bytearray, str)):
        return json.loads(data)
    return data


class Deck:
    """The loaded cards and formations."""

    def __init__(self, cards: dict[str, Card], formations: dict[str, Formation]):
        self.cards = cards
        self.formations = formations
        self.by_name = {card.name: card for card in cards.values()}
        self.major_arcana = [self._card(i).name for i in range(MAJOR_COUNT)]

    @classmethod
    def load(cls, cards_json: Any, formations_json: Any) -> Deck:
        """Build a deck from the card and formation JSON documents."""
        cards = {}
        for key, entry in _parse(cards_json).items():
            info = entry.get("info") or {}
            cards[key] = Card(
                name=entry.get("name", ""),
                description=info.get("description", ""),
                reverse_description=info.get("reverseDescription", ""),
                img_url=info.get("imgUrl", ""),
            )
        formations = {}
        for name, entry in _parse(formations_json).items():
            formations[name] = Formation(
                cards_num=int(entry.get("cards_num", 0)),
                is_cut=bool(entry.get("is_cut", False)),
                represent=tuple(tuple(row) for row in entry.get("represent") or ()),
            )
        return cls(cards, formations)

    def _card(self, index: int) -> Card:
        return self.cards.get(str(index), Card(""))

    def _distinct(self, count: int, kind: str, rng: random.Random) -> list[Draw]:
        start, length = _card_range(kind)
        seen: set[int] = set()
        draws = []
        for _ in range(count):
            j = rng.randrange(length)
            while j in seen:
                j = rng.randrange(length)
            seen.add(j)
            reversed_ = rng.randrange(2) == 1
            reason = REASONS[rng.randrange(len(REASONS))]
            draws.append(Draw(self._card(j + start), reversed_, reason))
        return draws

    def draw(self, n: int, kind: str, rng: random.Random | None = None) -> list[Draw]:
        """Draw n distinct cards of a kind (major, minor); raises ValueError on a bad n."""
        rng = rng if rng is not None else random.Random()
        if n <= 0:
            raise ValueError("张数必须为正")
        if n > MAX_DRAW:
            raise ValueError("抽取张数过多")
        return self._distinct(n, kind, rng)

    def spread(self, name: str, kind: str, rng: random.Random | None = None) -> Spread:
        """Lay out a named formation; raises LookupError for an unknown formation."""
        rng = rng if rng is not None else random.Random()
        formation = self.formations.get(name)
        if formation is None:
            raise LookupError(
                f"没有找到{name}噢~\n现有牌阵列表: \n" + "\n".join(self.formations)
            )
        return Spread(name, formation, self._distinct(formation.cards_num, kind, rng))

    def describe(self, name: str) -> str:
        """Return both meanings of a named card; raises LookupError if unknown."""
        card = self.by_name.get(name)
        if card is None:
            raise LookupError(f"没有找到{name}噢~")
        return (
            f"{name}的含义是~\n『正位』:{card.description}\n"
            f"『逆位』:{card.reverse_description}"
        )

    def card_list_text(self) -> str:
        """The list of card names shown when a card is not found."""
        names = self.major_arcana
        return (
            "塔罗牌列表\n大阿尔卡纳:\n"
            + " ".join(names[:7]) + "\n"
            + " ".join(names[7:14]) + "\n"
            + " ".join(names[14:22])
            + "\n小阿尔卡纳:\n[圣杯|星币|宝剑|权杖] [0-10|侍从|骑士|王后|国王]"
        )