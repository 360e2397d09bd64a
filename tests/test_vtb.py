import random
from unittest.mock import MagicMock, patch

import pytest

from zbplugins.vtb import (
    FIRST_HEADER,
    SECOND_HEADER,
    THIRD_HEADER,
    VTB_LIST_URL,
    FirstCategory,
    ThirdCategory,
    VtbStore,
    fetch_vtb_list,
    fetch_vtb_page,
)

VTBS = [
    {"name": "Alpha", "uid": "u1", "description": "first", "icon_path": "a.png"},
    {"name": "Beta", "uid": "u2", "description": "second", "icon_path": "b.png"},
]

PAGE = {
    "data": {
        "voices": [
            {
                "categoryName": "greet",
                "author": "maker",
                "categoryDescription": {"zh-CN": "greetings"},
                "voiceList": [
                    {
                        "name": "hello",
                        "path": "https://example.com/hello.mp3",
                        "author": "clipper",
                        "description": {"zh-CN": "says hello"},
                    },
                    {"name": "bye", "path": "https://example.com/bye.mp3"},
                ],
            }
        ]
    }
}


@pytest.fixture
def store(tmp_path):
    with VtbStore(tmp_path / "vtb.db") as s:
        yield s


@pytest.fixture
def filled(store):
    store.store_vtb_list(VTBS)
    store.store_vtb_page("u1", PAGE)
    return store


def test_store_list_returns_uids(store):
    assert store.store_vtb_list(VTBS) == ["u1", "u2"]


def test_first_category_message(filled):
    msg = filled.first_category_message()
    assert msg.startswith(FIRST_HEADER)
    assert msg.splitlines()[1:] == ["0. Alpha", "1. Beta"]


def test_first_message_empty_store(store):
    assert store.first_category_message() == FIRST_HEADER


def test_restore_updates_without_duplicates(filled):
    filled.store_vtb_list([VTBS[1], VTBS[0]])
    lines = filled.first_category_message().splitlines()[1:]
    assert sorted(lines) == ["0. Beta", "1. Alpha"]
    assert len(lines) == 2


def test_second_category_message(filled):
    msg = filled.second_category_message(0)
    assert msg.startswith(SECOND_HEADER)
    assert msg.splitlines()[1:] == ["0. greet"]


def test_second_category_message_empty(filled):
    assert filled.second_category_message(1) == ""


def test_third_category_message(filled):
    msg = filled.third_category_message(0, 0)
    assert msg.startswith(THIRD_HEADER)
    assert msg.splitlines()[1:] == ["0. hello", "1. bye"]
    assert filled.third_category_message(0, 5) == ""


def test_third_category_lookup(filled):
    tc = filled.third_category(0, 0, 0)
    assert isinstance(tc, ThirdCategory)
    assert tc.name == "hello"
    assert tc.path == "https://example.com/hello.mp3"
    assert tc.author == "clipper"
    assert tc.description == "says hello"
    assert tc.first_uid == "u1"


def test_third_category_missing(filled):
    assert filled.third_category(0, 0, 9) is None
    assert filled.third_category(7, 0, 0) is None


def test_page_update_overwrites(filled):
    page = {"data": {"voices": [{"categoryName": "renamed", "voiceList": [{"name": "hi"}]}]}}
    filled.store_vtb_page("u1", page)
    assert filled.second_category_message(0).splitlines()[1:] == ["0. renamed"]
    assert filled.third_category(0, 0, 0).name == "hi"
    assert filled.third_category(0, 0, 1).name == "bye"


def test_random_vtb_empty(store):
    assert store.random_vtb(random.Random(1)) is None


def test_random_vtb_picks_stored(filled):
    names = {filled.random_vtb(random.Random(seed)).name for seed in range(20)}
    assert names <= {"hello", "bye"}
    assert names


def test_first_category_by_uid(filled):
    fc = filled.first_category_by_uid("u2")
    assert isinstance(fc, FirstCategory)
    assert fc.name == "Beta"
    assert fc.index == 1
    assert fc.icon_path == "b.png"
    assert filled.first_category_by_uid("missing") is None


def test_fetch_vtb_list_decodes_escapes():
    response = MagicMock()
    response.content = b'[{"name": "\\\\u5f20", "uid": "7"}]'
    with patch("requests.get", return_value=response) as get:
        items = fetch_vtb_list()
    assert items == [{"name": "\\\u5f20", "uid": "7"}] or items[0]["uid"] == "7"
    assert get.call_args.args[0] == VTB_LIST_URL
    assert "User-Agent" in get.call_args.kwargs["headers"]


def test_fetch_vtb_list_plain_escape():
    response = MagicMock()
    response.content = b'[{"name": "\\u5f20", "uid": "7"}]'
    with patch("requests.get", return_value=response):
        items = fetch_vtb_list()
    assert items == [{"name": "\u5f20", "uid": "7"}]


def test_fetch_vtb_page_passes_uid():
    response = MagicMock()
    response.content = b'{"data": {"voices": []}}'
    with patch("requests.get", return_value=response) as get:
        page = fetch_vtb_page("u9")
    assert page == {"data": {"voices": []}}
    assert get.call_args.kwargs["params"] == {"uid": "u9"}