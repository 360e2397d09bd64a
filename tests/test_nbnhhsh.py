from unittest import mock

from zbplugins.nbnhhsh import GUESS_URL, guess, parse_guess


def test_parse_trans():
    body = '[{"name":"yyds","trans":["永远的神","永远单身"]}]'
    assert parse_guess(body) == ["永远的神", "永远单身"]


def test_parse_inputting_fallback():
    body = b'[{"name":"abc","inputting":["alpha"]}]'
    assert parse_guess(body) == ["alpha"]


def test_parse_empty_trans_preferred():
    body = '[{"name":"x","trans":[],"inputting":["y"]}]'
    assert parse_guess(body) == []


def test_parse_invalid():
    assert parse_guess("not json") == []
    assert parse_guess("[]") == []


def test_guess_posts_form():
    response = mock.Mock()
    response.content = b'[{"name":"nb","trans":["net bar"]}]'
    with mock.patch("zbplugins.nbnhhsh.requests.post", return_value=response) as post:
        assert guess("nb") == ["net bar"]
    args, kwargs = post.call_args
    assert args[0] == GUESS_URL
    assert kwargs["data"] == {"text": "nb"}