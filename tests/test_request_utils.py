import pytest

from tools.request_utils import _clean_url, build_url, http_to_ws, stream_ws_url


@pytest.mark.parametrize("url,expected", [
    ("https://n10s.net/", "https://n10s.net"),
    ("https://n10s.net//api///v1/", "https://n10s.net/api/v1"),
    ("  http://localhost:8080  ", "http://localhost:8080"),
])
def test_clean_url(url, expected):
    assert _clean_url(url) == expected


@pytest.mark.parametrize("url,expected", [
    ("https://n10s.net", "wss://n10s.net"),
    ("http://localhost:8080", "ws://localhost:8080"),
    ("wss://already.ws", "wss://already.ws"),
])
def test_http_to_ws(url, expected):
    assert http_to_ws(url) == expected


def test_build_url_quotes_segments_and_query():
    url = build_url("https://n10s.net/", "user", "player", "p 1", query={"sim_id": "s/1"})
    assert url == "https://n10s.net/user/player/p%201?sim_id=s%2F1"


def test_build_url_drops_none_query():
    assert build_url("https://n10s.net", "simulation", query={"sim_id": None}) == "https://n10s.net/simulation"


def test_stream_ws_url():
    assert stream_ws_url("https://n10s.net/", "sim-1", "player-1") == "wss://n10s.net/stream/event/ws/sim-1/player-1"
    assert stream_ws_url("http://localhost:3000", "s", "p") == "ws://localhost:3000/stream/event/ws/s/p"
