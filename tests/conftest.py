import json

import pytest
import requests

from commons.base_logger import BaseLogger


@pytest.fixture(scope="session", autouse=True)
def _bind_loggers():
    # 先在会话级把各 logger 的 handler 建好，避免 handler 绑定到某个用例的 capsys 流上
    for name in ("BaseApiClient", "NpcClient", "PlayerClient", "SimulationClient", "EventClient", "EventStreamClient", "cli"):
        BaseLogger(name=name)


@pytest.fixture
def api_env(monkeypatch):
    monkeypatch.setenv("BASE_URL", "https://api.test/")
    monkeypatch.setenv("API_KEY", "api-key")
    monkeypatch.setenv("DISTR_KEY", "distr-key")
    monkeypatch.delenv("PRODUCT", raising=False)


def make_response(status=200, body=None, *, text=None, reason="OK", headers=None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason
    resp.encoding = "utf-8"
    if text is None:
        text = "" if body is None else json.dumps(body)
    resp._content = text.encode("utf-8")
    if headers:
        resp.headers.update(headers)
    return resp


class FakeHttp:
    """替身 Session.request：记录每次调用，按队列返回响应（队列空时返回 200 {}）。"""

    def __init__(self):
        self.calls = []
        self.responses = []

    def queue(self, *args, **kwargs):
        self.responses.append(make_response(*args, **kwargs))
        return self

    def raise_next(self, exc: Exception):
        self.responses.append(exc)
        return self

    def __call__(self, method, url, **kwargs):
        data = kwargs.get("data")
        self.calls.append({
            "method": method,
            "url": url,
            "headers": kwargs.get("headers") or {},
            "json": json.loads(data) if data else None,
            "timeout": kwargs.get("timeout"),
        })
        nxt = self.responses.pop(0) if self.responses else make_response(200, {})
        if isinstance(nxt, Exception):
            raise nxt
        return nxt

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def fake_http(monkeypatch):
    fake = FakeHttp()
    monkeypatch.setattr(requests.Session, "request", lambda self, method, url, **kw: fake(method, url, **kw))
    return fake
