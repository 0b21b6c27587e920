import asyncio
import json
import os
import random
import signal

import pytest
from websockets.protocol import State

from commons.exceptions import StreamError, UsageError
from mydataclass.stream_event import CLOSE_COMMAND
from streamer.corpus import EventCorpus
from streamer.models import StreamState, StreamStats
from streamer.stream_client import EventStreamClient, parse_interval_ms, run_stream

EVENTS = ["a storm rolls in", "the bridge collapsed", "a dragon is sighted"]


class FakeLogger:
    def __init__(self, on_warning=None):
        self.warnings = []
        self.errors = []
        self.on_warning = on_warning

    def log_info(self, message, exc_info=False):
        pass

    def log_debug(self, message, exc_info=False):
        pass

    def log_warning(self, message, exc_info=False):
        self.warnings.append(message)
        if self.on_warning:
            self.on_warning(message)

    def log_error(self, message, exc_info=True):
        self.errors.append(message)


class FakeWebSocket:
    """最小的连接替身：send 记录消息，async for 从队列取入站消息，None 表示服务端关闭。"""

    def __init__(self, inbound=(), on_send=None):
        self.state = State.OPEN
        self.sent = []
        self.closed = False
        self.on_send = on_send
        self._inbox = asyncio.Queue()
        for msg in inbound:
            self._inbox.put_nowait(msg)

    def events(self):
        return [m for m in self.sent if m.get("event_kind") == "state"]

    async def send(self, data):
        self.sent.append(json.loads(data))
        if self.on_send:
            self.on_send(self)

    async def close(self):
        self.closed = True
        self.state = State.CLOSED
        self._inbox.put_nowait(None)

    def server_close(self):
        self.state = State.CLOSED
        self._inbox.put_nowait(None)

    def __aiter__(self):
        return self

    async def __anext__(self):
        msg = await self._inbox.get()
        if msg is None:
            raise StopAsyncIteration
        return msg


class VirtualSleep:
    """替身 sleep：前 ticks 次立即返回；之后触发 on_exhausted 并挂起直到被取消。"""

    def __init__(self, ticks, on_exhausted=None):
        self.ticks = ticks
        self.on_exhausted = on_exhausted
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)
        if len(self.delays) > self.ticks:
            if self.on_exhausted:
                self.on_exhausted()
            await asyncio.Event().wait()
        await asyncio.sleep(0)


def make_connect(ws, calls):
    async def _connect(url, **kwargs):
        calls.append((url, kwargs))
        return ws
    return _connect


def make_client(ws, *, sleep, logger=None, interval_ms=3000, max_error_prints=5, calls=None):
    out = []
    client = EventStreamClient(
        "wss://api.test/stream/event/ws/sim-1/p-1",
        "distr-key",
        EventCorpus(EVENTS, rng=random.Random(3)),
        interval_ms=interval_ms,
        max_error_prints=max_error_prints,
        connect=make_connect(ws, calls if calls is not None else []),
        logger=logger or FakeLogger(),
        printer=out.append,
        sleep=sleep,
    )
    return client, out


async def test_sends_every_interval_until_cancelled():
    # 10 秒内、每 3000ms 一条：第 3、6、9 秒各发一条，随后用户取消
    stop_evt = asyncio.Event()
    ws = FakeWebSocket()
    sleep = VirtualSleep(ticks=10_000 // 3000, on_exhausted=stop_evt.set)
    calls = []
    client, out = make_client(ws, sleep=sleep, calls=calls)

    stats = await client.run(stop_evt)

    assert stats.sent == 3
    assert stats.errors == 0
    assert all(d == 3.0 for d in sleep.delays)
    assert all(m["event"] in EVENTS for m in ws.events())
    assert len(ws.events()) == 3
    # 取消：最后一条是 close 指令，并做了关闭握手
    assert ws.sent[-1] == CLOSE_COMMAND
    assert ws.closed
    assert client.state is StreamState.CLOSED
    # 握手带 Bearer 鉴权，不设超时
    url, kwargs = calls[0]
    assert url == "wss://api.test/stream/event/ws/sim-1/p-1"
    assert kwargs["additional_headers"] == {"authorization": "Bearer distr-key"}
    assert kwargs["open_timeout"] is None
    # 统计只打印一次
    stats_lines = [line for line in out if line.startswith("Stats:")]
    assert len(stats_lines) == 1
    assert stats_lines[0].startswith("Stats: sent=3 errors=0")


async def test_cancel_after_two_sends():
    stop_evt = asyncio.Event()
    ws = FakeWebSocket()
    client, out = make_client(ws, sleep=VirtualSleep(ticks=2, on_exhausted=stop_evt.set), interval_ms=500)

    stats = await client.run(stop_evt)

    assert stats.sent == 2
    assert ws.sent == ws.events() + [CLOSE_COMMAND]
    assert any(line.startswith("Stats: sent=2 errors=0") for line in out)


async def test_server_errors_counted_and_prints_capped():
    inbound = [json.dumps({"err": "rate limited", "status_code": 429})] * 7 + [
        "not json",
        json.dumps(["a", "list"]),
        json.dumps({"ok": True}),
        json.dumps({"err": ""}),
        None,  # 服务端关闭
    ]
    ws = FakeWebSocket(inbound)
    logger = FakeLogger()
    client, out = make_client(ws, sleep=VirtualSleep(ticks=0), logger=logger)

    stats = await client.run()

    assert stats.errors == 7
    assert stats.sent == 0
    assert len(logger.errors) == 5
    assert logger.errors[0] == "Server error: rate limited 429"
    assert client.state is StreamState.CLOSED
    # 服务端关闭不发送 close 指令
    assert CLOSE_COMMAND not in ws.sent
    assert any(line.startswith("Stats: sent=0 errors=7") for line in out)


async def test_server_close_mid_stream_stops_sending():
    def _on_send(ws):
        if len(ws.events()) == 2:
            ws.server_close()

    ws = FakeWebSocket(on_send=_on_send)
    client, out = make_client(ws, sleep=VirtualSleep(ticks=100))

    stats = await client.run()

    assert stats.sent == 2
    assert len(ws.sent) == 2
    assert not ws.closed
    assert client.state is StreamState.CLOSED
    assert len([line for line in out if line.startswith("Stats:")]) == 1


async def test_not_open_at_tick_skips_and_stops_sending():
    stop_evt = asyncio.Event()
    logger = FakeLogger(on_warning=lambda _: stop_evt.set())
    ws = FakeWebSocket()
    ws.state = State.CLOSING  # 连接已不可写
    sleep = VirtualSleep(ticks=100)
    client, _ = make_client(ws, sleep=sleep, logger=logger)

    stats = await client.run(stop_evt)

    assert stats.sent == 0
    assert ws.sent == []  # 连 close 指令也不发
    assert len(sleep.delays) == 1  # 发送循环在第一次 tick 后就结束了
    assert "connection not open, stop sending" in logger.warnings
    assert client.state is StreamState.CLOSED


async def test_connect_failure_raises_stream_error():
    async def _refuse(url, **kwargs):
        raise OSError("connection refused")

    logger = FakeLogger()
    client = EventStreamClient(
        "ws://localhost:1/stream/event/ws/s/p",
        "distr-key",
        EventCorpus(EVENTS),
        connect=_refuse,
        logger=logger,
        printer=lambda *_: None,
    )
    with pytest.raises(StreamError):
        await client.run()
    assert client.state is StreamState.CLOSED
    assert logger.errors and "connection refused" in logger.errors[0]

    # 客户端一次性使用，CLOSED 之后不能再 run
    with pytest.raises(RuntimeError):
        await client.run()


async def _never_connects(url, **kwargs):
    await asyncio.Event().wait()


def _hung_client(out, logger=None):
    return EventStreamClient(
        "wss://api.test/stream/event/ws/sim-1/p-1",
        "distr-key",
        EventCorpus(EVENTS),
        connect=_never_connects,
        logger=logger or FakeLogger(),
        printer=out.append,
    )


async def test_cancel_while_connecting_returns_stats():
    stop_evt = asyncio.Event()
    out = []
    client = _hung_client(out)
    asyncio.get_running_loop().call_later(0.05, stop_evt.set)

    stats = await asyncio.wait_for(client.run(stop_evt), 2.0)

    assert stats.sent == 0
    assert client.state is StreamState.CLOSED
    assert len([line for line in out if line.startswith("Stats:")]) == 1


async def test_sigint_during_hung_handshake_ends_session():
    out = []
    client = _hung_client(out)
    asyncio.get_running_loop().call_later(0.05, os.kill, os.getpid(), signal.SIGINT)

    stats = await asyncio.wait_for(run_stream(client), 2.0)

    assert stats.sent == 0
    assert client.state is StreamState.CLOSED
    assert any(line.startswith("Stats: sent=0") for line in out)


async def test_sigint_after_two_sends_closes_gracefully():
    ws = FakeWebSocket()
    loop = asyncio.get_running_loop()
    sleep = VirtualSleep(ticks=2, on_exhausted=lambda: loop.call_soon(os.kill, os.getpid(), signal.SIGINT))
    client, out = make_client(ws, sleep=sleep)

    stats = await asyncio.wait_for(run_stream(client), 2.0)

    assert stats.sent == 2
    assert ws.sent == ws.events() + [CLOSE_COMMAND]
    assert ws.closed
    assert client.state is StreamState.CLOSED
    assert any(line.startswith("Stats: sent=2 errors=0") for line in out)


async def test_run_stream_returns_stats_on_server_close():
    ws = FakeWebSocket([json.dumps({"err": "bad event"}), None])
    client, _ = make_client(ws, sleep=VirtualSleep(ticks=0))
    stats = await run_stream(client)
    assert stats.errors == 1


def test_on_message_classification():
    client, _ = make_client(None, sleep=VirtualSleep(ticks=0), max_error_prints=1)
    assert client.on_message('{"err": "boom", "status_code": 500}') is True
    assert client.on_message(b'{"err": "bytes boom"}') is True
    assert client.on_message("{broken") is False
    assert client.on_message('"just a string"') is False
    assert client.on_message('{"event_id": "e1"}') is False
    assert client.stats.errors == 2
    assert client.logger.errors == ["Server error: boom 500"]


def test_illegal_transition():
    client, _ = make_client(None, sleep=VirtualSleep(ticks=0))
    with pytest.raises(RuntimeError):
        client._transition(StreamState.OPEN)


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        EventStreamClient("ws://x", "k", EventCorpus(EVENTS), interval_ms=0)


@pytest.mark.parametrize("raw,expected", [
    (None, 3000),
    ("", 3000),
    ("  ", 3000),
    ("2500", 2500),
    ("3000", 3000),
])
def test_parse_interval_ms(raw, expected):
    logger = FakeLogger()
    assert parse_interval_ms(raw, logger=logger) == expected
    assert logger.warnings == []


def test_parse_interval_ms_fast_rate_only_warns():
    logger = FakeLogger()
    assert parse_interval_ms("1500", logger=logger) == 1500
    assert len(logger.warnings) == 1
    assert "1500ms" in logger.warnings[0]


@pytest.mark.parametrize("raw", ["abc", "0", "-10", "2.5", "1_000", "1e3"])
def test_parse_interval_ms_rejects(raw):
    with pytest.raises(UsageError) as ei:
        parse_interval_ms(raw, logger=FakeLogger())
    assert "interval_ms must be a positive integer" in str(ei.value)


def test_stats_report():
    now = {"t": 100.0}
    stats = StreamStats(clock=lambda: now["t"])
    stats.start()
    now["t"] = 110.0
    stats.sent = 3
    stats.errors = 1
    assert stats.elapsed == 10.0
    assert stats.report() == "Stats: sent=3 errors=1 elapsed=10.0s rate=0.3/s"


def test_stats_rate_zero_without_sends():
    stats = StreamStats(clock=lambda: 5.0)
    stats.start()
    assert stats.rate == 0.0
