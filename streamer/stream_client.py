#     事件流客户端 EventStreamClient
from __future__ import annotations

import asyncio
import contextlib
import json
import signal
from typing import Any, Awaitable, Callable, Optional

from websockets.asyncio.client import connect as ws_connect
from websockets.exceptions import ConnectionClosed, InvalidHandshake, InvalidURI
from websockets.protocol import State

from commons.base_logger import BaseLogger
from commons.exceptions import StreamError, UsageError
from commons.normalizers import to_positive_int_or_none
from mydataclass.stream_event import CLOSE_COMMAND, StateEventMessage
from streamer.corpus import EventCorpus
from streamer.models import TRANSITIONS, StreamState, StreamStats
from streamer.setting import DEFAULT_INTERVAL_MS, MAX_ERROR_PRINTS, RATE_WARN_INTERVAL_MS

# 连接工厂签名：与 websockets.asyncio.client.connect 一致，await 后得到连接对象
Connector = Callable[..., Awaitable[Any]]


def parse_interval_ms(
    raw: Optional[str],
    *,
    default: int = DEFAULT_INTERVAL_MS,
    warn_below: int = RATE_WARN_INTERVAL_MS,
    logger: Optional[BaseLogger] = None,
) -> int:
    """
    解析命令行的 interval_ms：
      - 未传 / 空串 -> default
      - 非整数或 < 1 -> UsageError
      - < warn_below -> 只告警（服务端限流另有规则，这里不拦截）
    """
    text = (raw or "").strip()
    if not text:
        return default
    interval_ms = to_positive_int_or_none(text)
    if interval_ms is None:
        raise UsageError("interval_ms must be a positive integer")
    if interval_ms < warn_below:
        (logger or BaseLogger(name="EventStreamClient")).log_warning(
            f"interval {interval_ms}ms is below {warn_below}ms; "
            f"the server may reject events with 429 at high rates"
        )
    return interval_ms


class EventStreamClient:
    """
    WebSocket 事件流客户端：
      - 建立一条连接（Bearer 鉴权头在握手时带上）
      - 连接成功后按固定间隔从语料里随机取一条事件发送：{"event_kind": "state", "event": ...}
      - 每条入站消息检查 err 字段，计数；只打印前 max_error_prints 条
      - 发送时连接不是 OPEN：跳过并停止发送循环（不重连）
      - 连接关闭/出错：停止发送，输出统计
      - 用户取消：停止发送，输出统计，发送 {"cmd": "close"}，做一次关闭握手

    计数器只在同一个事件循环里被发送任务和接收循环修改，不需要加锁。
    """

    def __init__(
        self,
        url: str,
        auth_key: str,
        corpus: EventCorpus,
        *,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        max_error_prints: int = MAX_ERROR_PRINTS,
        connect: Optional[Connector] = None,
        stats: Optional[StreamStats] = None,
        logger: Optional[BaseLogger] = None,
        printer: Callable[[str], None] = print,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ):
        if interval_ms < 1:
            raise ValueError("interval_ms must be >= 1")
        self.url = url
        self.auth_key = auth_key
        self.corpus = corpus
        self.interval_ms = interval_ms
        self.max_error_prints = max_error_prints
        self.stats = stats or StreamStats()
        self.logger = logger or BaseLogger(name="EventStreamClient")
        self.state: Optional[StreamState] = None

        self._connect = connect or ws_connect
        self._print = printer
        self._sleep = sleep or asyncio.sleep
        self._ws: Any = None
        self._sender: Optional[asyncio.Task] = None
        self._reported = False

    # === 状态机 ===

    def _transition(self, new_state: StreamState) -> None:
        if new_state not in TRANSITIONS[self.state]:
            raise RuntimeError(f"illegal stream transition {self.state} -> {new_state}")
        self.logger.log_debug(f"state {self.state} -> {new_state}")
        self.state = new_state

    def is_open(self) -> bool:
        return self._ws is not None and getattr(self._ws, "state", None) is State.OPEN

    # === 对外接口 ===

    async def run(self, stop_evt: Optional[asyncio.Event] = None) -> StreamStats:
        """
        连接并持续发送，直到连接关闭或 stop_evt 被置位（用户取消）。
        连接建立失败抛 StreamError；握手期间取消则直接 CLOSED 并返回统计。
        """
        self._transition(StreamState.CONNECTING)
        self.stats.start()
        self._print(f"Connecting to {self.url}")

        stop_task = None
        if stop_evt is not None:
            stop_task = asyncio.create_task(stop_evt.wait(), name="event-stream-stop")
        recv_task = None

        try:
            ws = await self._open(stop_task)
            if ws is None:
                self._transition(StreamState.CLOSED)
                self.report()
                return self.stats

            self._ws = ws
            self.on_open()

            recv_task = asyncio.create_task(self._recv_loop(), name="event-stream-recv")
            waiters = {recv_task}
            if stop_task is not None:
                waiters.add(stop_task)
            done, _ = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
            if recv_task in done:
                self.on_close()
            else:
                await self.cancel()
        finally:
            for t in (recv_task, stop_task):
                if t is not None and not t.done():
                    t.cancel()
                    with contextlib.suppress(asyncio.CancelledError):
                        await t
            self._stop_sending()

        return self.stats

    async def cancel(self) -> None:
        """用户取消：停发 -> 打印统计 -> 发送 close 指令 -> 关闭握手。在途发送不等待。"""
        self._stop_sending()
        self.report()
        if self.state is not StreamState.OPEN:
            return
        self._transition(StreamState.CLOSING)
        try:
            if self.is_open():
                await self._ws.send(json.dumps(CLOSE_COMMAND))
            await self._ws.close()
        except ConnectionClosed as e:
            self.logger.log_debug(f"close handshake interrupted: {e}")
        finally:
            self._transition(StreamState.CLOSED)

    async def _open(self, stop_task: Optional[asyncio.Task]) -> Any:
        """
        握手和 stop_task 赛跑：握手没有超时，用户取消时中止握手并返回 None。
        握手失败抛 StreamError。
        """
        connect_task = asyncio.create_task(self._handshake(), name="event-stream-connect")
        try:
            if stop_task is not None:
                await asyncio.wait({connect_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
                if not connect_task.done():
                    self.logger.log_info("cancelled while connecting")
                    return None
            return await connect_task
        except (OSError, InvalidHandshake, InvalidURI) as e:
            self.on_error(e)
            self._transition(StreamState.CLOSED)
            raise StreamError(f"cannot connect to {self.url}: {e}") from e
        finally:
            if not connect_task.done():
                connect_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await connect_task

    async def _handshake(self) -> Any:
        return await self._connect(
            self.url,
            additional_headers={"authorization": f"Bearer {self.auth_key}"},
            open_timeout=None,  # 不设握手超时，卡住由用户 Ctrl+C
        )

    # === 事件处理（每个状态迁移一个 handler） ===

    def on_open(self) -> None:
        self._transition(StreamState.OPEN)
        self._print(f"Loaded {len(self.corpus)} game events")
        self._print(f"Connected - sending every {self.interval_ms}ms, Ctrl+C to stop")
        self._sender = asyncio.create_task(self._send_loop(), name="event-stream-send")

    def on_message(self, raw: Any) -> bool:
        """
        入站消息：非 JSON / 非对象直接丢弃；带 err 则错误计数 +1。
        返回是否计为错误。
        """
        try:
            msg = json.loads(raw)
        except (TypeError, ValueError):
            return False
        if not isinstance(msg, dict) or not msg.get("err"):
            return False

        self.stats.errors += 1
        if self.stats.errors <= self.max_error_prints:
            status = msg.get("status_code")
            self.logger.log_error(
                f"Server error: {msg['err']}" + (f" {status}" if status is not None else ""),
                exc_info=False,
            )
        return True

    def on_error(self, exc: BaseException) -> None:
        self.logger.log_error(f"WebSocket error: {exc}", exc_info=False)

    def on_close(self) -> None:
        self._stop_sending()
        if self.state is not StreamState.CLOSED:
            self._transition(StreamState.CLOSED)
        self.report()

    def report(self) -> None:
        """最终统计只输出一次"""
        if self._reported:
            return
        self._reported = True
        self._print("")
        self._print(self.stats.report())

    # === 内部 ===

    def _stop_sending(self) -> None:
        if self._sender is not None and not self._sender.done():
            self._sender.cancel()
        self._sender = None

    async def _send_loop(self) -> None:
        interval_s = self.interval_ms / 1000.0
        while True:
            await self._sleep(interval_s)
            if not self.is_open():
                self.logger.log_warning("connection not open, stop sending")
                return
            message = StateEventMessage(event=self.corpus.pick())
            try:
                await self._ws.send(json.dumps(message.to_wire()))
            except ConnectionClosed as e:
                self.logger.log_warning(f"send failed, connection closed: {e}")
                return
            self.stats.sent += 1

    async def _recv_loop(self) -> None:
        try:
            async for raw in self._ws:
                self.on_message(raw)
        except ConnectionClosed as e:
            self.on_error(e)


async def run_stream(client: EventStreamClient) -> StreamStats:
    """
    脚本入口用：注册 SIGINT/SIGTERM -> stop_evt，然后跑客户端直到关闭或取消。
    """
    stop_evt = asyncio.Event()
    loop = asyncio.get_running_loop()

    def _stop(*_):
        stop_evt.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(NotImplementedError):  # Windows 下不支持
            loop.add_signal_handler(sig, _stop)

    try:
        return await client.run(stop_evt)
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError):
                loop.remove_signal_handler(sig)
