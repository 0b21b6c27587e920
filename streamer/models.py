# 数据模型
from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable


class StreamState(str, Enum):
    """
    连接状态机：CONNECTING -> OPEN -> CLOSING -> CLOSED
    CLOSED 为终态，不会回到 CONNECTING（无重连）。
    """
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSING = "closing"
    CLOSED = "closed"


# 允许的状态迁移；None 表示客户端刚创建
TRANSITIONS = {
    None: {StreamState.CONNECTING},
    StreamState.CONNECTING: {StreamState.OPEN, StreamState.CLOSED},
    StreamState.OPEN: {StreamState.CLOSING, StreamState.CLOSED},
    StreamState.CLOSING: {StreamState.CLOSED},
    StreamState.CLOSED: set(),
}


@dataclass
class StreamStats:
    """
    单次会话计数器：sent / errors 只增不减，进程内一个会话一份。
    clock 可注入，便于测试 elapsed / rate。
    """
    sent: int = 0
    errors: int = 0
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    started_at: float = field(default=0.0)

    def start(self) -> None:
        self.started_at = self.clock()

    @property
    def elapsed(self) -> float:
        return max(0.0, self.clock() - self.started_at)

    @property
    def rate(self) -> float:
        """每秒发送条数"""
        elapsed = self.elapsed
        return self.sent / elapsed if self.sent > 0 and elapsed > 0 else 0.0

    def report(self) -> str:
        return f"Stats: sent={self.sent} errors={self.errors} elapsed={self.elapsed:.1f}s rate={self.rate:.1f}/s"
