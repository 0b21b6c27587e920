# mydataclass/stream_event.py
"""
事件相关模型：
  - StreamEventRequest: POST /stream/event 的请求体（state / ask 两种）
  - StateEventResponse / AskEventResponse: 对应返回体
  - StateEventMessage: WebSocket 流模式下每次发送的消息
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, ClassVar, Dict, Any, List

from commons.base_dataclasses import BaseDataClass
from commons.normalizers import empty_to_none, strip_or_none

EVENT_KIND_STATE = "state"
EVENT_KIND_ASK = "ask"
EVENT_KINDS = (EVENT_KIND_STATE, EVENT_KIND_ASK)

# 取消时在本地 close 之前发给服务端的指令
CLOSE_COMMAND: Dict[str, str] = {"cmd": "close"}


def ensure_event_fields(row: dict) -> None:
    """按 event_kind 校验必填：state 需要 event；ask 需要 ask_text + npc_id。"""
    kind = row.get("event_kind")
    if kind not in EVENT_KINDS:
        raise ValueError(f"event_kind must be one of {EVENT_KINDS}, got {kind!r}")
    if not row.get("player_id") or not row.get("sim_id"):
        raise ValueError("player_id and sim_id are required")
    if kind == EVENT_KIND_STATE and not row.get("event"):
        raise ValueError("state event requires 'event'")
    if kind == EVENT_KIND_ASK:
        if not row.get("ask_text"):
            raise ValueError("ask event requires 'ask_text'")
        if not row.get("npc_id"):
            raise ValueError("ask event requires 'npc_id'")


@dataclass(slots=True)
class StreamEventRequest(BaseDataClass):
    """POST /stream/event 请求体；可选字段为 None 时不序列化（to_dict(drop_none=True)）。"""

    player_id: str
    sim_id: str
    event_kind: str
    event: Optional[str] = None      # state：事件描述
    event_id: Optional[str] = None   # state：可选，客户端指定事件 ID
    npc_id: Optional[str] = None     # ask：被提问的 NPC
    ask_text: Optional[str] = None   # ask：问题
    ask_id: Optional[str] = None     # ask：可选，客户端指定提问 ID

    CONVERTERS: ClassVar[Dict[str, Any]] = {
        "player_id": strip_or_none,
        "sim_id": strip_or_none,
        "event": strip_or_none,
        "event_id": strip_or_none,
        "npc_id": strip_or_none,
        "ask_text": strip_or_none,
        "ask_id": strip_or_none,
    }
    VALIDATORS: ClassVar[List] = [ensure_event_fields]

    @classmethod
    def state(cls, player_id: str, sim_id: str, event: str, event_id: str | None = None) -> "StreamEventRequest":
        return cls.from_dict({
            "player_id": player_id,
            "sim_id": sim_id,
            "event_kind": EVENT_KIND_STATE,
            "event": event,
            "event_id": event_id,
        })

    @classmethod
    def ask(
        cls,
        player_id: str,
        sim_id: str,
        ask_text: str,
        npc_id: str,
        ask_id: str | None = None,
    ) -> "StreamEventRequest":
        return cls.from_dict({
            "player_id": player_id,
            "sim_id": sim_id,
            "event_kind": EVENT_KIND_ASK,
            "ask_text": ask_text,
            "npc_id": npc_id,
            "ask_id": ask_id,
        })


@dataclass(slots=True)
class StateEventResponse(BaseDataClass):
    event_id: Optional[str] = None

    CONVERTERS: ClassVar[Dict[str, Any]] = {"event_id": empty_to_none}


@dataclass(slots=True)
class AskEventResponse(BaseDataClass):
    ask_id: Optional[str] = None
    response: Optional[str] = None  # NPC 的回答

    CONVERTERS: ClassVar[Dict[str, Any]] = {"ask_id": empty_to_none}


@dataclass(slots=True)
class StateEventMessage(BaseDataClass):
    """WebSocket 流模式消息：{"event_kind": "state", "event": "..."}，每次发送现建。"""

    event: str
    event_kind: str = EVENT_KIND_STATE

    def to_wire(self) -> Dict[str, str]:
        return {"event_kind": self.event_kind, "event": self.event}
