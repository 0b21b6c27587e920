from __future__ import annotations

from commons.base_client import ApiResult, BaseApiClient
from mydataclass.stream_event import StreamEventRequest
from tools.config_loader import env, optional_env


class EventClient(BaseApiClient):
    """
    单条事件：POST /stream/event
      - state：游戏状态变化
      - ask：向某个 NPC 提问
    使用 DISTR_KEY（实例化时作为默认 key 传入）。
    """

    @classmethod
    def from_env(cls, **kwargs) -> "EventClient":
        return cls(
            base_url=env("BASE_URL"),
            api_key=env("DISTR_KEY"),
            product=optional_env("PRODUCT"),
            **kwargs,
        )

    def send_event(self, request: StreamEventRequest) -> ApiResult:
        self.logger.log_info(
            f"send event | kind={request.event_kind} | player_id={request.player_id} | sim_id={request.sim_id}"
        )
        return self.post(self.url("stream", "event"), request.to_dict(drop_none=True))

    def send_state(self, player_id: str, sim_id: str, event: str, event_id: str | None = None) -> ApiResult:
        return self.send_event(StreamEventRequest.state(player_id, sim_id, event, event_id))

    def send_ask(
        self,
        player_id: str,
        sim_id: str,
        ask_text: str,
        npc_id: str,
        ask_id: str | None = None,
    ) -> ApiResult:
        return self.send_event(StreamEventRequest.ask(player_id, sim_id, ask_text, npc_id, ask_id))
