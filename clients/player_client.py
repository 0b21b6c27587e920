# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import Any, Dict, Optional

from commons.base_client import ApiResult, BaseApiClient
from tools.config_loader import env, optional_env


class PlayerClient(BaseApiClient):
    """
    player 会话：
    - create_player 走分发密钥 DISTR_KEY（给游戏客户端发 player 用）
    - list / get / delete 走 API_KEY
    """

    def __init__(self, *, distr_key: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.distr_key = distr_key

    @classmethod
    def from_env(cls, *, need_distr_key: bool = False, **kwargs) -> "PlayerClient":
        """need_distr_key=True 时 DISTR_KEY 缺失直接报错（create 场景）。"""
        return cls(
            base_url=env("BASE_URL"),
            api_key=env("API_KEY"),
            distr_key=env("DISTR_KEY") if need_distr_key else optional_env("DISTR_KEY"),
            product=optional_env("PRODUCT"),
            **kwargs,
        )

    def create_player(self, sim_id: str, expire_min: Optional[int] = None) -> ApiResult:
        payload: Dict[str, Any] = {"sim_id": sim_id}
        if expire_min is not None:
            payload["expire_min"] = expire_min
        self.logger.log_info(f"create player | sim_id={sim_id} | expire_min={expire_min}")
        return self.post(self.url("user", "player"), payload, auth_key=self.distr_key or self.api_key)

    def list_players(self, sim_id: str) -> ApiResult:
        return self.get(self.url("user", "players", query={"sim_id": sim_id}), empty_body=[])

    def get_player(self, player_id: str, sim_id: str) -> ApiResult:
        return self.get(self.url("user", "player", player_id, query={"sim_id": sim_id}))

    def delete_player(self, player_id: str, sim_id: str) -> ApiResult:
        return self.delete(self.url("user", "player"), {"player_id": player_id, "sim_id": sim_id})
