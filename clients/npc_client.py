# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import Iterable

from commons.base_client import ApiResult, BaseApiClient
from tools.config_loader import env, optional_env


class NpcClient(BaseApiClient):
    """
    NPC 增删改查：
    - create_npc: POST /npc
    - update_npc: PUT /npc/{npc_id}
    - list_npcs:  GET /simulation/{sim_id}/npcs
    - get_npc:    GET /npc/{npc_id}
    - delete_npc: DELETE /npc（body: npc_id，成功返回 204）
    全部使用 API_KEY。
    """

    @classmethod
    def from_env(cls, **kwargs) -> "NpcClient":
        return cls(
            base_url=env("BASE_URL"),
            api_key=env("API_KEY"),
            product=optional_env("PRODUCT"),
            **kwargs,
        )

    def create_npc(
        self,
        sim_id: str,
        npc_name: str,
        description: str,
        interests: Iterable[str],
    ) -> ApiResult:
        payload = {
            "sim_id": sim_id,
            "npc_name": npc_name,
            "description": description,
            "interests": list(interests),
        }
        self.logger.log_info(
            f"create npc | sim_id={sim_id} | name={npc_name} | interests={len(payload['interests'])}"
        )
        return self.post(self.url("npc"), payload)

    def update_npc(self, npc_id: str, description: str, interests: Iterable[str]) -> ApiResult:
        payload = {"description": description, "interests": list(interests)}
        return self.put(self.url("npc", npc_id), payload)

    def list_npcs(self, sim_id: str) -> ApiResult:
        return self.get(self.url("simulation", sim_id, "npcs"), empty_body=[])

    def get_npc(self, npc_id: str) -> ApiResult:
        return self.get(self.url("npc", npc_id))

    def delete_npc(self, npc_id: str) -> ApiResult:
        return self.delete(self.url("npc"), {"npc_id": npc_id})
