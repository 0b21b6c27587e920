from __future__ import annotations

from commons.base_client import ApiResult, BaseApiClient
from tools.config_loader import env, optional_env


class SimulationClient(BaseApiClient):
    """simulation（游戏世界）增删改查，全部使用 API_KEY。"""

    @classmethod
    def from_env(cls, **kwargs) -> "SimulationClient":
        return cls(
            base_url=env("BASE_URL"),
            api_key=env("API_KEY"),
            product=optional_env("PRODUCT"),
            **kwargs,
        )

    def create_simulation(self, name: str) -> ApiResult:
        return self.post(self.url("simulation"), {"name": name})

    def list_simulations(self) -> ApiResult:
        return self.get(self.url("simulation"), empty_body=[])

    def get_simulation(self, sim_id: str) -> ApiResult:
        return self.get(self.url("simulation", sim_id))

    def set_lore(self, sim_id: str, lore: str) -> ApiResult:
        """PUT /simulation/{sim_id}，只更新 lore"""
        return self.put(self.url("simulation", sim_id), {"lore": lore})

    def delete_simulation(self, sim_id: str) -> ApiResult:
        return self.delete(self.url("simulation"), {"sim_id": sim_id})
