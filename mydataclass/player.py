from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, ClassVar, Dict, Any

from commons.base_dataclasses import BaseDataClass
from commons.normalizers import empty_to_none, to_int_or_none


@dataclass(slots=True)
class PlayerInfo(BaseDataClass):
    """
    player 会话信息（/user/player、/user/players 的返回体）。
    player 归属于某个 simulation，可带过期时间。
    """

    player_id: Optional[str] = None       # player ID
    owner_id: Optional[str] = None        # 所属账号
    sim_id: Optional[str] = None          # 所属 simulation
    created_on: Optional[int] = None      # 创建时间
    connected_from: Optional[str] = None  # 连接来源（IP 等）
    expires_on: Optional[int] = None      # 过期时间

    CONVERTERS: ClassVar[Dict[str, Any]] = {
        "player_id": empty_to_none,
        "owner_id": empty_to_none,
        "sim_id": empty_to_none,
        "connected_from": empty_to_none,
        "created_on": to_int_or_none,
        "expires_on": to_int_or_none,
    }
