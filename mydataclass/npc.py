# mydataclass/npc.py
"""
NPC 数据模型。
接口所有字段都可能缺失，统一用 None 表示“上游没给”。
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, ClassVar, Dict, Any

from commons.base_dataclasses import BaseDataClass
from commons.normalizers import empty_to_none, to_int_or_none


@dataclass(slots=True)
class NpcInfo(BaseDataClass):
    """
    NPC 信息（POST/PUT/GET /npc、GET /simulation/{sim_id}/npcs 的返回体）。
    字段说明：
      - npc_id: NPC 唯一标识
      - sim_id: 所属 simulation
      - owner_id: 所属账号
      - curr_interest_raw: 当前兴趣原文
      - curr_interest_emb: 当前兴趣向量（服务端编码后的字符串）
      - description: 描述
      - creation_time / update_time: 服务端时间戳（原样保存，不做秒/毫秒换算）
    """

    npc_id: Optional[str] = None
    sim_id: Optional[str] = None
    owner_id: Optional[str] = None
    curr_interest_raw: Optional[str] = None
    curr_interest_emb: Optional[str] = None
    description: Optional[str] = None
    creation_time: Optional[int] = None
    update_time: Optional[int] = None

    CONVERTERS: ClassVar[Dict[str, Any]] = {
        "npc_id": empty_to_none,
        "sim_id": empty_to_none,
        "owner_id": empty_to_none,
        "description": empty_to_none,
        "creation_time": to_int_or_none,
        "update_time": to_int_or_none,
    }

    def summary(self) -> Dict[str, Any]:
        """npc.py 多操作脚本只打印这几个字段"""
        return {
            "npc_id": self.npc_id,
            "sim_id": self.sim_id,
            "creation_time": self.creation_time,
            "update_time": self.update_time,
        }
