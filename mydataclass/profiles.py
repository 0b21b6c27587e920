from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Dict, Any, List

from commons.base_dataclasses import BaseDataClass
from commons.normalizers import ensure_required, strip_or_none, to_str_list


@dataclass(slots=True)
class NpcProfile(BaseDataClass):
    """
    预设 NPC 档案（data/npc_interests.json 的一项）。
    create / update 时按 name 精确匹配，取 description + interests 作为请求体。
    """

    name: str
    description: str
    interests: List[str] = field(default_factory=list)

    CONVERTERS: ClassVar[Dict[str, Any]] = {
        "name": strip_or_none,
        "description": strip_or_none,  # 请求体里的 description 需要去首尾空白
        "interests": to_str_list,
    }
    VALIDATORS: ClassVar[List] = [ensure_required("name", "description")]


@dataclass(slots=True)
class LoreProfile(BaseDataClass):
    """预设 simulation 背景（data/simulation_lores.json 的一项）。"""

    name: str
    lore: str

    CONVERTERS: ClassVar[Dict[str, Any]] = {
        "name": strip_or_none,
        "lore": strip_or_none,
    }
    VALIDATORS: ClassVar[List] = [ensure_required("name", "lore")]
