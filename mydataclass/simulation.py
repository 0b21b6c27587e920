from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, ClassVar, Dict, Any

from commons.base_dataclasses import BaseDataClass
from commons.normalizers import empty_to_none, to_int_or_none


@dataclass(slots=True)
class SimulationInfo(BaseDataClass):
    """simulation（游戏世界 / 应用上下文）信息。"""

    sim_id: Optional[str] = None
    name: Optional[str] = None
    lore: Optional[str] = None
    creation_time: Optional[int] = None

    CONVERTERS: ClassVar[Dict[str, Any]] = {
        "sim_id": empty_to_none,
        "name": empty_to_none,
        "lore": empty_to_none,
        "creation_time": to_int_or_none,
    }
