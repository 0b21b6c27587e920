from __future__ import annotations

import random
from typing import Optional, Sequence

from tools.presets import load_game_events


class EventCorpus:
    """
    流模式事件语料：每次 pick() 等概率随机取一条。
    rng 可注入（random.Random(seed)），测试时结果可复现。
    """

    def __init__(self, events: Sequence[str], rng: Optional[random.Random] = None):
        if not events:
            raise ValueError("event corpus is empty")
        self._events = list(events)
        self._rng = rng or random.Random()

    @classmethod
    def from_file(cls, filename: str = "game_events.json", *, seed: Optional[int] = None) -> "EventCorpus":
        return cls(load_game_events(filename), rng=random.Random(seed))

    def __len__(self) -> int:
        return len(self._events)

    def pick(self) -> str:
        return self._rng.choice(self._events)
