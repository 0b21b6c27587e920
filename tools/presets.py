# tools/presets.py
"""
预设数据读取：
  - data/game_events.json      流模式随机事件语料（list[str]）
  - data/npc_interests.json    NPC 档案（list[NpcProfile]）
  - data/simulation_lores.json simulation 背景（list[LoreProfile]）
以及 create_npc 随机兴趣用的内置语料。
"""
from __future__ import annotations

import json
import os
import random
from typing import List, Optional, Sequence, TypeVar

from commons.exceptions import UsageError
from mydataclass.profiles import LoreProfile, NpcProfile
from tools.config_loader import PROJECT_ROOT

DATA_DIR = os.path.join(PROJECT_ROOT, "data")

T = TypeVar("T", NpcProfile, LoreProfile)

GAME_STATE_CHANGE_INTERESTS_CORPUS: Sequence[str] = (
    "day night cycle shifts affect patrols",
    "weather changes reduce long range visibility",
    "resource scarcity spikes change crafting priorities",
    "faction reputation shifts unlock hostile dialogue",
    "territory control flips alter spawn ownership",
    "quest branch outcomes reshape village behavior",
    "economy inflation raises merchant barter thresholds",
    "market volatility changes item rarity values",
    "seasonal biome transitions unlock migration routes",
    "enemy spawn surges trigger defensive formations",
    "boss phase transitions punish greedy attacks",
    "difficulty scaling thresholds alter damage windows",
    "party morale swings reduce combat coordination",
    "ally betrayal events change trust mechanics",
    "npc trust updates unlock secret interactions",
    "stealth detection changes force route adjustments",
    "combat stance changes alter stamina costs",
    "cooldown reset windows create burst opportunities",
    "buff stack decay weakens frontline pressure",
    "crowd panic spread changes evacuation paths",
    "city alert escalation increases guard density",
    "crime heat buildup triggers bounty hunters",
    "guard patrol shifts expose blind spots",
    "lockdown protocol activation blocks market access",
    "base defense integrity loss opens breaches",
    "structure damage stages impact repair costs",
    "repair state recovery restores turret accuracy",
    "fog of war reveals hidden ambushers",
    "checkpoint control flips open travel shortcuts",
    "portal cycle changes disrupt fast travel",
    "hazard zone expansion restricts safe routes",
    "radiation spikes force shelter prioritization",
    "corruption spread alters wildlife aggression patterns",
    "infection outbreak phases strain healing supplies",
    "energy grid overload events disable stations",
    "power restoration phases reboot security drones",
    "supply line disruptions starve frontline units",
    "convoy ambush outcomes shift regional morale",
    "diplomacy treaty status changes border access",
    "war declaration events trigger full mobilization",
    "ceasefire expiration reopens contested objectives",
    "siege progression stages weaken outer walls",
    "fortification breaches create new entry vectors",
    "loot tier unlocks improve drop quality",
    "crafting station upgrades shorten production times",
    "tech tree milestones unlock utility skills",
    "world event windows boost encounter density",
    "story chapter transitions change faction goals",
    "respawn timer changes punish reckless pushes",
    "permadeath flag toggles raise mission stakes",
)


def data_path(filename: str) -> str:
    return os.path.join(DATA_DIR, filename)


def load_json_data(filename: str):
    with open(data_path(filename), "r", encoding="utf-8") as f:
        return json.load(f)


def load_game_events(filename: str = "game_events.json") -> List[str]:
    events = load_json_data(filename)
    if not isinstance(events, list):
        raise ValueError(f"{filename} must contain a JSON list of strings")
    return [str(e) for e in events if str(e).strip()]


def load_npc_profiles(filename: str = "npc_interests.json") -> List[NpcProfile]:
    return NpcProfile.from_list(load_json_data(filename))


def load_lore_profiles(filename: str = "simulation_lores.json") -> List[LoreProfile]:
    return LoreProfile.from_list(load_json_data(filename))


def profile_names(profiles: Sequence[T]) -> List[str]:
    return [p.name for p in profiles]


def find_profile(profiles: Sequence[T], name: str) -> T:
    """按 name 精确匹配；找不到抛 UsageError（message 附带可选列表）。"""
    for p in profiles:
        if p.name == name:
            return p
    options = "\n".join(f"- {n}" for n in profile_names(profiles))
    raise UsageError(f"Unknown profile: {name}\nAvailable profiles:\n{options}")


def pick_random_interests(
    target_count: Optional[int] = None,
    *,
    corpus: Sequence[str] = GAME_STATE_CHANGE_INTERESTS_CORPUS,
    rng: Optional[random.Random] = None,
) -> List[str]:
    """
    从语料里不重复地随机挑 N 条兴趣；N 默认 13~17（约 15），且不超过语料总数。
    """
    rng = rng or random.Random()
    if target_count is None:
        target_count = 13 + rng.randint(0, 4)
    return rng.sample(list(corpus), min(target_count, len(corpus)))
