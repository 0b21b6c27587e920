import random

import pytest

from commons.exceptions import UsageError
from mydataclass.profiles import NpcProfile
from streamer.corpus import EventCorpus
from tools.presets import (
    GAME_STATE_CHANGE_INTERESTS_CORPUS,
    find_profile,
    load_game_events,
    load_lore_profiles,
    load_npc_profiles,
    pick_random_interests,
    profile_names,
)


def test_bundled_data_files_load():
    events = load_game_events()
    assert len(events) >= 10
    assert all(isinstance(e, str) and e.strip() for e in events)

    npcs = load_npc_profiles()
    assert "Village Blacksmith" in profile_names(npcs)
    assert all(p.description and p.interests for p in npcs)

    lores = load_lore_profiles()
    assert "Harbor City" in profile_names(lores)
    assert all(p.lore for p in lores)


def test_find_profile_exact_match():
    profiles = [
        NpcProfile(name="Harbor Merchant", description="sells things"),
        NpcProfile(name="Wandering Healer", description="heals"),
    ]
    assert find_profile(profiles, "Wandering Healer").description == "heals"


def test_find_profile_unknown_lists_options():
    profiles = [NpcProfile(name="Harbor Merchant", description="sells things")]
    with pytest.raises(UsageError) as ei:
        find_profile(profiles, "harbor merchant")  # 大小写敏感
    msg = str(ei.value)
    assert "Unknown profile: harbor merchant" in msg
    assert "- Harbor Merchant" in msg


@pytest.mark.parametrize("seed", range(20))
def test_pick_random_interests_count_and_uniqueness(seed):
    picked = pick_random_interests(rng=random.Random(seed))
    assert 13 <= len(picked) <= 17
    assert len(set(picked)) == len(picked)
    assert set(picked) <= set(GAME_STATE_CHANGE_INTERESTS_CORPUS)


def test_pick_random_interests_capped_by_corpus():
    assert sorted(pick_random_interests(10, corpus=["a", "b", "c"])) == ["a", "b", "c"]


def test_event_corpus_pick_and_seed():
    events = ["a storm rolls in", "the bridge collapsed", "a dragon is sighted"]
    c1 = EventCorpus(events, rng=random.Random(7))
    c2 = EventCorpus(events, rng=random.Random(7))
    picks = [c1.pick() for _ in range(10)]
    assert picks == [c2.pick() for _ in range(10)]
    assert set(picks) <= set(events)
    assert len(c1) == 3


def test_event_corpus_rejects_empty():
    with pytest.raises(ValueError):
        EventCorpus([])


def test_event_corpus_from_bundled_file():
    corpus = EventCorpus.from_file(seed=1)
    assert len(corpus) == len(load_game_events())
    assert corpus.pick() in load_game_events()
