"""Tests for session module."""
import json

import pytest

from dustsweeper.errors import PersistenceFailure
from dustsweeper.persistence import JsonFileStore, KeyValueStore, MemoryStore
from dustsweeper.session import GameSession


class _Clock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class _BrokenStore(KeyValueStore):
    def get(self, key):
        raise PersistenceFailure("blocked")

    def set(self, key, value):
        raise PersistenceFailure("blocked")

    def delete(self, key):
        raise PersistenceFailure("blocked")


def _messages(session: GameSession) -> list[str]:
    return [n.message for n in session.drain_notices()]


def test_first_click_awards_first_sweep():
    session = GameSession()
    session.click()
    assert session.state.currency(0) == 51.0
    assert "Achievement unlocked: First Sweep" in _messages(session)


def test_buy_tool_success_and_failure():
    session = GameSession()
    assert not session.buy_tool("basic")
    notices = session.drain_notices()
    assert notices[-1].message == "Not enough dust."
    assert notices[-1].level == "warn"

    session.state.currencies[0] = 20
    assert session.buy_tool("basic")
    messages = _messages(session)
    assert "Basic Sweeper upgraded to Lv.1." in messages
    assert "Achievement unlocked: Investor" in messages


def test_buy_upgrade():
    session = GameSession()
    session.state.currencies[0] = 12
    assert session.buy_upgrade("basic", "speed")
    assert "Speed upgrade applied." in _messages(session)
    assert not session.buy_upgrade("basic", "speed")


def test_unlock_zone_notices():
    session = GameSession()
    assert not session.unlock_zone()
    assert _messages(session) == ["You need more dust to unlock the next zone."]
    session.state.currencies[0] = 1000
    assert session.unlock_zone()
    assert "Unlocked Asteroid Belt!" in _messages(session)
    session.state.current_zone_index = 7
    assert not session.unlock_zone()
    assert _messages(session) == ["Already at the final zone."]


def test_prestige_failure_notice():
    session = GameSession()
    result = session.do_prestige()
    assert not result.success
    assert _messages(session) == ["Earn more dust before prestiging."]


def test_prestige_saves_immediately():
    store = MemoryStore()
    session = GameSession(store=store)
    session.state.lifetime_dust = 200_000
    result = session.do_prestige()
    assert result.success
    assert result.reward_amount == 1
    blob = json.loads(store.data["gds_save"])
    assert blob["prestige"] == 1
    assert blob["lifetimeDust"] == 0
    assert session.state.has_achievement("prestige_once")


def test_buy_prestige_upgrade():
    session = GameSession()
    assert not session.buy_prestige_upgrade("clickBoost")
    assert _messages(session) == ["Not enough prestige."]
    session.state.prestige = 3
    assert session.buy_prestige_upgrade("clickBoost")
    assert _messages(session) == ["Galactic Focus upgraded to Lv.1"]


def test_title_is_monotonic():
    session = GameSession()
    session.state.prestige = 25
    session.click()
    # The prestige achievements add five more points before the title check
    assert session.state.prestige == 30
    assert session.state.prestige_title_index == 3
    assert "Title earned: Nebula Warden" in _messages(session)
    session.state.prestige = 0
    session.click()
    assert session.state.prestige_title_index == 3


def test_tick_does_not_check_achievements():
    session = GameSession()
    session.state.currencies[0] = 100
    session.buy_tool("autoClicker")
    session.drain_notices()
    session.tick(1000)
    assert not session.state.has_achievement("thousand_dust")
    assert session.drain_notices() == []


def test_toggles():
    session = GameSession()
    assert session.toggle_bgm() is True
    assert session.toggle_click_sound() is False
    assert _messages(session) == ["BGM enabled.", "Click sound muted."]


def test_reset():
    session = GameSession()
    session.click()
    assert session.reset() is True
    assert session.state.total_clicks == 0
    assert session.state.achievements == {}


def test_reset_deletes_stored_save():
    store = MemoryStore()
    session = GameSession(store=store)
    for _ in range(10):
        session.click()
    session.save()
    session.reset()
    assert "gds_save" not in store.data
    assert session.load().found is False
    assert session.state.total_clicks == 0


def test_reset_delete_failure_becomes_notice():
    session = GameSession(store=_BrokenStore())
    session.click()
    session.drain_notices()
    assert session.reset() is False
    assert session.state.total_clicks == 0
    assert _messages(session) == ["Could not delete the old save."]


def test_save_recovers_corrupt_save_file(tmp_path):
    path = tmp_path / "save.json"
    path.write_text("{not json", encoding="utf-8")
    session = GameSession(store=JsonFileStore(path))
    assert session.load() is None
    session.click()
    assert session.save() is True
    other = GameSession(store=JsonFileStore(path))
    assert other.load().found is True
    assert other.state.total_clicks == 1


def test_save_and_load_with_offline_gain():
    clock = _Clock(1_000.0)
    store = MemoryStore()
    session = GameSession(store=store, clock=clock)
    session.state.currencies[0] = 100
    session.buy_tool("autoClicker")
    assert session.save()
    saved_multiplier = session.state.achievement_multiplier

    clock.now += 100
    restored = GameSession(store=store, clock=clock)
    result = restored.load()
    assert result.found
    assert result.offline_seconds == 100
    assert result.offline_gain == pytest.approx(100 * saved_multiplier)
    messages = _messages(restored)
    assert any(m.startswith("Idle gains: +") for m in messages)
    assert restored.state.last_update == int(clock.now * 1000)


def test_save_failure_becomes_notice():
    session = GameSession(store=_BrokenStore())
    assert session.save() is False
    notice = session.drain_notices()[-1]
    assert notice.message == "Save failed (storage full or blocked)."
    assert notice.level == "warn"


def test_load_failure_becomes_notice():
    session = GameSession(store=MemoryStore({"gds_save": "{oops"}))
    session.state.currencies[0] = 5
    assert session.load() is None
    assert session.state.currency(0) == 5
    assert _messages(session) == ["Load failed (corrupt or blocked storage)."]


def test_notices_are_bounded():
    session = GameSession(max_notices=3)
    for _ in range(10):
        session.buy_tool("basic")
    assert len(session.drain_notices()) == 3
