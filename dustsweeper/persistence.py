"""Save-blob persistence.

The blob is a single JSON document stored under one key. Its camelCase field
names are fixed so existing saves load unchanged, including
pre-multi-currency saves that only carry ``dust``.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dustsweeper._types import parse_zone_key, zone_key
from dustsweeper.errors import PersistenceFailure
from dustsweeper.state import ProgressionState
from dustsweeper.tool import UPGRADE_TRACKS, ToolState

if TYPE_CHECKING:
    from dustsweeper.catalog import Catalog
    from dustsweeper.engine import EconomyEngine

logger = logging.getLogger(__name__)


# ── Stores ───────────────────────────────────────────────────────────


class KeyValueStore(ABC):
    """String key-value storage with one blob per key."""

    @abstractmethod
    def get(self, key: str) -> str | None: ...

    @abstractmethod
    def set(self, key: str, value: str) -> None: ...

    @abstractmethod
    def delete(self, key: str) -> None: ...


class MemoryStore(KeyValueStore):
    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """All keys in one JSON object on disk. Writes go through a temp file.

    Reads of a damaged document raise PersistenceFailure. Writes replace it
    with a fresh document instead.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise PersistenceFailure(f"Cannot read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PersistenceFailure(f"{self.path} does not hold a JSON object")
        return data

    def _read_for_write(self) -> dict[str, str]:
        try:
            return self._read_all()
        except PersistenceFailure as exc:
            logger.warning("Discarding unreadable store: %s", exc)
            return {}

    def _write_all(self, data: dict[str, str]) -> None:
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=directory, prefix=".save-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f)
                os.replace(tmp, self.path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as exc:
            raise PersistenceFailure(f"Cannot write {self.path}: {exc}") from exc

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_for_write()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        if not self.path.exists():
            return
        data = self._read_for_write()
        data.pop(key, None)
        self._write_all(data)


# ── Codec ────────────────────────────────────────────────────────────


def _get(data: dict[str, Any], key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None else value


def _zone_map(raw: Any) -> dict[int, float]:
    if not isinstance(raw, dict):
        return {}
    return {parse_zone_key(k): float(v) for k, v in raw.items() if v is not None}


def _is_unlocked(flag: Any) -> bool:
    if isinstance(flag, dict):
        return bool(flag.get("unlocked"))
    return flag is True


def encode_state(state: ProgressionState, catalog: Catalog, timestamp_ms: int) -> dict[str, Any]:
    """Build the save blob for *state*."""
    tools: dict[str, Any] = {}
    for tdef in catalog.tools:
        ts = state.tools[tdef.id]
        tools[tdef.id] = {
            "cost": ts.cost,
            "baseCost": tdef.base_cost,
            "increment": tdef.increment,
            "kind": tdef.kind.value,
            "level": ts.level,
            "currencyZone": ts.currency_zone,
            "upgrades": dict(ts.upgrades),
        }
    return {
        "dust": state.dust,
        "totalDustEarned": state.total_dust_earned,
        "lifetimeDust": state.lifetime_dust,
        "totalClicks": state.total_clicks,
        "prestige": state.prestige,
        "achievementMultiplier": state.achievement_multiplier,
        "currentZoneIndex": state.current_zone_index,
        "bgmOn": state.bgm_on,
        "clickSoundOn": state.click_sound_on,
        "tools": tools,
        "achievements": {aid: True for aid in sorted(state.unlocked_achievements())},
        "lastUpdate": timestamp_ms,
        "currencies": {zone_key(z): v for z, v in sorted(state.currencies.items())},
        "currencyPerSecond": {str(z): v for z, v in state.currency_per_second.items()},
        "prestigeUpgrades": dict(state.prestige_upgrades),
        "currencyClicks": {str(z): v for z, v in state.currency_clicks.items()},
        "prestigeTitleIndex": state.prestige_title_index,
    }


def decode_state(data: dict[str, Any], catalog: Catalog) -> ProgressionState:
    """Build a fresh state from a save blob. Missing fields keep their defaults."""
    st = ProgressionState(catalog)
    zone_count = len(catalog.zones)

    st.dust = float(_get(data, "dust", st.dust))
    st.total_dust_earned = float(_get(data, "totalDustEarned", st.total_dust_earned))
    st.lifetime_dust = float(_get(data, "lifetimeDust", st.lifetime_dust))
    st.total_clicks = int(_get(data, "totalClicks", st.total_clicks))
    st.prestige = int(_get(data, "prestige", st.prestige))
    title_index = int(_get(data, "prestigeTitleIndex", st.prestige_title_index))
    st.prestige_title_index = min(max(0, title_index), max(0, len(catalog.prestige_titles) - 1))
    st.achievement_multiplier = float(_get(data, "achievementMultiplier", st.achievement_multiplier))
    st.current_zone_index = min(
        max(0, int(_get(data, "currentZoneIndex", st.current_zone_index))), zone_count - 1
    )
    st.bgm_on = bool(_get(data, "bgmOn", st.bgm_on))
    st.click_sound_on = bool(_get(data, "clickSoundOn", st.click_sound_on))

    raw_achievements = _get(data, "achievements", {})
    if isinstance(raw_achievements, dict):
        st.achievements = {
            aid: True for aid, flag in raw_achievements.items() if _is_unlocked(flag)
        }

    raw_tools = _get(data, "tools", {})
    if isinstance(raw_tools, dict):
        for tdef in catalog.tools:
            incoming = raw_tools.get(tdef.id)
            if not isinstance(incoming, dict):
                continue
            ts = ToolState.fresh(tdef)
            ts.cost = float(_get(incoming, "cost", ts.cost))
            ts.level = int(_get(incoming, "level", ts.level))
            zone = int(_get(incoming, "currencyZone", tdef.currency_zone))
            ts.currency_zone = zone if 0 <= zone < zone_count else tdef.currency_zone
            upgrades = _get(incoming, "upgrades", {})
            if isinstance(upgrades, dict):
                for track in UPGRADE_TRACKS:
                    ts.upgrades[track] = int(_get(upgrades, track, 0))
            st.tools[tdef.id] = ts

    if data.get("currencies") is not None:
        st.currencies.update(_zone_map(data["currencies"]))
    elif st.dust > 0:
        # Pre-multi-currency save: the whole legacy total belongs to zone 0
        st.currencies[0] = st.currencies.get(0, 0.0) + st.dust
    for idx in range(zone_count):
        st.currencies.setdefault(idx, 0.0)

    st.currency_per_second = _zone_map(data.get("currencyPerSecond"))
    st.currency_clicks = _zone_map(data.get("currencyClicks"))

    raw_upgrades = _get(data, "prestigeUpgrades", {})
    if isinstance(raw_upgrades, dict):
        st.prestige_upgrades = {
            pid: int(level)
            for pid, level in raw_upgrades.items()
            if catalog.get_prestige_upgrade(pid) is not None and level is not None
        }

    last_update = data.get("lastUpdate")
    if last_update is not None:
        st.last_update = int(last_update)
    return st


# ── Adapter ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class LoadResult:
    """What a successful load did."""

    found: bool
    offline_seconds: float = 0.0
    offline_gain: float = 0.0


class Persistence:
    """Serializes an engine's state to a KeyValueStore under one key."""

    def __init__(self, store: KeyValueStore, key: str = "gds_save") -> None:
        self.store = store
        self.key = key

    def save(self, engine: EconomyEngine, timestamp_ms: int) -> None:
        """Write the blob. On failure the previously stored blob is untouched."""
        payload = encode_state(engine.state, engine.catalog, timestamp_ms)
        try:
            text = json.dumps(payload)
        except (TypeError, ValueError) as exc:
            raise PersistenceFailure(f"Cannot serialise save: {exc}") from exc
        try:
            self.store.set(self.key, text)
        except PersistenceFailure:
            raise
        except OSError as exc:
            raise PersistenceFailure(f"Cannot write save: {exc}") from exc
        logger.info("Saved game under %r", self.key)

    def clear(self) -> None:
        """Remove the stored blob, if any."""
        try:
            self.store.delete(self.key)
        except PersistenceFailure:
            raise
        except OSError as exc:
            raise PersistenceFailure(f"Cannot delete save: {exc}") from exc
        logger.info("Deleted save under %r", self.key)

    def load(self, engine: EconomyEngine, now_ms: int) -> LoadResult:
        """Replace the engine's state with the stored blob, then apply offline catch-up.

        On failure the engine's state is left exactly as it was.
        """
        try:
            raw = self.store.get(self.key)
        except PersistenceFailure:
            raise
        except OSError as exc:
            raise PersistenceFailure(f"Cannot read save: {exc}") from exc
        if raw is None:
            return LoadResult(found=False)

        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("save blob is not a JSON object")
            state = decode_state(data, engine.catalog)
        except (TypeError, ValueError, AttributeError) as exc:
            raise PersistenceFailure(f"Corrupt save: {exc}") from exc

        engine.state = state
        engine.recalc_production()

        offline_seconds = 0.0
        offline_gain = 0.0
        if data.get("lastUpdate") is not None:
            max_ms = engine.config.max_offline_seconds * 1000
            elapsed_ms = min(now_ms - state.last_update, max_ms)
            if elapsed_ms > 0:
                offline_seconds = elapsed_ms / 1000
                offline_gain = engine.apply_elapsed_time(offline_seconds)
                logger.debug(
                    "Offline catch-up: %.0fs -> %.2f dust", offline_seconds, offline_gain
                )
        state.last_update = now_ms
        logger.info("Loaded game from %r", self.key)
        return LoadResult(
            found=True, offline_seconds=offline_seconds, offline_gain=offline_gain
        )
